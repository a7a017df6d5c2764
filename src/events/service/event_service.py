import structlog
from django.conf import settings
from django.core.files import File
from django.core.files.storage import default_storage
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import GatepassUser
from common.utils import file_size_mb
from events.models import Event
from events.schema import EventCreateSchema

logger = structlog.get_logger(__name__)


def create_event(organizer: GatepassUser, payload: EventCreateSchema) -> Event:
    """Create an event owned by ``organizer``."""
    event = Event.objects.create(organizer=organizer, **payload.model_dump())
    logger.info(
        "event_created", event_id=str(event.pk), organizer_id=str(organizer.pk), fee=str(event.registration_fee)
    )
    return event


@transaction.atomic
def set_thumbnail(event: Event, file: File) -> Event:  # type: ignore[type-arg]
    """Replace the event thumbnail. EXIF metadata is stripped on save.

    The previous file is removed from storage only once the new one is committed.

    Raises:
        HttpError: The file is larger than MAX_THUMBNAIL_SIZE_MB.
        ValidationError: The file is not a valid image. The current thumbnail is kept.
    """
    if file_size_mb(file) > settings.MAX_THUMBNAIL_SIZE_MB:
        raise HttpError(
            400, str(_("Thumbnail must be at most {size} MB.")).format(size=settings.MAX_THUMBNAIL_SIZE_MB)
        )
    event = Event.objects.select_for_update().get(pk=event.pk)
    old_name = event.thumbnail.name if event.thumbnail else None
    event.thumbnail = file
    event.save()
    if old_name and old_name != event.thumbnail.name:
        transaction.on_commit(lambda: _delete_stored_file(old_name))
    logger.info("event_thumbnail_updated", event_id=str(event.pk))
    return event


def _delete_stored_file(name: str) -> None:
    try:
        default_storage.delete(name)
    except OSError:
        logger.warning("stored_file_delete_failed", name=name, exc_info=True)


@transaction.atomic
def delete_event(event: Event) -> None:
    """Delete the event together with all of its registrations."""
    event_id = str(event.pk)
    registrations = event.registrations.count()
    thumbnail_name = event.thumbnail.name if event.thumbnail else None
    event.delete()
    if thumbnail_name:
        transaction.on_commit(lambda: _delete_stored_file(thumbnail_name))
    logger.info("event_deleted", event_id=event_id, registrations_deleted=registrations)
