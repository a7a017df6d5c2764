import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import (
    api_controller,
    route,
)
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from common.authentication import OrganizerAuth
from events import models, schema

from .permissions import IsEventOrganizer
from .user_aware_controller import UserAwareController


@api_controller("/organizer", auth=OrganizerAuth(), tags=["Organizer"])
class OrganizerController(UserAwareController):
    def get_queryset(self) -> models.event.EventQuerySet:
        """Only the caller's own events."""
        return models.Event.objects.full().owned_by(self.user())

    @route.get(
        "/events",
        url_name="list_organizer_events",
        response=PaginatedResponseSchema[schema.OrganizerEventSchema],
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    def list_events(self) -> QuerySet[models.Event]:
        """List the events you organize, with their registration counts."""
        return self.get_queryset()

    @route.get(
        "/events/{event_id}/registrations",
        url_name="list_event_registrations",
        response=PaginatedResponseSchema[schema.OrganizerRegistrationSchema],
        permissions=[IsEventOrganizer()],
    )
    @paginate(PageNumberPaginationExtra, page_size=100)
    @searching(Searching, search_fields=["student_name", "register_no", "department", "user__email"])
    def list_registrations(self, event_id: UUID) -> QuerySet[models.Registration]:
        """List who registered for one of your events and whether they attended."""
        event = t.cast(models.Event, self.get_object_or_exception(models.Event.objects.all(), pk=event_id))
        return models.Registration.objects.with_user().filter(event=event).order_by("created_at")
