import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja import File
from ninja.files import UploadedFile
from ninja_extra import (
    api_controller,
    route,
)
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from common.authentication import AnyUserAuth, OrganizerAuth
from common.schema import ErrorResponse
from common.throttling import PaymentThrottle, WriteThrottle
from events import models, schema
from events.service import event_service
from events.service.registration_service import RegistrationService, check_registration_allowed

from .permissions import IsEventOrganizer
from .user_aware_controller import UserAwareController


@api_controller("/events", tags=["Events"])
class EventController(UserAwareController):
    def get_queryset(self) -> models.event.EventQuerySet:
        """Events with organizer and seat usage loaded."""
        return models.Event.objects.full()

    def get_one(self, event_id: UUID) -> models.Event:
        """Wrapper helper."""
        return t.cast(models.Event, self.get_object_or_exception(self.get_queryset(), pk=event_id))

    @route.get("/", url_name="list_events", response=PaginatedResponseSchema[schema.EventSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["name", "venue", "description"])
    def list_events(self) -> QuerySet[models.Event]:
        """Browse all events, soonest first.

        Each event carries `seats_left` (null for unlimited events) and `is_free`.
        """
        return self.get_queryset()

    @route.get("/{event_id}", url_name="get_event", response=schema.EventSchema)
    def get_event(self, event_id: UUID) -> models.Event:
        """Retrieve one event by ID."""
        return self.get_one(event_id)

    @route.post(
        "/",
        url_name="create_event",
        response={201: schema.EventSchema},
        auth=OrganizerAuth(),
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, models.Event]:
        """Create an event owned by the calling organizer.

        `max_seats = 0` means unlimited and `registration_fee = 0` makes the event free.
        """
        event = event_service.create_event(self.user(), payload)
        return 201, self.get_one(event.pk)

    @route.post(
        "/{event_id}/thumbnail",
        url_name="upload_event_thumbnail",
        response={200: schema.EventSchema, 400: ErrorResponse},
        auth=OrganizerAuth(),
        permissions=[IsEventOrganizer()],
        throttle=WriteThrottle(),
    )
    def upload_thumbnail(self, event_id: UUID, thumbnail: File[UploadedFile]) -> models.Event:
        """Upload or replace the event thumbnail. EXIF metadata is removed."""
        event = self.get_one(event_id)
        event_service.set_thumbnail(event, thumbnail)
        return self.get_one(event_id)

    @route.delete(
        "/{event_id}",
        url_name="delete_event",
        response={204: None},
        auth=OrganizerAuth(),
        permissions=[IsEventOrganizer()],
        throttle=WriteThrottle(),
    )
    def delete_event(self, event_id: UUID) -> tuple[int, None]:
        """Delete an event. All of its registrations go with it."""
        event_service.delete_event(self.get_one(event_id))
        return 204, None

    @route.get(
        "/{event_id}/eligibility",
        url_name="get_registration_eligibility",
        response=schema.RegistrationEligibilitySchema,
        auth=AnyUserAuth(),
    )
    def get_registration_eligibility(self, event_id: UUID) -> schema.RegistrationEligibilitySchema:
        """Check whether the caller could register right now.

        Runs the duplicate and seat checks without changing anything. `reason` explains a refusal.
        """
        eligibility = check_registration_allowed(self.get_one(event_id), self.user())
        return schema.RegistrationEligibilitySchema(allowed=eligibility.allowed, reason=eligibility.reason)

    @route.post(
        "/{event_id}/create-payment-order",
        url_name="create_payment_order",
        response={200: schema.PaymentOrderSchema, 400: ErrorResponse, 403: ErrorResponse, 500: ErrorResponse},
        auth=AnyUserAuth(),
        throttle=PaymentThrottle(),
    )
    def create_payment_order(self, event_id: UUID) -> schema.PaymentOrderSchema:
        """Open a gateway order for the event fee.

        Pass the returned `order_id`, `amount` and `key_id` to the hosted checkout. Nothing is
        stored yet, so this can be retried. Free events are refused: register them directly
        with the sentinel signature.
        """
        order = RegistrationService(event=self.get_one(event_id), user=self.user()).create_payment_order()
        return schema.PaymentOrderSchema(
            order_id=order.order_id, amount=order.amount, currency=order.currency, key_id=order.key_id
        )

    @route.post(
        "/{event_id}/verify-payment-and-register",
        url_name="verify_payment_and_register",
        response={200: schema.RegistrationPassSchema, 201: schema.RegistrationPassSchema, 400: ErrorResponse},
        auth=AnyUserAuth(),
        throttle=PaymentThrottle(),
    )
    def verify_payment_and_register(
        self, event_id: UUID, payload: schema.PaymentVerificationSchema
    ) -> tuple[int, schema.RegistrationPassSchema]:
        """Prove the payment and register.

        Paid events need the gateway's `payment_id`, `order_id` and `signature` plus the amount
        in minor units. Free events need only the sentinel signature. Returns 201 with the QR gate
        pass. Repeating a successful call with the same payment returns 200 and the same pass.
        """
        service = RegistrationService(event=self.get_one(event_id), user=self.user())
        outcome = service.verify_payment_and_register(payload)
        registration = outcome.registration
        return 201 if outcome.created else 200, schema.RegistrationPassSchema(
            reg_code=registration.reg_code,
            status=registration.status,
            qr_image=outcome.qr_image,
            pass_error=outcome.pass_error,
        )
