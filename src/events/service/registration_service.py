"""Seat guard, payment order creation and payment-verified registration.

The workflow for one (event, user) pair:

    duplicate check -> seat check -> [gateway order if the event is paid]
    -> signature + amount check -> duplicate check -> seat check -> insert -> QR pass

Both guard runs before the insert happen inside one transaction that holds a row
lock on the event, so concurrent attempts are serialized per event. The unique
constraints on (event, user) and on the payment id back the lock up.
"""

from dataclasses import dataclass
from decimal import Decimal

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils.translation import gettext_lazy as _

from accounts.models import GatepassUser
from events import schema
from events.exceptions import (
    AlreadyRegisteredError,
    EventFullError,
    FreeEventPaymentError,
    InvalidPaymentSignatureError,
    PaymentAlreadyUsedError,
    PaymentAmountMismatchError,
    PaymentIntegrityError,
    RegistrationWorkflowError,
)
from events.models import Event, Registration, RegistrationQuerySet, generate_registration_code
from events.service.payment_gateway import PaymentGateway, get_payment_gateway
from events.utils import create_registration_qr_data_url

logger = structlog.get_logger(__name__)

FREE_PAYMENT_PREFIX = "FREE_EVENT_"
FREE_ORDER_PREFIX = "FREE_ORDER_"


@dataclass(frozen=True)
class RegistrationEligibility:
    allowed: bool
    reason: str | None = None


@dataclass(frozen=True)
class PaymentOrder:
    order_id: str
    amount: int
    currency: str
    key_id: str


@dataclass(frozen=True)
class RegistrationOutcome:
    """A committed registration and its gate pass.

    ``created`` is False when a retry of an already committed payment returned the existing row.
    ``qr_image`` is None, with ``pass_error`` set, when the pass could not be rendered.
    """

    registration: Registration
    created: bool
    qr_image: str | None
    pass_error: str | None = None


def issue_pass(registration: Registration) -> tuple[str | None, str | None]:
    """Render the QR pass for a committed registration.

    The registration stands regardless of the outcome.

    Returns:
        (qr data URL, None) on success, (None, error message) on failure.
    """
    try:
        return create_registration_qr_data_url(registration), None
    except Exception:
        logger.exception("registration_pass_generation_failed", reg_code=registration.reg_code)
        return None, str(_("Registered, but pass generation failed."))


def check_registration_allowed(event: Event, user: GatepassUser) -> RegistrationEligibility:
    """Read-only run of the seat and duplicate guard."""
    try:
        RegistrationService(event=event, user=user).run_guard()
    except (AlreadyRegisteredError, EventFullError) as e:
        return RegistrationEligibility(allowed=False, reason=e.detail)
    return RegistrationEligibility(allowed=True)


class RegistrationService:
    def __init__(self, *, event: Event, user: GatepassUser, gateway: PaymentGateway | None = None) -> None:
        """Initialize the registration service."""
        self.event = event
        self.user = user
        self._gateway = gateway

    @property
    def gateway(self) -> PaymentGateway:
        if self._gateway is None:
            self._gateway = get_payment_gateway()
        return self._gateway

    # --- guard ---

    def _check_duplicate(self, event: Event) -> None:
        if Registration.objects.filter(event=event, user=self.user).exists():
            raise AlreadyRegisteredError()

    def _check_seats(self, event: Event) -> None:
        if event.is_unlimited:
            return
        used_seats = Registration.objects.filter(event=event).count()
        if used_seats >= event.max_seats:
            raise EventFullError()

    def run_guard(self, event: Event | None = None) -> None:
        """Duplicate check first, so a user's own retry is never counted against capacity."""
        event = event or self.event
        self._check_duplicate(event)
        self._check_seats(event)

    # --- payment order ---

    def create_payment_order(self) -> PaymentOrder:
        """Create a gateway order for the event fee. Nothing is stored locally.

        Raises:
            FreeEventPaymentError: The event is free.
            AlreadyRegisteredError: The user is already registered.
            EventFullError: No seats left.
            PaymentGatewayError: The gateway failed. Safe to retry.
        """
        if self.event.is_free:
            raise FreeEventPaymentError()
        self.run_guard()

        amount = self.event.fee_minor_units
        order = self.gateway.create_order(
            amount=amount,
            currency=settings.PAYMENT_CURRENCY,
            receipt=f"rcpt_{self.event.pk.hex[:16]}_{self.user.pk.hex[:16]}",
            notes={"event_id": str(self.event.pk), "user_id": str(self.user.pk)},
        )
        logger.info(
            "registration_payment_order_created",
            event_id=str(self.event.pk),
            user_id=str(self.user.pk),
            order_id=order.order_id,
            amount=amount,
        )
        return PaymentOrder(order_id=order.order_id, amount=amount, currency=order.currency, key_id=self.gateway.key_id)

    # --- verification and commit ---

    def _verify_free_claim(self, payload: schema.PaymentVerificationSchema) -> None:
        if payload.signature != settings.FREE_EVENT_SIGNATURE:
            raise InvalidPaymentSignatureError()

    def _verify_payment(self, payload: schema.PaymentVerificationSchema) -> None:
        """Signature first, then amount. Both fail closed."""
        if not payload.order_id or not payload.payment_id:
            raise InvalidPaymentSignatureError()
        if not self.gateway.verify_signature(
            order_id=payload.order_id, payment_id=payload.payment_id, signature=payload.signature
        ):
            if payload.signature == settings.FREE_EVENT_SIGNATURE:
                logger.warning("free_signature_on_paid_event", event_id=str(self.event.pk))
            raise InvalidPaymentSignatureError()
        if payload.amount != self.event.fee_minor_units:
            raise PaymentAmountMismatchError()

    def verify_payment_and_register(self, payload: schema.PaymentVerificationSchema) -> RegistrationOutcome:
        """Validate the payment proof and commit the registration.

        Free events only need the sentinel signature. Retrying a paid registration with the
        same payment id returns the registration committed by the first attempt.

        Raises:
            InvalidPaymentSignatureError: The signature does not match.
            PaymentAmountMismatchError: The claimed amount is not the event fee.
            PaymentAlreadyUsedError: The payment backs another registration.
            AlreadyRegisteredError: The user already has a different registration.
            EventFullError: The event filled up.
        """
        is_free = self.event.is_free
        try:
            if is_free:
                self._verify_free_claim(payload)
            else:
                self._verify_payment(payload)
        except PaymentIntegrityError as e:
            self._log_tampering(payload, e)
            raise

        try:
            registration, created = self._commit(payload, is_free=is_free)
        except RegistrationWorkflowError as e:
            if isinstance(e, PaymentIntegrityError):
                self._log_tampering(payload, e)
            elif not is_free:
                # No automatic refund. Support has to reconcile this one.
                logger.error(
                    "paid_but_not_registered",
                    event_id=str(self.event.pk),
                    user_id=str(self.user.pk),
                    order_id=payload.order_id,
                    payment_id=payload.payment_id,
                    reason=e.detail,
                )
            raise

        qr_image, pass_error = issue_pass(registration)
        return RegistrationOutcome(registration=registration, created=created, qr_image=qr_image, pass_error=pass_error)

    def _commit(self, payload: schema.PaymentVerificationSchema, *, is_free: bool) -> tuple[Registration, bool]:
        try:
            with transaction.atomic():
                locked_event = Event.objects.select_for_update().get(pk=self.event.pk)
                if existing := self._existing_for_payment(locked_event, payload, is_free=is_free):
                    return existing, False
                self.run_guard(locked_event)
                if not is_free:
                    self._check_payment_unused(payload)
                return self._insert(locked_event, payload, is_free=is_free), True
        except (IntegrityError, ValidationError) as e:
            # A concurrent request committed first and a unique constraint caught it.
            return self._resolve_conflict(payload, is_free=is_free, error=e), False

    def _check_payment_unused(self, payload: schema.PaymentVerificationSchema) -> None:
        if Registration.objects.filter(payment_id=payload.payment_id).exists():
            raise PaymentAlreadyUsedError()

    def _resolve_conflict(
        self, payload: schema.PaymentVerificationSchema, *, is_free: bool, error: IntegrityError | ValidationError
    ) -> Registration:
        """Map a unique constraint violation to the row that caused it.

        Raises:
            AlreadyRegisteredError: The user already holds a different registration.
            PaymentAlreadyUsedError: The payment backs someone else's registration.
        """
        if existing := self._existing_for_payment(self.event, payload, is_free=is_free):
            return existing
        if Registration.objects.filter(event=self.event, user=self.user).exists():
            raise AlreadyRegisteredError() from error
        if not is_free and Registration.objects.filter(payment_id=payload.payment_id).exists():
            raise PaymentAlreadyUsedError() from error
        raise error

    def _existing_for_payment(
        self, event: Event, payload: schema.PaymentVerificationSchema, *, is_free: bool
    ) -> Registration | None:
        if is_free or not payload.payment_id:
            return None
        existing = Registration.objects.filter(event=event, user=self.user, payment_id=payload.payment_id).first()
        if existing:
            logger.info("registration_retry_returned_existing", reg_code=existing.reg_code, event_id=str(event.pk))
        return existing

    def _insert(self, event: Event, payload: schema.PaymentVerificationSchema, *, is_free: bool) -> Registration:
        reg_code = generate_registration_code()
        if is_free:
            payment_id = f"{FREE_PAYMENT_PREFIX}{reg_code}"
            order_id = f"{FREE_ORDER_PREFIX}{reg_code}"
            amount_paid = Decimal("0")
        else:
            payment_id = payload.payment_id
            order_id = payload.order_id
            amount_paid = event.registration_fee
        registration = Registration.objects.create(
            event=event,
            user=self.user,
            student_name=payload.student_name,
            register_no=payload.register_no,
            department=payload.department,
            reg_code=reg_code,
            order_id=order_id,
            payment_id=payment_id,
            amount_paid=amount_paid,
        )
        logger.info(
            "registration_created",
            reg_code=registration.reg_code,
            event_id=str(event.pk),
            user_id=str(self.user.pk),
            free=is_free,
        )
        return registration

    def _log_tampering(self, payload: schema.PaymentVerificationSchema, error: PaymentIntegrityError) -> None:
        logger.warning(
            "payment_tampering_suspected",
            reason=error.detail,
            event_id=str(self.event.pk),
            user_id=str(self.user.pk),
            order_id=payload.order_id,
            payment_id=payload.payment_id,
            claimed_amount=payload.amount,
            expected_amount=self.event.fee_minor_units,
        )


def get_registration_pass(reg_code: str, user: GatepassUser) -> tuple[Registration, str | None, str | None]:
    """Re-issue the QR pass for one of the user's own registrations.

    Raises:
        Registration.DoesNotExist: Unknown code or not the caller's registration.
    """
    registration = Registration.objects.with_event().get(reg_code=reg_code, user=user)
    qr_image, pass_error = issue_pass(registration)
    return registration, qr_image, pass_error


def registrations_for_user(user: GatepassUser) -> RegistrationQuerySet:
    return Registration.objects.with_event().filter(user=user).order_by("-created_at")
