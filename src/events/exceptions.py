from django.utils.translation import gettext_lazy as _


class RegistrationWorkflowError(Exception):
    """Base class for failures of the registration, attendance and certificate workflow.

    Each subclass carries the HTTP status it maps to and a short message safe to show to the caller.
    """

    status_code: int = 400
    default_detail: str = _("Registration failed.")  # type: ignore[assignment]

    def __init__(self, detail: str | None = None) -> None:
        """Use the class default message unless a specific one is given."""
        self.detail = str(detail or self.default_detail)
        super().__init__(self.detail)


class AlreadyRegisteredError(RegistrationWorkflowError):
    """Raised when the user already holds a registration for the event."""

    status_code = 400
    default_detail = _("Already registered")  # type: ignore[assignment]


class EventFullError(RegistrationWorkflowError):
    """Raised when the event has no seats left."""

    status_code = 403
    default_detail = _("Event is full")  # type: ignore[assignment]


class FreeEventPaymentError(RegistrationWorkflowError):
    """Raised when a payment order is requested for a free event."""

    status_code = 400
    default_detail = _("Free event, no payment required")  # type: ignore[assignment]


class PaymentIntegrityError(RegistrationWorkflowError):
    """A payment proof that does not hold up. Always logged as possible tampering."""

    status_code = 400


class InvalidPaymentSignatureError(PaymentIntegrityError):
    default_detail = _("Invalid payment signature")  # type: ignore[assignment]


class PaymentAmountMismatchError(PaymentIntegrityError):
    default_detail = _("Payment amount mismatch")  # type: ignore[assignment]


class PaymentAlreadyUsedError(PaymentIntegrityError):
    """Raised when a captured payment already backs a different registration."""

    default_detail = _("Payment already used")  # type: ignore[assignment]


class PaymentGatewayError(RegistrationWorkflowError):
    """Raised when the payment gateway cannot be reached or rejects the order."""

    status_code = 500
    default_detail = _("Cannot create payment order")  # type: ignore[assignment]


class AttendanceNotVerifiedError(RegistrationWorkflowError):
    status_code = 403
    default_detail = _("Attendance not verified")  # type: ignore[assignment]


class CertificateAlreadyIssuedError(RegistrationWorkflowError):
    status_code = 403
    default_detail = _("Certificate already issued")  # type: ignore[assignment]


class CertificateRenderError(RegistrationWorkflowError):
    """Raised when the certificate PDF cannot be produced. Issuance is rolled back."""

    status_code = 500
    default_detail = _("Certificate generation failed")  # type: ignore[assignment]
