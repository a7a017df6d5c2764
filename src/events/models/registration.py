import typing as t
import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from common.models import TimeStampedModel

from .event import Event


def generate_registration_code() -> str:
    """A fresh 128-bit random registration code."""
    return str(uuid.uuid4())


class RegistrationQuerySet(models.QuerySet["Registration"]):
    def with_event(self) -> t.Self:
        return self.select_related("event")

    def with_user(self) -> t.Self:
        return self.select_related("user")

    def full(self) -> t.Self:
        return self.select_related("event", "user", "event__organizer")


class RegistrationManager(models.Manager["Registration"]):
    def get_queryset(self) -> RegistrationQuerySet:
        return RegistrationQuerySet(self.model, using=self._db)

    def with_event(self) -> RegistrationQuerySet:
        return self.get_queryset().with_event()

    def full(self) -> RegistrationQuerySet:
        return self.get_queryset().full()


class Registration(TimeStampedModel):
    """One user's seat at one event.

    The lifecycle only moves forward: registered, then verified at the gate,
    then certificate issued.
    """

    class Status(models.TextChoices):
        REGISTERED = "registered", "Registered"
        VERIFIED = "verified", "Verified"
        CERTIFICATE_ISSUED = "certificate_issued", "Certificate issued"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="registrations")
    student_name = models.CharField(max_length=255)
    register_no = models.CharField(max_length=64)
    department = models.CharField(max_length=255)
    reg_code = models.CharField(max_length=64, unique=True, default=generate_registration_code, editable=False)
    order_id = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    payment_id = models.CharField(max_length=255, null=True, blank=True, unique=True)
    amount_paid = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    verified = models.BooleanField(default=False, db_index=True)
    verified_at = models.DateTimeField(null=True, blank=True)
    certificate_issued_at = models.DateTimeField(null=True, blank=True)

    objects = RegistrationManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "user"], name="unique_registration_per_event_user"),
        ]
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Registration of {self.student_name} for {self.event.name}"

    @property
    def status(self) -> "Registration.Status":
        if self.certificate_issued_at is not None:
            return self.Status.CERTIFICATE_ISSUED
        if self.verified:
            return self.Status.VERIFIED
        return self.Status.REGISTERED

    @property
    def verification_url(self) -> str:
        """The link encoded in the registration's QR pass."""
        return f"{settings.PUBLIC_BASE_URL}/api/verify/{self.reg_code}"
