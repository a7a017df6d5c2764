import typing as t
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Count

from common.models import ExifStripMixin, TimeStampedModel

if t.TYPE_CHECKING:
    from accounts.models import GatepassUser


class EventQuerySet(models.QuerySet["Event"]):
    def with_organizer(self) -> t.Self:
        return self.select_related("organizer")

    def with_registration_count(self) -> t.Self:
        """Annotate each event with the number of committed registrations."""
        return self.annotate(registration_count=Count("registrations", distinct=True))

    def owned_by(self, user: "GatepassUser") -> t.Self:
        return self.filter(organizer=user)


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        """Get base queryset for events."""
        return EventQuerySet(self.model, using=self._db)

    def with_registration_count(self) -> EventQuerySet:
        return self.get_queryset().with_registration_count()

    def full(self) -> EventQuerySet:
        """Organizer joined and seat usage annotated, ready for serialization."""
        return self.get_queryset().with_organizer().with_registration_count()


class Event(ExifStripMixin, TimeStampedModel):
    IMAGE_FIELDS = ("thumbnail",)

    organizer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="organized_events")
    name = models.CharField(max_length=255, db_index=True)
    date = models.DateField(db_index=True)
    start_time = models.TimeField(null=True, blank=True)
    end_time = models.TimeField(null=True, blank=True)
    venue = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    max_seats = models.PositiveIntegerField(default=0, help_text="Maximum number of registrations. 0 means unlimited.")
    thumbnail = models.ImageField(upload_to="event-thumbnails/", null=True, blank=True)
    registration_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Fee in major currency units. 0 means the event is free.",
    )

    objects = EventManager()

    class Meta:
        ordering = ["date", "start_time"]
        indexes = [
            models.Index(fields=["organizer", "date"], name="idx_event_organizer_date"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.date})"

    def clean(self) -> None:
        """Validate the schedule."""
        super().clean()
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise DjangoValidationError({"end_time": "End time must be after start time."})

    @property
    def is_free(self) -> bool:
        return self.registration_fee <= 0

    @property
    def is_unlimited(self) -> bool:
        return self.max_seats == 0

    @property
    def fee_minor_units(self) -> int:
        """Registration fee in the smallest currency unit (paise for INR), rounded half up."""
        return int((Decimal(self.registration_fee) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def used_seats(self) -> int:
        """Committed registrations. Uses the queryset annotation when present."""
        annotated = getattr(self, "registration_count", None)
        if annotated is not None:
            return int(annotated)
        return self.registrations.count()

    def seats_left(self) -> int | None:
        """Remaining seats, or None for unlimited events."""
        if self.is_unlimited:
            return None
        return max(self.max_seats - self.used_seats(), 0)
