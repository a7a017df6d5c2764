"""Event-related schemas."""

import datetime
import typing as t
from decimal import Decimal
from uuid import UUID

from ninja import Schema
from pydantic import AwareDatetime, Field, model_validator

from common.schema import OneToOneFiftyString, StrippedString
from events.models import Event


class EventCreateSchema(Schema):
    name: OneToOneFiftyString
    date: datetime.date
    start_time: datetime.time | None = None
    end_time: datetime.time | None = None
    venue: OneToOneFiftyString
    description: StrippedString = ""
    max_seats: int = Field(0, ge=0, description="Maximum registrations. 0 means unlimited.")
    registration_fee: Decimal = Field(
        Decimal("0"), ge=0, max_digits=10, decimal_places=2, description="Fee in major units. 0 means free."
    )

    @model_validator(mode="after")
    def validate_times(self) -> t.Self:
        """End time must come after start time."""
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("End time must be after start time.")
        return self


class EventSchema(Schema):
    id: UUID
    name: str
    date: datetime.date
    start_time: datetime.time | None = None
    end_time: datetime.time | None = None
    venue: str
    description: str
    max_seats: int
    registration_fee: Decimal
    is_free: bool
    thumbnail: str | None = None
    organizer_name: str
    seats_left: int | None = None
    created_at: AwareDatetime | None = None

    @staticmethod
    def resolve_thumbnail(obj: Event) -> str | None:
        return obj.thumbnail.url if obj.thumbnail else None

    @staticmethod
    def resolve_organizer_name(obj: Event) -> str:
        return obj.organizer.get_display_name()

    @staticmethod
    def resolve_seats_left(obj: Event) -> int | None:
        return obj.seats_left()


class OrganizerEventSchema(EventSchema):
    registration_count: int

    @staticmethod
    def resolve_registration_count(obj: Event) -> int:
        return obj.used_seats()


class AdminEventSchema(OrganizerEventSchema):
    organizer_id: UUID
    organizer_email: str

    @staticmethod
    def resolve_organizer_email(obj: Event) -> str:
        return obj.organizer.email
