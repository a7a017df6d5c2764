from .event import Event, EventQuerySet
from .registration import Registration, RegistrationQuerySet, generate_registration_code

__all__ = [
    "Event",
    "EventQuerySet",
    "Registration",
    "RegistrationQuerySet",
    "generate_registration_code",
]
