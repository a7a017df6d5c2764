"""Events schema package.

Schemas are organized into modules that mirror the models package and re-exported here.
"""

from .event import AdminEventSchema, EventCreateSchema, EventSchema, OrganizerEventSchema
from .registration import (
    OrganizerRegistrationSchema,
    PaymentOrderSchema,
    PaymentVerificationSchema,
    RegistrationEligibilitySchema,
    RegistrationPassSchema,
    StudentRegistrationSchema,
)

__all__ = [
    "AdminEventSchema",
    "EventCreateSchema",
    "EventSchema",
    "OrganizerEventSchema",
    "OrganizerRegistrationSchema",
    "PaymentOrderSchema",
    "PaymentVerificationSchema",
    "RegistrationEligibilitySchema",
    "RegistrationPassSchema",
    "StudentRegistrationSchema",
]
