"""Registration, payment and attendance schemas."""

import datetime
from uuid import UUID

from ninja import Schema
from pydantic import AliasChoices, AwareDatetime, Field

from common.schema import OneToOneFiftyString, OneToSixtyFourString
from events.models import Registration


class RegistrationEligibilitySchema(Schema):
    allowed: bool
    reason: str | None = None


class PaymentOrderSchema(Schema):
    order_id: str
    amount: int = Field(..., description="Amount in minor currency units (paise for INR).")
    currency: str
    key_id: str = Field(..., description="Public gateway key for the hosted checkout.")


class PaymentVerificationSchema(Schema):
    """Proof of payment plus the registrant's details.

    The gateway field names from the hosted checkout callback are accepted as well.
    For free events send the sentinel signature and omit the payment fields.
    """

    payment_id: str | None = Field(
        None, max_length=255, validation_alias=AliasChoices("payment_id", "razorpay_payment_id")
    )
    order_id: str | None = Field(None, max_length=255, validation_alias=AliasChoices("order_id", "razorpay_order_id"))
    signature: str = Field(..., max_length=512, validation_alias=AliasChoices("signature", "razorpay_signature"))
    student_name: OneToOneFiftyString
    register_no: OneToSixtyFourString
    department: OneToOneFiftyString
    amount: int | None = Field(None, ge=0, description="Amount paid in minor currency units.")


class RegistrationPassSchema(Schema):
    reg_code: str
    status: Registration.Status
    qr_image: str | None = Field(None, description="PNG data URL encoding the verification link.")
    pass_error: str | None = None


class StudentRegistrationSchema(Schema):
    reg_code: str
    event_id: UUID
    event_name: str
    event_date: datetime.date
    venue: str
    student_name: str
    register_no: str
    department: str
    status: Registration.Status
    verified: bool
    verified_at: AwareDatetime | None = None
    certificate_issued_at: AwareDatetime | None = None
    created_at: AwareDatetime

    @staticmethod
    def resolve_event_name(obj: Registration) -> str:
        return obj.event.name

    @staticmethod
    def resolve_event_date(obj: Registration) -> datetime.date:
        return obj.event.date

    @staticmethod
    def resolve_venue(obj: Registration) -> str:
        return obj.event.venue


class OrganizerRegistrationSchema(Schema):
    id: UUID
    student_name: str
    register_no: str
    department: str
    user_email: str
    amount_paid: str
    status: Registration.Status
    verified: bool
    verified_at: AwareDatetime | None = None
    certificate_issued_at: AwareDatetime | None = None
    created_at: AwareDatetime

    @staticmethod
    def resolve_user_email(obj: Registration) -> str:
        return obj.user.email

    @staticmethod
    def resolve_amount_paid(obj: Registration) -> str:
        return str(obj.amount_paid)
