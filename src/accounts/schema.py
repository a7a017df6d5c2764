"""Schema for accounts module."""

import typing as t

from ninja import ModelSchema, Schema
from ninja_jwt.schema import TokenObtainPairOutputSchema
from pydantic import UUID4, EmailStr, Field, model_validator

from accounts.password_validation import validate_password
from common.schema import StrippedString

from .models import GatepassUser, Role


class GatepassUserSchema(ModelSchema):
    id: UUID4
    email: str
    name: str
    role: Role
    display_name: str

    class Meta:
        model = GatepassUser
        fields = ["email", "name", "role", "is_active"]


class RegisterUserSchema(Schema):
    name: StrippedString = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=150)
    # Admins are only created through the admin site.
    role: t.Literal[Role.STUDENT, Role.ORGANIZER] = Role.STUDENT

    @model_validator(mode="after")
    def validate_password(self) -> t.Self:
        """Validate the password."""
        tmp_user = GatepassUser(email=self.email, username=self.email, name=self.name)
        validate_password(self.password, user=tmp_user)
        return self


class LoginSchema(Schema):
    email: EmailStr
    password: str


class TokenUserSchema(Schema):
    id: UUID4
    role: Role


class LoginResponseSchema(TokenObtainPairOutputSchema):
    user: TokenUserSchema
