"""Password validation helpers."""

from django.contrib.auth.password_validation import validate_password as _default_validate_password
from django.core.exceptions import ValidationError
from ninja.errors import HttpError

from accounts.models import GatepassUser


def validate_password(password: str, user: GatepassUser | None = None) -> None:
    """Simple wrapper around Django's password validation."""
    try:
        _default_validate_password(password, user=user)
    except ValidationError as e:
        raise HttpError(400, e.messages[0])
