"""Authentication service layer."""

import structlog
from django.contrib.auth import authenticate
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError
from ninja_jwt.tokens import RefreshToken

from accounts import schema
from accounts.models import GatepassUser

logger = structlog.get_logger(__name__)


def authenticate_user(email: str, password: str) -> GatepassUser:
    """Check credentials and return the matching active user.

    Raises:
        HttpError: 401 when the email is unknown, the password is wrong or the user is inactive.
    """
    user = authenticate(username=email.lower(), password=password)
    if user is None:
        logger.warning("login_failed", email=email)
        raise HttpError(401, str(_("Invalid credentials")))
    return user  # type: ignore[return-value]


def get_token_pair_for_user(user: GatepassUser) -> schema.LoginResponseSchema:
    """Get a token pair for the user.

    Both tokens carry the user id and role so clients can route without an extra call.
    """
    user.last_login = timezone.now()
    user.save(update_fields=["last_login"])

    logger.info("token_pair_generated", user_id=str(user.id), role=user.role)
    token = RefreshToken.for_user(user)
    token.payload.update(
        {
            "sub": str(user.id),
            "role": user.role,
            "email": user.email,
            "name": user.name,
        }
    )
    access = token.access_token  # type: ignore[attr-defined]
    return schema.LoginResponseSchema(
        username=user.username,
        access=str(access),
        refresh=str(token),
        user=schema.TokenUserSchema(id=user.id, role=user.role),
    )
