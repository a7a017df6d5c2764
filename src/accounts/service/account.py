"""Service layer for user accounts."""

import structlog
from django.db import IntegrityError, transaction
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts import schema
from accounts.models import GatepassUser

logger = structlog.get_logger(__name__)


def register_user(payload: schema.RegisterUserSchema) -> GatepassUser:
    """Register a new user.

    The lower-cased email doubles as the username, so the email must be unused.

    Args:
        payload (schema.RegisterUserSchema): The user data.

    Returns:
        GatepassUser: The newly created user.
    """
    email = payload.email.lower()
    logger.info("user_registration_started", email=email, role=payload.role)
    if GatepassUser.objects.filter(email__iexact=email).exists():
        logger.warning("user_registration_duplicate", email=email)
        raise HttpError(400, str(_("User exists")))
    try:
        with transaction.atomic():
            new_user = GatepassUser.objects.create_user(
                username=email,
                email=email,
                password=payload.password,
                name=payload.name,
                role=payload.role,
            )
    except IntegrityError as e:
        # Lost a race against a concurrent sign-up with the same email.
        logger.warning("user_registration_duplicate", email=email)
        raise HttpError(400, str(_("User exists"))) from e
    logger.info("user_registration_completed", user_id=str(new_user.id), email=new_user.email, role=new_user.role)
    return new_user
