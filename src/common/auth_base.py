"""Base authentication classes for Gatepass API."""

import typing as t

import structlog
from django.contrib.auth.models import AnonymousUser
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _
from ninja_extra import status
from ninja_extra.exceptions import APIException
from ninja_jwt.authentication import JWTAuth


class PermissionDenied(APIException):
    """Exception raised when user doesn't have required permissions."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Permission denied")


class BaseJWTAuth(JWTAuth):
    """Base JWT authentication with customizable permission checking.

    Beyond a valid token, the authenticated user can be required to hold one of
    a set of roles.
    """

    def __init__(
        self,
        *,
        roles: t.Iterable[str] = (),
    ) -> None:
        """Initialize the BaseJWTAuth authentication class.

        Args:
            roles: Roles allowed through. Empty means any authenticated user.
        """
        self.roles = frozenset(roles)
        super().__init__()

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate and verify user permissions.

        Args:
            request: The HTTP request object
            token: The JWT token string

        Returns:
            The authenticated user object if all checks pass

        Raises:
            PermissionDenied: If user doesn't meet required criteria
        """
        user = super().authenticate(request, token)

        if user and not isinstance(user, AnonymousUser):
            structlog.contextvars.bind_contextvars(user_id=str(user.id))

            if self.roles and getattr(user, "role", None) not in self.roles:
                raise PermissionDenied(str(_("You do not have the role required for this action.")))
        return user
