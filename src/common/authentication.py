"""Role-bound JWT authentication classes.

Usage:
    @api_controller("/organizer", auth=OrganizerAuth())
    class OrganizerController:
        ...
"""

from accounts.models import Role

from .auth_base import BaseJWTAuth


class AnyUserAuth(BaseJWTAuth):
    """Any authenticated user, whatever their role."""


class OrganizerAuth(BaseJWTAuth):
    def __init__(self) -> None:
        """Only organizers may pass."""
        super().__init__(roles=(Role.ORGANIZER,))


class AdminAuth(BaseJWTAuth):
    def __init__(self) -> None:
        """Only platform admins may pass."""
        super().__init__(roles=(Role.ADMIN,))
