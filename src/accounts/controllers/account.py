"""This module contains the controllers for user accounts."""

import typing as t

from ninja_extra import ControllerBase, api_controller, route

from accounts import schema
from accounts.models import GatepassUser
from common.authentication import AnyUserAuth


@api_controller("/account", tags=["Account"], auth=AnyUserAuth())
class AccountController(ControllerBase):
    @route.get("/me", response=schema.GatepassUserSchema, url_name="me")
    def me(self) -> GatepassUser:
        """Retrieve the authenticated user's profile, including their role."""
        return t.cast(GatepassUser, self.context.request.user)  # type: ignore[union-attr]
