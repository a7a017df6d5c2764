"""This module contains the controllers for the authentication app."""

from ninja_extra import api_controller, route, status
from ninja_jwt.controller import TokenObtainPairController

from accounts import schema
from accounts.models import GatepassUser
from accounts.service import account as account_service
from accounts.service import auth as auth_service
from common.throttling import AuthThrottle, UserRegistrationThrottle


@api_controller("/auth", tags=["Auth"], throttle=AuthThrottle())
class AuthController(TokenObtainPairController):
    @route.post(
        "/register",
        response={201: schema.GatepassUserSchema},
        url_name="register-account",
        throttle=UserRegistrationThrottle(),
    )
    def register(self, payload: schema.RegisterUserSchema) -> tuple[int, GatepassUser]:
        """Create a new student or organizer account.

        The email becomes the login name. Returns 400 "User exists" when the email is taken.
        Admin accounts cannot be created here.
        """
        user = account_service.register_user(payload)
        return status.HTTP_201_CREATED, user

    @route.post("/token", response=schema.LoginResponseSchema, url_name="token_obtain_pair")
    def obtain_token(self, payload: schema.LoginSchema) -> schema.LoginResponseSchema:  # type: ignore[override]
        """Authenticate with email and password to obtain JWT access/refresh tokens.

        The access token carries the user id and role. Use POST /auth/refresh with the
        refresh token to get a new access token once it expires.
        """
        user = auth_service.authenticate_user(payload.email, payload.password)
        return auth_service.get_token_pair_for_user(user)
