from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.account import AccountController
from accounts.controllers.auth import AuthController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers.admin import AdminController
from events.controllers.events import EventController
from events.controllers.organizer import OrganizerController
from events.controllers.public import GateController
from events.controllers.student import StudentController
from events.exceptions import RegistrationWorkflowError

from .exception_handlers import (
    handle_django_validation_error,
    handle_general_exception,
    handle_registration_workflow_error,
)

api = NinjaExtraAPI(
    title="Gatepass API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Gatepass event registration API {settings.VERSION}",
    app_name=f"gatepass-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.PUBLIC_BASE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    # Auth/Account controllers
    AuthController,
    AccountController,
    # Event controllers
    EventController,
    OrganizerController,
    StudentController,
    AdminController,
    GateController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    RegistrationWorkflowError: handle_registration_workflow_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
