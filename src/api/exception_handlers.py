"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from events.exceptions import RegistrationWorkflowError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    json_payload = None
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        exc_info=True,
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        GET=obfuscate(request.GET.dict()),
        json_payload=json_payload,
    )
    data = {"detail": "Internal Server Error."}
    if settings.DEBUG:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.error("VALIDATION_ERROR", exc_info=True, stack_info=True)
    error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    return Response(status=400, data={"errors": error_dict})


def handle_registration_workflow_error(request: HttpRequest, exc: RegistrationWorkflowError) -> Response:
    """Map a registration workflow failure to its status code and message."""
    if exc.status_code >= 500:
        logger.error("registration_workflow_failed", error=type(exc).__name__, detail=exc.detail, path=request.path)
    return Response(status=exc.status_code, data={"detail": exc.detail})


SENSITIVE_KEYS = {
    "password",
    "token",
    "access",
    "refresh",
    "authorization",
    "authentication",
    "signature",
    "razorpay_signature",
}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
