import typing as t

import pytest
import structlog
from django.http import HttpRequest, HttpResponse
from django.test import RequestFactory

from common.middleware import StructlogContextMiddleware


@pytest.fixture
def captured() -> dict[str, t.Any]:
    return {}


@pytest.fixture
def middleware(captured: dict[str, t.Any]) -> StructlogContextMiddleware:
    def view(request: HttpRequest) -> HttpResponse:
        captured.update(structlog.contextvars.get_contextvars())
        return HttpResponse("ok")

    return StructlogContextMiddleware(view)


def test_binds_request_context(middleware: StructlogContextMiddleware, captured: dict[str, t.Any]) -> None:
    request = RequestFactory().get("/api/verify/abc", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1")

    response = middleware(request)

    assert captured["path"] == "/api/verify/abc"
    assert captured["method"] == "GET"
    assert captured["ip_address"] == "203.0.113.9"
    assert response["X-Request-ID"] == captured["request_id"]
    assert structlog.contextvars.get_contextvars() == {}


def test_reuses_incoming_request_id(middleware: StructlogContextMiddleware, captured: dict[str, t.Any]) -> None:
    request = RequestFactory().get("/", HTTP_X_REQUEST_ID="req-123")

    response = middleware(request)

    assert captured["request_id"] == "req-123"
    assert response["X-Request-ID"] == "req-123"


def test_disabled(settings: t.Any, middleware: StructlogContextMiddleware, captured: dict[str, t.Any]) -> None:
    settings.ENABLE_OBSERVABILITY = False

    response = middleware(RequestFactory().get("/"))

    assert "request_id" not in captured
    assert "X-Request-ID" not in response
