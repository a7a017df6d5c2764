"""Tests for the /version and /healthcheck endpoints and the API error handlers."""

import json
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest
from django.conf import settings
from django.core.management import call_command
from django.test.client import Client
from django.urls import reverse
from django.utils import timezone
from ninja_jwt.token_blacklist.models import OutstandingToken
from ninja_jwt.tokens import RefreshToken

from accounts.models import GatepassUser
from api.exception_handlers import obfuscate
from api.tasks import flush_expired_tokens
from events.models import Event

pytestmark = pytest.mark.django_db


def test_version(client: Client) -> None:
    """Test that /version returns the app version."""
    response = client.get(reverse("api:version"))

    assert response.status_code == 200
    assert response.json() == {"version": settings.VERSION}


def test_healthcheck(client: Client) -> None:
    response = client.get(reverse("api:healthcheck"))

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unexpected_errors_are_hidden(client: Client, free_event: Event) -> None:
    """Test that an unhandled exception becomes a generic 500."""
    with patch("events.controllers.events.EventController.get_one", side_effect=RuntimeError("boom")):
        response = client.get(reverse("api:get_event", kwargs={"event_id": free_event.pk}))

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error."


def test_obfuscate_hides_secrets() -> None:
    data = {"Authorization": "Bearer abc", "razorpay_signature": "f00", "student_name": "Asha Rao"}

    assert obfuscate(data) == {
        "Authorization": "********",
        "razorpay_signature": "********",
        "student_name": "Asha Rao",
    }


def test_flush_expired_tokens(student: GatepassUser) -> None:
    """Test that only expired outstanding tokens are removed."""
    RefreshToken.for_user(student)
    RefreshToken.for_user(student)
    expired = OutstandingToken.objects.first()
    assert expired is not None
    expired.expires_at = timezone.now() - timedelta(days=1)
    expired.save()

    flush_expired_tokens.delay()

    assert OutstandingToken.objects.count() == 1
    assert not OutstandingToken.objects.filter(pk=expired.pk).exists()


def test_dump_openapi(tmp_path: Path) -> None:
    output = tmp_path / "openapi.json"

    call_command("dump_openapi", output=output)

    schema = json.loads(output.read_text())
    assert "/api/events/{event_id}/verify-payment-and-register" in schema["paths"]
    assert "/api/verify/{reg_code}" in schema["paths"]
