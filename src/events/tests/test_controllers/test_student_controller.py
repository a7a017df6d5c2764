from unittest.mock import patch

import pytest
from django.test.client import Client
from django.urls import reverse

from events.models import Registration

pytestmark = pytest.mark.django_db


def test_list_my_registrations(student_client: Client, registration: Registration) -> None:
    response = student_client.get(reverse("api:list_my_registrations"))

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    [item] = data["results"]
    assert item["reg_code"] == registration.reg_code
    assert item["event_name"] == registration.event.name
    assert item["venue"] == registration.event.venue
    assert item["status"] == "registered"


def test_registrations_are_private(other_student_client: Client, registration: Registration) -> None:
    response = other_student_client.get(reverse("api:list_my_registrations"))

    assert response.json()["count"] == 0


def test_organizer_can_list_own_registrations(organizer_client: Client) -> None:
    response = organizer_client.get(reverse("api:list_my_registrations"))

    assert response.status_code == 200
    assert response.json()["count"] == 0


def test_get_pass(student_client: Client, registration: Registration) -> None:
    url = reverse("api:get_registration_pass", kwargs={"reg_code": registration.reg_code})

    response = student_client.get(url)

    assert response.status_code == 200
    data = response.json()
    assert data["reg_code"] == registration.reg_code
    assert data["qr_image"].startswith("data:image/png;base64,")
    assert data["pass_error"] is None


def test_get_pass_reports_render_failure(student_client: Client, registration: Registration) -> None:
    url = reverse("api:get_registration_pass", kwargs={"reg_code": registration.reg_code})

    with patch("events.service.registration_service.create_registration_qr_data_url", side_effect=ValueError):
        response = student_client.get(url)

    assert response.status_code == 200
    assert response.json()["qr_image"] is None
    assert response.json()["pass_error"] == "Registered, but pass generation failed."


def test_cannot_fetch_someone_elses_pass(other_student_client: Client, registration: Registration) -> None:
    url = reverse("api:get_registration_pass", kwargs={"reg_code": registration.reg_code})

    response = other_student_client.get(url)

    assert response.status_code == 404


def test_requires_authentication(client: Client) -> None:
    response = client.get(reverse("api:list_my_registrations"))

    assert response.status_code == 401
