import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import GatepassUser
from events.models import Event, Registration
from events.tests.conftest import EventFactory

pytestmark = pytest.mark.django_db


def test_lists_only_own_events(
    organizer_client: Client, free_event: Event, paid_event: Event, other_organizer: GatepassUser
) -> None:
    EventFactory(other_organizer)(name="Someone else's event")

    response = organizer_client.get(reverse("api:list_organizer_events"))

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert {item["id"] for item in data["results"]} == {str(free_event.pk), str(paid_event.pk)}


def test_event_list_carries_registration_count(organizer_client: Client, registration: Registration) -> None:
    response = organizer_client.get(reverse("api:list_organizer_events"))

    [item] = response.json()["results"]
    assert item["registration_count"] == 1


def test_student_is_refused(student_client: Client) -> None:
    response = student_client.get(reverse("api:list_organizer_events"))

    assert response.status_code == 403


def test_list_registrations(organizer_client: Client, verified_registration: Registration) -> None:
    url = reverse("api:list_event_registrations", kwargs={"event_id": verified_registration.event_id})

    response = organizer_client.get(url)

    assert response.status_code == 200
    [item] = response.json()["results"]
    assert item["student_name"] == "Asha Rao"
    assert item["register_no"] == "21CS042"
    assert item["user_email"] == "student@college.test"
    assert item["status"] == "verified"
    assert item["verified"] is True
    assert item["certificate_issued_at"] is None


def test_search_registrations(
    organizer_client: Client, registration: Registration, other_student: GatepassUser
) -> None:
    Registration.objects.create(
        event=registration.event,
        user=other_student,
        student_name="Ravi Kumar",
        register_no="21ME007",
        department="Mechanical",
    )
    url = reverse("api:list_event_registrations", kwargs={"event_id": registration.event_id})

    response = organizer_client.get(url, {"search": "21ME"})

    assert [item["student_name"] for item in response.json()["results"]] == ["Ravi Kumar"]


def test_other_organizer_cannot_list_registrations(
    other_organizer_client: Client, registration: Registration
) -> None:
    url = reverse("api:list_event_registrations", kwargs={"event_id": registration.event_id})

    response = other_organizer_client.get(url)

    assert response.status_code == 403


def test_unknown_event(organizer_client: Client) -> None:
    url = reverse("api:list_event_registrations", kwargs={"event_id": "00000000-0000-0000-0000-000000000000"})

    response = organizer_client.get(url)

    assert response.status_code == 404
