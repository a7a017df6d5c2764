import datetime
import hashlib
import hmac
import typing as t
from decimal import Decimal

import pytest
from django.utils import timezone
from pytest import MonkeyPatch

from accounts.models import GatepassUser
from events.models import Event, Registration
from events.service.payment_gateway import RazorpayGateway

GATEWAY_KEY_ID = "rzp_test_key"
GATEWAY_SECRET = "test_secret"


def sign(order_id: str, payment_id: str) -> str:
    """The signature the hosted checkout would hand back for a captured payment."""
    return hmac.new(GATEWAY_SECRET.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


def payment_payload(
    event: Event, *, order_id: str = "order_TEST1", payment_id: str = "pay_TEST1", **overrides: t.Any
) -> dict[str, t.Any]:
    """A verification body for a correctly paid registration, with optional overrides."""
    payload: dict[str, t.Any] = {
        "order_id": order_id,
        "payment_id": payment_id,
        "signature": sign(order_id, payment_id),
        "amount": event.fee_minor_units,
        "student_name": "Asha Rao",
        "register_no": "21CS042",
        "department": "Computer Science",
    }
    payload.update(overrides)
    return payload


def free_payload(**overrides: t.Any) -> dict[str, t.Any]:
    payload: dict[str, t.Any] = {
        "signature": "FREE",
        "student_name": "Asha Rao",
        "register_no": "21CS042",
        "department": "Computer Science",
    }
    payload.update(overrides)
    return payload


class EventFactory:
    def __init__(self, organizer: GatepassUser) -> None:
        self.organizer = organizer
        self.counter = 0

    def __call__(self, **kwargs: t.Any) -> Event:
        self.counter += 1
        defaults: dict[str, t.Any] = {
            "organizer": self.organizer,
            "name": f"Tech Symposium {self.counter}",
            "date": timezone.localdate() + datetime.timedelta(days=7),
            "start_time": datetime.time(10, 0),
            "end_time": datetime.time(16, 0),
            "venue": "Main Auditorium",
            "description": "Talks and workshops.",
            "max_seats": 0,
            "registration_fee": Decimal("0"),
        }
        defaults.update(kwargs)
        return Event.objects.create(**defaults)


@pytest.fixture
def event_factory(organizer: GatepassUser) -> EventFactory:
    return EventFactory(organizer)


@pytest.fixture
def free_event(event_factory: EventFactory) -> Event:
    """Free, unlimited seats."""
    return event_factory(name="Open Seminar")


@pytest.fixture
def paid_event(event_factory: EventFactory) -> Event:
    """Fee 250.00, ten seats."""
    return event_factory(name="Hackathon", registration_fee=Decimal("250.00"), max_seats=10)


@pytest.fixture
def single_seat_event(event_factory: EventFactory) -> Event:
    """Free with exactly one seat."""
    return event_factory(name="Masterclass", max_seats=1)


@pytest.fixture
def registration(free_event: Event, student: GatepassUser) -> Registration:
    return Registration.objects.create(
        event=free_event,
        user=student,
        student_name="Asha Rao",
        register_no="21CS042",
        department="Computer Science",
        payment_id="FREE_EVENT_fixture",
        order_id="FREE_ORDER_fixture",
    )


@pytest.fixture
def verified_registration(registration: Registration) -> Registration:
    registration.verified = True
    registration.verified_at = timezone.now()
    registration.save()
    return registration


class GatewayRecorder:
    """Stands in for the SDK's order creation and records every order it is asked for."""

    def __init__(self) -> None:
        self.orders: list[dict[str, t.Any]] = []
        self.calls: list[dict[str, t.Any]] = []
        self.error: Exception | None = None

    def __call__(self, data: dict[str, t.Any], **options: t.Any) -> dict[str, t.Any]:
        self.calls.append(options)
        if self.error is not None:
            raise self.error
        self.orders.append(data)
        return {
            "id": f"order_{len(self.orders)}",
            "entity": "order",
            "amount": data["amount"],
            "currency": data["currency"],
            "receipt": data["receipt"],
            "status": "created",
        }


@pytest.fixture
def gateway_recorder() -> GatewayRecorder:
    return GatewayRecorder()


@pytest.fixture
def gateway(monkeypatch: MonkeyPatch, gateway_recorder: GatewayRecorder) -> RazorpayGateway:
    """A real SDK-backed gateway whose order creation never leaves the process."""
    gateway = RazorpayGateway(GATEWAY_KEY_ID, GATEWAY_SECRET, timeout=3.0)
    monkeypatch.setattr(gateway.client.order, "create", gateway_recorder)
    return gateway


@pytest.fixture
def use_gateway(monkeypatch: MonkeyPatch, gateway: RazorpayGateway) -> RazorpayGateway:
    """Route the API through the mocked gateway."""
    monkeypatch.setattr("events.service.registration_service.get_payment_gateway", lambda: gateway)
    return gateway
