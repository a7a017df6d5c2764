import hashlib
import hmac

import pytest
import requests
from pytest import MonkeyPatch
from razorpay.errors import BadRequestError

from events.exceptions import PaymentGatewayError
from events.service.payment_gateway import RazorpayGateway
from events.tests.conftest import GatewayRecorder


def test_verify_signature_accepts_hmac_sha256_of_order_and_payment() -> None:
    gateway = RazorpayGateway("key", "S")
    signature = hmac.new(b"S", b"O1|P1", hashlib.sha256).hexdigest()

    assert gateway.verify_signature(order_id="O1", payment_id="P1", signature=signature) is True


@pytest.mark.parametrize(
    "signature",
    [
        "",
        "FREE",
        "sigé",
        hmac.new(b"S", b"O1|P2", hashlib.sha256).hexdigest(),
        hmac.new(b"other", b"O1|P1", hashlib.sha256).hexdigest(),
        hmac.new(b"S", b"O1|P1", hashlib.sha256).hexdigest().upper(),
    ],
)
def test_verify_signature_rejects_anything_else(signature: str) -> None:
    gateway = RazorpayGateway("key", "S")

    assert gateway.verify_signature(order_id="O1", payment_id="P1", signature=signature) is False


def test_create_order(gateway: RazorpayGateway, gateway_recorder: GatewayRecorder) -> None:
    order = gateway.create_order(amount=25000, currency="INR", receipt="rcpt_1", notes={"event_id": "e1"})

    assert order.order_id == "order_1"
    assert order.amount == 25000
    assert order.currency == "INR"
    assert order.receipt == "rcpt_1"
    assert gateway_recorder.orders == [
        {"amount": 25000, "currency": "INR", "receipt": "rcpt_1", "notes": {"event_id": "e1"}}
    ]
    assert gateway_recorder.calls == [{"timeout": 3.0}]


def test_create_order_rejected_by_gateway(gateway: RazorpayGateway, gateway_recorder: GatewayRecorder) -> None:
    gateway_recorder.error = BadRequestError("The amount must be atleast INR 1.00")

    with pytest.raises(PaymentGatewayError) as exc_info:
        gateway.create_order(amount=0, currency="INR", receipt="rcpt_1")

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Cannot create payment order"


def test_create_order_network_error(gateway: RazorpayGateway, gateway_recorder: GatewayRecorder) -> None:
    gateway_recorder.error = requests.ConnectTimeout("timed out")

    with pytest.raises(PaymentGatewayError):
        gateway.create_order(amount=100, currency="INR", receipt="rcpt_1")


def test_create_order_malformed_response(monkeypatch: MonkeyPatch) -> None:
    gateway = RazorpayGateway("key", "secret")
    monkeypatch.setattr(gateway.client.order, "create", lambda data, **options: {"status": "ok"})

    with pytest.raises(PaymentGatewayError):
        gateway.create_order(amount=100, currency="INR", receipt="rcpt_1")
