"""Payment gateway bridge.

Creates orders through the Razorpay SDK and checks the HMAC proof the hosted
checkout hands back to the client once a payment is captured:

    signature = hex(HMAC-SHA256(key_secret, f"{order_id}|{payment_id}"))

The registration workflow only talks to the ``PaymentGateway`` protocol, so
tests substitute a double instead of reaching the network.
"""

import typing as t
from dataclasses import dataclass, field
from functools import lru_cache

import razorpay
import requests
import structlog
from django.conf import settings
from razorpay.errors import BadRequestError, GatewayError, ServerError, SignatureVerificationError

from events.exceptions import PaymentGatewayError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GatewayOrder:
    """An order as acknowledged by the gateway."""

    order_id: str
    amount: int
    currency: str
    receipt: str | None = None
    raw: dict[str, t.Any] = field(default_factory=dict, compare=False, repr=False)


class PaymentGateway(t.Protocol):
    """Protocol for payment gateways backing paid registrations."""

    key_id: str

    def create_order(
        self, *, amount: int, currency: str, receipt: str, notes: dict[str, str] | None = None
    ) -> GatewayOrder:
        """Create an order for ``amount`` minor currency units.

        Raises:
            PaymentGatewayError: If the gateway is unreachable or rejects the order.
        """
        ...

    def verify_signature(self, *, order_id: str, payment_id: str, signature: str) -> bool:
        """Whether ``signature`` proves that ``payment_id`` was captured for ``order_id``."""
        ...


class RazorpayGateway:
    """Razorpay Orders API through the official SDK."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        *,
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            key_id: Public key id, also handed to the hosted checkout.
            key_secret: Shared secret. Authenticates API calls and keys payment signatures.
            base_url: API root override. The SDK default is used when None.
            timeout: Seconds to wait for the gateway.
        """
        self.key_id = key_id
        self.timeout = timeout
        options = {"base_url": base_url} if base_url else {}
        self.client = razorpay.Client(auth=(key_id, key_secret), **options)

    @classmethod
    def from_settings(cls) -> "RazorpayGateway":
        return cls(
            settings.RAZORPAY_KEY_ID,
            settings.RAZORPAY_KEY_SECRET,
            base_url=settings.RAZORPAY_API_BASE_URL or None,
            timeout=settings.PAYMENT_GATEWAY_TIMEOUT_SECONDS,
        )

    def create_order(
        self, *, amount: int, currency: str, receipt: str, notes: dict[str, str] | None = None
    ) -> GatewayOrder:
        """Create an order with the gateway.

        Raises:
            PaymentGatewayError: On transport errors, rejected orders or malformed bodies.
        """
        data = {"amount": amount, "currency": currency, "receipt": receipt, "notes": notes or {}}
        try:
            body = self.client.order.create(data=data, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("payment_order_request_error", receipt=receipt, error=str(e))
            raise PaymentGatewayError() from e
        except (BadRequestError, GatewayError, ServerError) as e:
            logger.warning("payment_order_rejected", receipt=receipt, error=str(e))
            raise PaymentGatewayError() from e

        try:
            order = GatewayOrder(
                order_id=str(body["id"]),
                amount=int(body["amount"]),
                currency=str(body["currency"]),
                receipt=body.get("receipt"),
                raw=body,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("payment_order_malformed_response", receipt=receipt, body=str(body)[:200])
            raise PaymentGatewayError() from e

        logger.info("payment_order_created", order_id=order.order_id, amount=order.amount, currency=order.currency)
        return order

    def verify_signature(self, *, order_id: str, payment_id: str, signature: str) -> bool:
        """Constant-time comparison against the expected signature, done by the SDK."""
        if not signature.isascii():
            return False
        try:
            self.client.utility.verify_payment_signature(
                {
                    "razorpay_order_id": order_id,
                    "razorpay_payment_id": payment_id,
                    "razorpay_signature": signature,
                }
            )
        except SignatureVerificationError:
            return False
        return True


@lru_cache(maxsize=1)
def get_payment_gateway() -> PaymentGateway:
    """Return the process-wide gateway built from settings."""
    return RazorpayGateway.from_settings()
