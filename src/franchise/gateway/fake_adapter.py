"""Configurable fake payment gateway for development and testing.

This adapter simulates the gateway without any external calls. Webhook
payloads are accepted when signed with ``test-signature``; everything else
is treated as forged.
"""

import json
from uuid import uuid4

from franchise.gateway.port import (
    CHECKOUT_SESSION_COMPLETED,
    CheckoutSession,
    GatewayEvent,
    PaymentGateway,
    WebhookSignatureError,
)

VALID_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Checkout unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Checkout unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def construct_event(self, payload: bytes | str, signature: str | None) -> GatewayEvent:
        self.calls.append({"method": "construct_event", "signature": signature})
        if signature != VALID_SIGNATURE:
            raise WebhookSignatureError("Invalid webhook signature")

        try:
            body = json.loads(payload)
        except ValueError as exc:
            raise WebhookSignatureError("Webhook payload is not valid JSON") from exc

        return GatewayEvent(
            id=body.get("id", ""),
            type=body.get("type", ""),
            data=(body.get("data") or {}).get("object") or {},
        )

    def create_checkout_session(
        self,
        brand_id: str,
        brand_name: str,
        user_id: str,
        user_email: str,
        return_url: str,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "brand_id": brand_id,
                "brand_name": brand_name,
                "user_id": user_id,
                "user_email": user_email,
                "return_url": return_url,
            }
        )
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)

        session_id = f"cs_test_{uuid4().hex[:24]}"
        return CheckoutSession(session_id=session_id, client_secret=f"{session_id}_secret")


def checkout_completed_payload(
    session_id: str,
    brand_id: str | None,
    user_id: str | None,
    brand_name: str = "",
    amount_total: int = 9900,
    currency: str = "usd",
    payment_intent: str | None = None,
    event_type: str = CHECKOUT_SESSION_COMPLETED,
) -> bytes:
    """Build a webhook body shaped like the gateway's checkout completion event."""
    metadata = {"brandName": brand_name}
    if brand_id is not None:
        metadata["brandId"] = brand_id
    if user_id is not None:
        metadata["userId"] = user_id

    event = {
        "id": f"evt_{uuid4().hex[:24]}",
        "type": event_type,
        "data": {
            "object": {
                "id": session_id,
                "object": "checkout.session",
                "amount_total": amount_total,
                "currency": currency,
                "payment_intent": payment_intent or f"pi_{uuid4().hex[:24]}",
                "metadata": metadata,
            }
        },
    }
    return json.dumps(event).encode()
