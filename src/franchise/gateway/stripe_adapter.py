"""Stripe payment gateway adapter.

Webhook signatures are checked with the stripe-python SDK against the
endpoint's signing secret before the body is parsed. Checkout sessions are
created in embedded mode for the configured brand-claim price.
"""

import json

import stripe
import structlog

from franchise.gateway.port import CheckoutSession, GatewayEvent, PaymentGateway, WebhookSignatureError

logger = structlog.get_logger(__name__)

DEFAULT_TOLERANCE = 300  # seconds


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(
        self,
        api_key: str,
        webhook_secret: str,
        price_id: str | None = None,
        tolerance: int = DEFAULT_TOLERANCE,
    ) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.price_id = price_id
        self.tolerance = tolerance

    def construct_event(self, payload: bytes | str, signature: str | None) -> GatewayEvent:
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")
        if not self.webhook_secret:
            raise WebhookSignatureError("Webhook signing secret is not configured")

        raw = payload.decode("utf-8") if isinstance(payload, bytes) else payload
        try:
            stripe.WebhookSignature.verify_header(raw, signature, self.webhook_secret, self.tolerance)
        except stripe.SignatureVerificationError as exc:
            logger.warning("stripe_signature_rejected", reason=str(exc))
            raise WebhookSignatureError("Invalid webhook signature") from exc

        try:
            body = json.loads(raw)
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
        if not self.price_id:
            raise RuntimeError("STRIPE_BRAND_CLAIM_PRICE_ID is not configured")

        session = stripe.checkout.Session.create(
            api_key=self.api_key,
            ui_mode="embedded",
            mode="payment",
            line_items=[{"price": self.price_id, "quantity": 1}],
            metadata={"brandId": brand_id, "userId": user_id, "brandName": brand_name},
            customer_email=user_email,
            return_url=return_url,
        )
        logger.info("stripe_checkout_session_created", session_id=session.id, brand_id=brand_id)
        return CheckoutSession(session_id=session.id, client_secret=session.client_secret)
