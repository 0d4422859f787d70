"""Tests for the Stripe adapter's webhook verification and checkout creation."""

import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
import stripe

from franchise.gateway import get_gateway, reset_gateway
from franchise.gateway.fake_adapter import FakeGateway, checkout_completed_payload
from franchise.gateway.port import WebhookSignatureError
from franchise.gateway.stripe_adapter import StripeGateway

SECRET = "whsec_test_secret"


def _sign(payload: bytes, secret: str = SECRET, timestamp: int | None = None) -> str:
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload.decode()}".encode()
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@pytest.fixture()
def gateway():
    return StripeGateway(api_key="sk_test_123", webhook_secret=SECRET, price_id="price_claim")


class TestConstructEvent:
    def test_valid_signature_parses_event(self, gateway):
        payload = checkout_completed_payload("cs_live_1", "brand-1", "acct-1", amount_total=9900)
        event = gateway.construct_event(payload, _sign(payload))
        assert event.type == "checkout.session.completed"
        assert event.data["id"] == "cs_live_1"
        assert event.data["metadata"]["brandId"] == "brand-1"

    def test_wrong_secret_rejected(self, gateway):
        payload = checkout_completed_payload("cs_live_2", "brand-1", "acct-1")
        with pytest.raises(WebhookSignatureError):
            gateway.construct_event(payload, _sign(payload, secret="whsec_other"))

    def test_tampered_body_rejected(self, gateway):
        payload = checkout_completed_payload("cs_live_3", "brand-1", "acct-1")
        header = _sign(payload)
        tampered = payload.replace(b"brand-1", b"brand-2")
        with pytest.raises(WebhookSignatureError):
            gateway.construct_event(tampered, header)

    def test_stale_timestamp_rejected(self, gateway):
        payload = checkout_completed_payload("cs_live_4", "brand-1", "acct-1")
        with pytest.raises(WebhookSignatureError):
            gateway.construct_event(payload, _sign(payload, timestamp=int(time.time()) - 3600))

    def test_missing_header_rejected(self, gateway):
        with pytest.raises(WebhookSignatureError):
            gateway.construct_event(b"{}", None)


class TestCreateCheckoutSession:
    def test_embedded_session_with_metadata(self, gateway, monkeypatch):
        captured = {}

        def fake_create(**kwargs):
            captured.update(kwargs)
            return SimpleNamespace(id="cs_live_9", client_secret="cs_live_9_secret")

        monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)

        session = gateway.create_checkout_session(
            brand_id="brand-1",
            brand_name="Lawn Pros",
            user_id="acct-1",
            user_email="owner@lawnpros.com",
            return_url="https://app.test/done",
        )

        assert session.session_id == "cs_live_9"
        assert session.client_secret == "cs_live_9_secret"
        assert captured["ui_mode"] == "embedded"
        assert captured["mode"] == "payment"
        assert captured["line_items"] == [{"price": "price_claim", "quantity": 1}]
        assert captured["metadata"] == {"brandId": "brand-1", "userId": "acct-1", "brandName": "Lawn Pros"}

    def test_missing_price_fails(self):
        gateway = StripeGateway(api_key="sk_test_123", webhook_secret=SECRET)
        with pytest.raises(RuntimeError):
            gateway.create_checkout_session("b", "B", "u", "u@example.com", "https://app.test")


class TestRegistry:
    def test_defaults_to_fake(self):
        assert isinstance(get_gateway(), FakeGateway)

    def test_stripe_when_configured(self, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
        monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", SECRET)
        reset_gateway()
        assert isinstance(get_gateway(), StripeGateway)

    def test_webhook_secret_alone_is_not_enough(self, monkeypatch):
        monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", SECRET)
        reset_gateway()
        assert isinstance(get_gateway(), FakeGateway)
