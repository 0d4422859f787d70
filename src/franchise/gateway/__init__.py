"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing
- StripeGateway when STRIPE_SECRET_KEY and STRIPE_WEBHOOK_SECRET are set
"""

import os

from franchise.gateway.fake_adapter import FakeGateway
from franchise.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, choosing one from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        api_key = os.getenv("STRIPE_SECRET_KEY")
        webhook_secret = os.getenv("STRIPE_WEBHOOK_SECRET")
        if api_key and webhook_secret:
            from franchise.gateway.stripe_adapter import StripeGateway

            _current_gateway = StripeGateway(
                api_key=api_key,
                webhook_secret=webhook_secret,
                price_id=os.getenv("STRIPE_BRAND_CLAIM_PRICE_ID"),
            )
        else:
            _current_gateway = FakeGateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
