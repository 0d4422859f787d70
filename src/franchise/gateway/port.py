"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and StripeGateway
(production) without changing any domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class WebhookSignatureError(Exception):
    """The webhook payload could not be authenticated as coming from the gateway."""


@dataclass(frozen=True)
class GatewayEvent:
    """A verified, parsed webhook event."""

    id: str
    type: str
    data: dict = field(default_factory=dict)  # the event's ``data.object``


@dataclass(frozen=True)
class CheckoutSession:
    """A checkout session opened with the gateway."""

    session_id: str
    client_secret: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def construct_event(self, payload: bytes | str, signature: str | None) -> GatewayEvent:
        """Verify the signature and parse the payload.

        Raises WebhookSignatureError when the signature is missing or invalid.
        """
        ...

    @abstractmethod
    def create_checkout_session(
        self,
        brand_id: str,
        brand_name: str,
        user_id: str,
        user_email: str,
        return_url: str,
    ) -> CheckoutSession:
        """Open an embedded checkout session for a brand claim."""
        ...
