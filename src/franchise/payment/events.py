"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from franchise.domain import franchise


@franchise.event(part_of="Payment")
class PaymentCompleted:
    """The gateway confirmed a completed brand-claim checkout."""

    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    brand_id = Identifier(required=True)
    gateway_session_id = String(required=True)
    gateway_payment_intent_id = String()
    amount = Integer(required=True)  # minor units
    currency = String(required=True)
    completed_at = DateTime(required=True)
