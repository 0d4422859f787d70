"""Payment aggregate (CQRS): a completed brand-claim payment.

A Payment is written exactly once per gateway checkout session. Its identity
is derived from the session id and ``gateway_session_id`` is unique, so two
concurrent deliveries of the same webhook cannot both be stored.
"""

import uuid
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from franchise.domain import franchise
from franchise.payment.events import PaymentCompleted

_NAMESPACE = uuid.UUID("0b6f7c55-5d1e-4c53-8a5e-1f3b2a9c7d64")


class PaymentStatus(Enum):
    COMPLETED = "completed"


def payment_id_for_session(gateway_session_id: str) -> str:
    return str(uuid.uuid5(_NAMESPACE, gateway_session_id))


@franchise.aggregate
class Payment:
    user_id = Identifier(required=True)
    brand_id = Identifier(required=True)
    gateway_session_id = String(required=True, max_length=255, unique=True)
    gateway_payment_intent_id = String(max_length=255)
    amount = Integer(required=True)  # minor units, as sent by the gateway
    currency = String(required=True, max_length=3)
    status = String(choices=PaymentStatus, default=PaymentStatus.COMPLETED.value)
    created_at = DateTime()

    @invariant.post
    def amount_cannot_be_negative(self):
        if self.amount is not None and self.amount < 0:
            raise ValidationError({"amount": ["Payment amount cannot be negative"]})

    @classmethod
    def record_completed(
        cls,
        gateway_session_id,
        user_id,
        brand_id,
        amount,
        currency,
        gateway_payment_intent_id=None,
    ):
        now = datetime.now(UTC)
        payment = cls(
            id=payment_id_for_session(gateway_session_id),
            user_id=user_id,
            brand_id=brand_id,
            gateway_session_id=gateway_session_id,
            gateway_payment_intent_id=gateway_payment_intent_id,
            amount=amount,
            currency=currency.lower(),
            status=PaymentStatus.COMPLETED.value,
            created_at=now,
        )
        payment.raise_(
            PaymentCompleted(
                payment_id=str(payment.id),
                user_id=str(user_id),
                brand_id=str(brand_id),
                gateway_session_id=gateway_session_id,
                gateway_payment_intent_id=gateway_payment_intent_id,
                amount=amount,
                currency=payment.currency,
                completed_at=now,
            )
        )
        return payment
