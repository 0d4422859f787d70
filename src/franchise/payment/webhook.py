"""Payment webhook processing: verify, deduplicate and apply brand claims.

Flow for a single delivery::

    received → verified → duplicate | applied | rejected
    (events other than checkout completion are ignored)

Signature and metadata problems are permanent and surface as client errors.
Storage errors propagate so the gateway's redelivery can succeed later.
"""

from enum import Enum

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.account.account import Account
from franchise.brand.brand import Brand
from franchise.domain import franchise
from franchise.gateway.port import CHECKOUT_SESSION_COMPLETED, PaymentGateway
from franchise.payment.payment import Payment

logger = structlog.get_logger(__name__)


class WebhookOutcome(Enum):
    APPLIED = "applied"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    REJECTED = "rejected"


@franchise.command(part_of="Payment")
class ApplyClaimPayment:
    """Record a completed claim checkout and hand the brand to the payer."""

    gateway_session_id = String(required=True, max_length=255)
    brand_id = Identifier(required=True)
    user_id = Identifier(required=True)
    amount = Integer(required=True)
    currency = String(required=True, max_length=3)
    gateway_payment_intent_id = String(max_length=255)


@franchise.command_handler(part_of=Payment)
class ApplyClaimPaymentHandler:
    @handle(ApplyClaimPayment)
    def apply_claim_payment(self, command):
        payment_repo = current_domain.repository_for(Payment)

        existing = payment_repo._dao.query.filter(gateway_session_id=command.gateway_session_id).all()
        if existing.items:
            logger.info("claim_payment_duplicate", gateway_session_id=command.gateway_session_id)
            return WebhookOutcome.DUPLICATE.value

        brand_repo = current_domain.repository_for(Brand)
        try:
            brand = brand_repo.get(command.brand_id)
        except ObjectNotFoundError:
            raise ValidationError({"brandId": [f"Unknown brand {command.brand_id}"]}) from None
        try:
            current_domain.repository_for(Account).get(command.user_id)
        except ObjectNotFoundError:
            raise ValidationError({"userId": [f"Unknown account {command.user_id}"]}) from None

        payment_repo.add(
            Payment.record_completed(
                gateway_session_id=command.gateway_session_id,
                user_id=command.user_id,
                brand_id=command.brand_id,
                amount=command.amount,
                currency=command.currency,
                gateway_payment_intent_id=command.gateway_payment_intent_id,
            )
        )

        if brand.is_claimed and not brand.is_claimed_by(command.user_id):
            # Money was taken, so the payment stays recorded; ownership does not move.
            logger.warning(
                "claim_payment_for_claimed_brand",
                brand_id=str(brand.id),
                claimed_by_id=str(brand.claimed_by_id),
                user_id=str(command.user_id),
                gateway_session_id=command.gateway_session_id,
            )
            return WebhookOutcome.REJECTED.value

        if brand.claim(
            account_id=command.user_id,
            gateway_session_id=command.gateway_session_id,
            amount=command.amount,
            currency=command.currency,
        ):
            brand_repo.add(brand)

        logger.info(
            "claim_payment_applied",
            brand_id=str(brand.id),
            user_id=str(command.user_id),
            gateway_session_id=command.gateway_session_id,
        )
        return WebhookOutcome.APPLIED.value


def _require_metadata(metadata: dict, key: str) -> str:
    value = metadata.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError({key: [f"Checkout metadata is missing '{key}'"]})
    return value.strip()


class WebhookProcessor:
    """Turns raw gateway deliveries into at-most-once claim applications."""

    def __init__(self, gateway: PaymentGateway) -> None:
        self.gateway = gateway

    def handle(self, raw_payload: bytes | str, signature: str | None) -> WebhookOutcome:
        # Raises WebhookSignatureError before anything is parsed or stored
        event = self.gateway.construct_event(raw_payload, signature)

        if event.type != CHECKOUT_SESSION_COMPLETED:
            logger.info("webhook_event_ignored", event_id=event.id, event_type=event.type)
            return WebhookOutcome.IGNORED

        session = event.data
        session_id = session.get("id")
        if not isinstance(session_id, str) or not session_id:
            raise ValidationError({"id": ["Checkout session id is missing"]})

        metadata = session.get("metadata") or {}
        brand_id = _require_metadata(metadata, "brandId")
        user_id = _require_metadata(metadata, "userId")

        outcome = current_domain.process(
            ApplyClaimPayment(
                gateway_session_id=session_id,
                brand_id=brand_id,
                user_id=user_id,
                amount=int(session.get("amount_total") or 0),
                currency=session.get("currency") or "usd",
                gateway_payment_intent_id=session.get("payment_intent"),
            ),
            asynchronous=False,
        )
        return WebhookOutcome(outcome)
