"""Franchise Reviews bounded context: review lifecycle and brand reputation.

Handles review submission with advisory AI classification, human moderation
with an append-only audit trail, brand reputation aggregation (Z-Score and
category scores), per-brand term insights, and payment-triggered brand
ownership claims. Notification intents are dispatched from domain events.
"""

import structlog
from protean.domain import Domain

franchise = Domain(name="franchise")

logger = structlog.get_logger(__name__)
