"""Notification dispatch: turns domain events into notification intents.

Delivery is best-effort. Any failure (unknown account, template or channel
error) is logged and swallowed so it can never undo or block the change
that raised the event.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.account.account import Account
from franchise.brand.brand import Brand
from franchise.domain import franchise
from franchise.notification import intents
from franchise.notification.notifier import get_notifier
from franchise.payment.events import PaymentCompleted
from franchise.payment.payment import Payment
from franchise.review.events import ReviewApproved, ReviewRejected, ReviewResponseAdded
from franchise.review.review import Review

logger = structlog.get_logger(__name__)


def _email_of(account_id) -> str:
    return current_domain.repository_for(Account).get(account_id).email


def _dispatch(build, **context) -> None:
    try:
        intent = build()
        if intent is not None:
            get_notifier().notify(intent)
    except Exception:
        logger.exception("notification_dispatch_failed", **context)


@franchise.event_handler(part_of=Review)
class ReviewNotificationHandler:
    """Notifies authors of moderation outcomes and owners of new reviews."""

    @handle(ReviewApproved)
    def on_review_approved(self, event: ReviewApproved) -> None:
        def author_notice():
            brand = current_domain.repository_for(Brand).get(event.brand_id)
            return intents.ReviewApproved(
                author_email=_email_of(event.author_id),
                brand_name=brand.name,
                review_id=str(event.review_id),
            )

        def owner_notice():
            brand = current_domain.repository_for(Brand).get(event.brand_id)
            if not brand.is_claimed:
                return None
            review = current_domain.repository_for(Review).get(event.review_id)
            return intents.NewReviewForClaimedBrand(
                owner_email=_email_of(brand.claimed_by_id),
                brand_name=brand.name,
                preview=intents.preview_of(review.content),
                rating=event.overall_rating,
                review_id=str(event.review_id),
            )

        _dispatch(author_notice, intent="ReviewApproved", review_id=str(event.review_id))
        _dispatch(owner_notice, intent="NewReviewForClaimedBrand", review_id=str(event.review_id))

    @handle(ReviewRejected)
    def on_review_rejected(self, event: ReviewRejected) -> None:
        def author_notice():
            brand = current_domain.repository_for(Brand).get(event.brand_id)
            return intents.ReviewRejected(
                author_email=_email_of(event.author_id),
                brand_name=brand.name,
                reason=event.reason,
            )

        _dispatch(author_notice, intent="ReviewRejected", review_id=str(event.review_id))

    @handle(ReviewResponseAdded)
    def on_response_added(self, event: ReviewResponseAdded) -> None:
        def author_notice():
            review = current_domain.repository_for(Review).get(event.review_id)
            brand = current_domain.repository_for(Brand).get(review.brand_id)
            return intents.ReviewResponsePosted(
                author_email=_email_of(review.author_id),
                brand_name=brand.name,
                preview=intents.preview_of(event.content),
                review_id=str(event.review_id),
            )

        _dispatch(author_notice, intent="ReviewResponsePosted", review_id=str(event.review_id))


@franchise.event_handler(part_of=Payment)
class PaymentNotificationHandler:
    @handle(PaymentCompleted)
    def on_payment_completed(self, event: PaymentCompleted) -> None:
        def receipt():
            brand = current_domain.repository_for(Brand).get(event.brand_id)
            return intents.PaymentConfirmed(
                user_email=_email_of(event.user_id),
                brand_name=brand.name,
                amount=event.amount,
                currency=event.currency,
                session_id=event.gateway_session_id,
            )

        _dispatch(receipt, intent="PaymentConfirmed", payment_id=str(event.payment_id))
