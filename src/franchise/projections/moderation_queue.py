"""ModerationQueue: pending and reported reviews awaiting moderator action.

Pending reviews enter on submission and leave on a moderation decision.
An approved review that members report re-enters the queue as ``reported``.
"""

import structlog
from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from franchise.domain import franchise
from franchise.review.events import ReviewApproved, ReviewRejected, ReviewReported, ReviewSubmitted
from franchise.review.review import Review
from franchise.utils.paging import fetch_all

logger = structlog.get_logger(__name__)


@franchise.projection
class ModerationQueue:
    review_id = Identifier(identifier=True, required=True)
    brand_id = Identifier(required=True)
    author_id = Identifier(required=True)
    title = String(required=True)
    content = Text(required=True)
    overall_rating = Integer(required=True)
    moderation_category = String()
    sentiment = String()
    sentiment_score = Float()
    ai_flags = Text()
    is_verified = String()
    report_count = Integer(default=0)
    status = String(required=True)  # "pending" or "reported"
    submitted_at = DateTime()
    last_reported_at = DateTime()


def queue_entries() -> list[ModerationQueue]:
    """Every queued review, oldest submission first."""
    repo = current_domain.repository_for(ModerationQueue)
    return fetch_all(repo._dao.query.order_by(["submitted_at", "review_id"]))


@franchise.projector(projector_for=ModerationQueue, aggregates=[Review])
class ModerationQueueProjector:
    @on(ReviewSubmitted)
    def on_review_submitted(self, event):
        current_domain.repository_for(ModerationQueue).add(
            ModerationQueue(
                review_id=event.review_id,
                brand_id=event.brand_id,
                author_id=event.author_id,
                title=event.title,
                content=event.content,
                overall_rating=event.overall_rating,
                moderation_category=event.moderation_category,
                sentiment=event.sentiment,
                sentiment_score=event.sentiment_score,
                ai_flags=event.ai_flags,
                is_verified=event.is_verified,
                report_count=0,
                status="pending",
                submitted_at=event.submitted_at,
            )
        )

    @on(ReviewApproved)
    def on_review_approved(self, event):
        self._remove(event.review_id)

    @on(ReviewRejected)
    def on_review_rejected(self, event):
        self._remove(event.review_id)

    @on(ReviewReported)
    def on_review_reported(self, event):
        repo = current_domain.repository_for(ModerationQueue)
        try:
            entry = repo.get(event.review_id)
            entry.report_count = event.report_count
            entry.last_reported_at = event.reported_at
            repo.add(entry)
            return
        except ObjectNotFoundError:
            pass

        # Already moderated: re-enter the queue from the aggregate
        review = current_domain.repository_for(Review).get(event.review_id)
        repo.add(
            ModerationQueue(
                review_id=event.review_id,
                brand_id=str(review.brand_id),
                author_id=str(review.author_id),
                title=review.title,
                content=review.content,
                overall_rating=review.ratings.overall,
                moderation_category=review.moderation_category,
                sentiment=review.sentiment,
                sentiment_score=review.sentiment_score,
                ai_flags=review.ai_flags,
                is_verified=str(review.is_verified),
                report_count=event.report_count,
                status="reported",
                submitted_at=review.created_at,
                last_reported_at=event.reported_at,
            )
        )

    def _remove(self, review_id):
        repo = current_domain.repository_for(ModerationQueue)
        try:
            repo._dao.delete(repo.get(review_id))
        except ObjectNotFoundError:
            logger.debug("moderation_queue_entry_missing", review_id=str(review_id))
