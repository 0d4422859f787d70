"""Review aggregate (CQRS): a franchisee's review of a franchise brand.

The Review aggregate carries the submission content, the advisory classifier
verdict attached at submission, and the authoritative moderation status.

State Machine (3 states):
    PENDING → APPROVED | REJECTED
    APPROVED → (terminal)
    REJECTED → (terminal)

Member reports set a parallel ``is_flagged`` marker and never change the
status. Only APPROVED reviews count toward brand scores and accept responses
from the brand's claim holder.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from franchise.classifier.port import ClassificationResult, ModerationCategory, Sentiment
from franchise.domain import franchise
from franchise.review.events import (
    ReviewApproved,
    ReviewRejected,
    ReviewReported,
    ReviewResponseAdded,
    ReviewSubmitted,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReviewStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ModerationAction(Enum):
    APPROVE = "approve"
    REJECT = "reject"


class ResponseStatus(Enum):
    PENDING = "pending"
    PUBLISHED = "published"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    ReviewStatus.PENDING: {ReviewStatus.APPROVED, ReviewStatus.REJECTED},
    ReviewStatus.APPROVED: set(),
    ReviewStatus.REJECTED: set(),
}

RATING_FIELDS = ("overall", "support", "training", "profitability", "culture")


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@franchise.value_object(part_of="Review")
class Ratings:
    """Star ratings from 1 to 5. Only the overall rating is mandatory."""

    overall = Integer(required=True)
    support = Integer()
    training = Integer()
    profitability = Integer()
    culture = Integer()

    @invariant.post
    def ratings_must_be_in_range(self):
        errors = {}
        for name in RATING_FIELDS:
            value = getattr(self, name)
            if value is not None and not 1 <= value <= 5:
                errors[name] = ["Rating must be between 1 and 5"]
        if errors:
            raise ValidationError(errors)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@franchise.entity(part_of="Review")
class ReviewResponse:
    """A response from the brand's claim holder."""

    responder_id = Identifier(required=True)
    content = Text(required=True)
    status = String(choices=ResponseStatus, default=ResponseStatus.PENDING.value)
    created_at = DateTime(required=True)


@franchise.entity(part_of="Review")
class ReviewReport:
    """A member's report asking moderators to take another look."""

    reporter_id = Identifier(required=True)
    reason = String(required=True, max_length=100)
    description = Text()
    reported_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@franchise.aggregate
class Review:
    brand_id = Identifier(required=True)
    author_id = Identifier(required=True)

    # Content
    title = String(required=True, max_length=255)
    content = Text(required=True)
    ratings = ValueObject(Ratings, required=True)
    years_as_franchisee = Integer(min_value=0)

    # Moderation
    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)
    moderation_notes = Text()

    # Advisory classifier verdict
    moderation_category = String(choices=ModerationCategory, default=ModerationCategory.NEEDS_REVIEW.value)
    sentiment = String(choices=Sentiment)
    sentiment_score = Float()
    ai_flags = Text()  # JSON list of strings
    ai_summary = Text()

    # Author identity verification, copied from the account at submission
    is_verified = Boolean(default=False)

    # Reporting
    is_flagged = Boolean(default=False)
    report_count = Integer(default=0)
    reports = HasMany(ReviewReport)

    responses = HasMany(ReviewResponse)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def title_must_not_be_empty(self):
        if self.title is not None and len(self.title.strip()) == 0:
            raise ValidationError({"title": ["Review title cannot be empty"]})

    @invariant.post
    def content_must_not_be_empty(self):
        if self.content is not None and len(self.content.strip()) == 0:
            raise ValidationError({"content": ["Review content cannot be empty"]})

    @invariant.post
    def sentiment_score_in_range(self):
        if self.sentiment_score is not None and not -1.0 <= self.sentiment_score <= 1.0:
            raise ValidationError({"sentiment_score": ["Sentiment score must be between -1 and 1"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        brand_id,
        author_id,
        title,
        content,
        ratings,
        classification: ClassificationResult,
        years_as_franchisee=None,
        is_verified=False,
    ):
        """Submit a new review in PENDING status.

        ``ratings`` is a mapping with ``overall`` and any of the optional
        category ratings.
        """
        now = datetime.now(UTC)
        ai_flags = json.dumps(list(dict.fromkeys(classification.flags)))

        review = cls(
            brand_id=brand_id,
            author_id=author_id,
            title=title,
            content=content,
            ratings=Ratings(**{k: ratings.get(k) for k in RATING_FIELDS}),
            years_as_franchisee=years_as_franchisee,
            status=ReviewStatus.PENDING.value,
            moderation_category=classification.category,
            sentiment=classification.sentiment,
            sentiment_score=classification.sentiment_score,
            ai_flags=ai_flags,
            ai_summary=classification.summary or None,
            is_verified=is_verified,
            is_flagged=False,
            report_count=0,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                brand_id=str(brand_id),
                author_id=str(author_id),
                title=title,
                content=content,
                overall_rating=review.ratings.overall,
                moderation_category=classification.category,
                sentiment=classification.sentiment,
                sentiment_score=classification.sentiment_score,
                ai_flags=ai_flags,
                is_verified=str(bool(is_verified)),
                submitted_at=now,
            )
        )
        return review

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def flags(self) -> list[str]:
        return json.loads(self.ai_flags) if self.ai_flags else []

    @property
    def is_approved(self) -> bool:
        return self.status == ReviewStatus.APPROVED.value

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = ReviewStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidStateError(
                f"Cannot transition review from {current.value} to {target_status.value}"
            )

    def approve(self, moderator_id, notes=None):
        """Approve the review so it counts toward its brand's scores."""
        self._assert_can_transition(ReviewStatus.APPROVED)

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = ReviewStatus.APPROVED.value
            self.moderation_notes = notes
            self.updated_at = now

        self.raise_(
            ReviewApproved(
                review_id=str(self.id),
                brand_id=str(self.brand_id),
                author_id=str(self.author_id),
                overall_rating=self.ratings.overall,
                moderator_id=str(moderator_id),
                notes=notes,
                approved_at=now,
            )
        )

    def reject(self, moderator_id, notes=None):
        self._assert_can_transition(ReviewStatus.REJECTED)

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = ReviewStatus.REJECTED.value
            self.moderation_notes = notes
            self.updated_at = now

        self.raise_(
            ReviewRejected(
                review_id=str(self.id),
                brand_id=str(self.brand_id),
                author_id=str(self.author_id),
                moderator_id=str(moderator_id),
                reason=notes,
                rejected_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------
    def report(self, reporter_id, reason, description=None):
        """Flag the review for moderators. Status is left untouched.

        Rejected reviews are not public and cannot be reported.
        """
        if self.status == ReviewStatus.REJECTED.value:
            raise InvalidStateError("Rejected reviews cannot be reported")

        if str(reporter_id) == str(self.author_id):
            raise ValidationError({"report": ["Cannot report your own review"]})

        if any(str(r.reporter_id) == str(reporter_id) for r in self.reports):
            raise ValidationError({"report": ["You have already reported this review"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.add_reports(
                ReviewReport(
                    reporter_id=reporter_id,
                    reason=reason,
                    description=description,
                    reported_at=now,
                )
            )
            self.report_count = (self.report_count or 0) + 1
            self.is_flagged = True
            self.updated_at = now

        self.raise_(
            ReviewReported(
                review_id=str(self.id),
                reporter_id=str(reporter_id),
                reason=reason,
                description=description,
                report_count=self.report_count,
                reported_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Responses
    # -------------------------------------------------------------------
    def add_response(self, responder_id, content):
        """Attach a claim holder's response. Only approved reviews accept responses."""
        if not self.is_approved:
            raise InvalidStateError("Responses can only be added to approved reviews")

        if not content or not content.strip():
            raise ValidationError({"content": ["Response content cannot be empty"]})

        now = datetime.now(UTC)
        response = ReviewResponse(
            responder_id=responder_id,
            content=content,
            status=ResponseStatus.PENDING.value,
            created_at=now,
        )
        self.add_responses(response)
        self.updated_at = now

        self.raise_(
            ReviewResponseAdded(
                review_id=str(self.id),
                response_id=str(response.id),
                responder_id=str(responder_id),
                content=content,
                responded_at=now,
            )
        )
        return response
