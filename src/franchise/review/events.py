"""Domain events for the Review aggregate.

Events drive the moderation queue projection and the notification
dispatcher. Every event is versioned and immutable.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from franchise.domain import franchise


@franchise.event(part_of="Review")
class ReviewSubmitted:
    """A franchisee submitted a review, awaiting moderation."""

    __version__ = 1

    review_id = Identifier(required=True)
    brand_id = Identifier(required=True)
    author_id = Identifier(required=True)
    title = String(required=True)
    content = Text(required=True)
    overall_rating = Integer(required=True)
    moderation_category = String(required=True)
    sentiment = String()
    sentiment_score = Float()
    ai_flags = Text()  # JSON list
    is_verified = String(required=True)  # "True"/"False"
    submitted_at = DateTime(required=True)


@franchise.event(part_of="Review")
class ReviewApproved:
    """A moderator approved the review; it now counts toward brand scores."""

    __version__ = 1

    review_id = Identifier(required=True)
    brand_id = Identifier(required=True)
    author_id = Identifier(required=True)
    overall_rating = Integer(required=True)
    moderator_id = Identifier(required=True)
    notes = Text()
    approved_at = DateTime(required=True)


@franchise.event(part_of="Review")
class ReviewRejected:
    """A moderator rejected the review."""

    __version__ = 1

    review_id = Identifier(required=True)
    brand_id = Identifier(required=True)
    author_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    reason = Text()
    rejected_at = DateTime(required=True)


@franchise.event(part_of="Review")
class ReviewReported:
    """A member reported the review for moderator attention."""

    __version__ = 1

    review_id = Identifier(required=True)
    reporter_id = Identifier(required=True)
    reason = String(required=True)
    description = Text()
    report_count = Integer(required=True)
    reported_at = DateTime(required=True)


@franchise.event(part_of="Review")
class ReviewResponseAdded:
    """The brand's claim holder responded to an approved review."""

    __version__ = 1

    review_id = Identifier(required=True)
    response_id = Identifier(required=True)
    responder_id = Identifier(required=True)
    content = Text(required=True)
    responded_at = DateTime(required=True)
