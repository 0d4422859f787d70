"""SubmitReview: a franchisee submits a review of a brand.

The classifier is consulted for an advisory verdict before the review is
stored. A classifier failure never blocks submission: the conservative
fallback verdict is attached instead and the review still lands in PENDING.
"""

import structlog
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.account.account import Account
from franchise.brand.brand import Brand
from franchise.classifier.fallback import classify_review
from franchise.domain import franchise
from franchise.review.review import Review

logger = structlog.get_logger(__name__)


@franchise.command(part_of="Review")
class SubmitReview:
    brand_id = Identifier(required=True)
    author_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    content = Text(required=True)
    overall_rating = Integer(required=True)
    support_rating = Integer()
    training_rating = Integer()
    profitability_rating = Integer()
    culture_rating = Integer()
    years_as_franchisee = Integer()


@franchise.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        # Both raise ObjectNotFoundError when missing
        brand = current_domain.repository_for(Brand).get(command.brand_id)
        author = current_domain.repository_for(Account).get(command.author_id)

        classification = classify_review(command.title, command.content)

        review = Review.submit(
            brand_id=brand.id,
            author_id=author.id,
            title=command.title,
            content=command.content,
            ratings={
                "overall": command.overall_rating,
                "support": command.support_rating,
                "training": command.training_rating,
                "profitability": command.profitability_rating,
                "culture": command.culture_rating,
            },
            classification=classification,
            years_as_franchisee=command.years_as_franchisee,
            is_verified=bool(author.is_verified),
        )
        current_domain.repository_for(Review).add(review)

        logger.info(
            "review_submitted",
            review_id=str(review.id),
            brand_id=str(brand.id),
            moderation_category=classification.category,
        )
        return str(review.id)
