"""RecomputeBrandScores: rebuild a brand's reputation from its approved reviews.

Runs inside the moderation unit of work when a review is approved, and is
also exposed as a standalone command so scores can be repaired on demand.
Recomputing twice with the same approved set yields identical values.
"""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.brand.brand import Brand
from franchise.brand.scoring import BrandScores, compute_brand_scores
from franchise.domain import franchise
from franchise.review.review import Review

logger = structlog.get_logger(__name__)


@franchise.command(part_of="Brand")
class RecomputeBrandScores:
    brand_id = Identifier(required=True)


def recompute_brand_scores(brand_id, just_approved: Review | None = None) -> BrandScores:
    """Recompute and persist the brand's scores.

    ``just_approved`` is a review approved in the current unit of work and
    not yet visible to repository reads; it replaces any stored copy.
    """
    brand_repo = current_domain.repository_for(Brand)
    brand = brand_repo.get(brand_id)

    approved = current_domain.repository_for(Review).approved_for_brand(brand_id)
    if just_approved is not None:
        approved = [r for r in approved if str(r.id) != str(just_approved.id)]
        approved.append(just_approved)

    scores = compute_brand_scores(r.ratings for r in approved)
    brand.apply_scores(scores)
    brand_repo.add(brand)

    logger.info(
        "brand_scores_recomputed",
        brand_id=str(brand_id),
        total_reviews=scores.total_reviews,
        average_rating=str(scores.average_rating),
        z_score=str(scores.z_score),
    )
    return scores


@franchise.command_handler(part_of=Brand)
class RecomputeBrandScoresHandler:
    @handle(RecomputeBrandScores)
    def recompute(self, command):
        scores = recompute_brand_scores(command.brand_id)
        return scores.total_reviews
