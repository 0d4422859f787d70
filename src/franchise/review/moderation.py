"""ModerateReview: the authoritative approve/reject decision.

Approving a review recomputes its brand's scores and tracks the review's
terms in the same unit of work, so the moderation call returns only after
the brand reflects the new approved set. Every successful decision appends
a ModerationLog entry; a rejected transition writes nothing. Only
administrator accounts may moderate.
"""

import structlog
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.account.account import Account
from franchise.brand.recompute import recompute_brand_scores
from franchise.classifier.fallback import extract_review_terms
from franchise.domain import franchise
from franchise.insight.tracker import track_review_terms
from franchise.review.moderation_log import ModerationLog
from franchise.review.review import ModerationAction, Review

logger = structlog.get_logger(__name__)


@franchise.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    action = String(required=True)  # "approve" or "reject"
    notes = Text()


def _assert_can_moderate(moderator_id):
    try:
        moderator = current_domain.repository_for(Account).get(moderator_id)
    except ObjectNotFoundError:
        moderator = None
    if moderator is None or not moderator.is_admin:
        logger.warning("moderation_forbidden", moderator_id=str(moderator_id))
        raise InvalidOperationError("Only administrators can moderate reviews")


@franchise.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate_review(self, command):
        try:
            action = ModerationAction((command.action or "").strip().lower())
        except ValueError:
            raise ValidationError({"action": ["Action must be 'approve' or 'reject'"]}) from None

        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        _assert_can_moderate(command.moderator_id)
        previous_status = review.status

        if action == ModerationAction.APPROVE:
            review.approve(moderator_id=command.moderator_id, notes=command.notes)
        else:
            review.reject(moderator_id=command.moderator_id, notes=command.notes)

        repo.add(review)
        current_domain.repository_for(ModerationLog).add(
            ModerationLog.record(
                review_id=review.id,
                moderator_id=command.moderator_id,
                action=action.value,
                previous_status=previous_status,
                new_status=review.status,
                notes=command.notes,
            )
        )

        if action == ModerationAction.APPROVE:
            recompute_brand_scores(review.brand_id, just_approved=review)
            track_review_terms(review.brand_id, extract_review_terms(review.content))

        logger.info(
            "review_moderated",
            review_id=str(review.id),
            moderator_id=str(command.moderator_id),
            action=action.value,
            previous_status=previous_status,
            new_status=review.status,
        )
        return review.status
