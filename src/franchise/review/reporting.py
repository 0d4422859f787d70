"""ReportReview: flag a review for moderator attention.

Cannot report own review. Reporting never changes the review's status.
"""

from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.domain import franchise
from franchise.review.review import Review


@franchise.command(part_of="Review")
class ReportReview:
    review_id = Identifier(required=True)
    reporter_id = Identifier(required=True)
    reason = String(required=True, max_length=100)
    description = Text()


@franchise.command_handler(part_of=Review)
class ReportReviewHandler:
    @handle(ReportReview)
    def report_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        review.report(
            reporter_id=command.reporter_id,
            reason=command.reason,
            description=command.description,
        )

        repo.add(review)
