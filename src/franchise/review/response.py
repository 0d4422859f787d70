"""RespondToReview: the brand's claim holder answers an approved review."""

from protean.exceptions import InvalidOperationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.brand.brand import Brand
from franchise.domain import franchise
from franchise.review.review import Review


@franchise.command(part_of="Review")
class RespondToReview:
    review_id = Identifier(required=True)
    responder_id = Identifier(required=True)
    content = Text(required=True)


@franchise.command_handler(part_of=Review)
class RespondToReviewHandler:
    @handle(RespondToReview)
    def respond_to_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        brand = current_domain.repository_for(Brand).get(review.brand_id)
        if not brand.is_claimed_by(command.responder_id):
            raise InvalidOperationError("Only the brand's claim holder can respond to its reviews")

        response = review.add_response(
            responder_id=command.responder_id,
            content=command.content,
        )

        repo.add(review)
        return str(response.id)
