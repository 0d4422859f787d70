"""Repository for the Review aggregate."""

from franchise.domain import franchise
from franchise.review.review import Review, ReviewStatus
from franchise.utils.paging import fetch_all


@franchise.repository(part_of=Review)
class ReviewRepository:
    """Review repository with the approved-set read used by brand scoring."""

    def approved_for_brand(self, brand_id) -> list[Review]:
        return fetch_all(
            self._dao.query.filter(brand_id=str(brand_id), status=ReviewStatus.APPROVED.value).order_by("created_at")
        )

    def find_by_status(self, status: str) -> list[Review]:
        return fetch_all(self._dao.query.filter(status=status).order_by("created_at"))
