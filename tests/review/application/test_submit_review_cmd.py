"""Application tests for SubmitReview."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from franchise.review.review import Review, ReviewStatus
from franchise.review.submission import SubmitReview


def _command(brand_id, author_id, **overrides):
    defaults = {
        "brand_id": brand_id,
        "author_id": author_id,
        "title": "Great support",
        "content": "The support team is helpful and training was excellent.",
        "overall_rating": 5,
        "support_rating": 5,
    }
    defaults.update(overrides)
    return SubmitReview(**defaults)


class TestSubmitReview:
    def test_submit_persists_pending_review(self, make_brand, make_account):
        review_id = current_domain.process(_command(make_brand(), make_account()), asynchronous=False)
        review = current_domain.repository_for(Review).get(review_id)
        assert review.status == ReviewStatus.PENDING.value
        assert review.ratings.overall == 5
        assert review.ratings.support == 5

    def test_classifier_verdict_is_attached(self, make_brand, make_account, fake_classifier):
        review_id = current_domain.process(_command(make_brand(), make_account()), asynchronous=False)
        review = current_domain.repository_for(Review).get(review_id)
        assert review.moderation_category == "clean"
        assert review.sentiment == "positive"
        assert fake_classifier.calls[0]["method"] == "classify"

    def test_classifier_failure_uses_fallback(self, make_brand, make_account, fake_classifier):
        fake_classifier.configure(should_fail=True)
        review_id = current_domain.process(_command(make_brand(), make_account()), asynchronous=False)
        review = current_domain.repository_for(Review).get(review_id)
        assert review.status == ReviewStatus.PENDING.value
        assert review.moderation_category == "needs_review"
        assert review.sentiment == "neutral"
        assert review.sentiment_score == 0.0
        assert review.flags == ["moderation_error"]

    def test_author_verification_is_copied(self, make_brand, make_account):
        author_id = make_account(verified=True)
        review_id = current_domain.process(_command(make_brand(), author_id), asynchronous=False)
        assert current_domain.repository_for(Review).get(review_id).is_verified is True

    def test_profanity_is_advisory_only(self, make_brand, make_account):
        review_id = current_domain.process(
            _command(make_brand(), make_account(), content="This franchise is a scam, avoid it."),
            asynchronous=False,
        )
        review = current_domain.repository_for(Review).get(review_id)
        assert review.moderation_category == "rejected"
        assert review.status == ReviewStatus.PENDING.value


class TestSubmitReviewValidation:
    def test_unknown_brand(self, make_account):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(_command("missing-brand", make_account()), asynchronous=False)

    def test_unknown_author(self, make_brand):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(_command(make_brand(), "missing-author"), asynchronous=False)

    def test_rating_out_of_range(self, make_brand, make_account):
        with pytest.raises(ValidationError):
            current_domain.process(
                _command(make_brand(), make_account(), culture_rating=6),
                asynchronous=False,
            )

    def test_nothing_stored_on_failure(self, make_brand, make_account):
        with pytest.raises(ValidationError):
            current_domain.process(
                _command(make_brand(), make_account(), overall_rating=0),
                asynchronous=False,
            )
        assert current_domain.repository_for(Review)._dao.query.all().items == []
