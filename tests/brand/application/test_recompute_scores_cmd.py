"""Application tests for brand score recomputation."""

from protean import current_domain

from franchise.brand.brand import Brand
from franchise.brand.recompute import RecomputeBrandScores


def _brand(brand_id):
    return current_domain.repository_for(Brand).get(brand_id)


def _scores(brand):
    return (
        brand.total_reviews,
        brand.average_rating,
        brand.z_score,
        brand.support_score,
        brand.training_score,
        brand.profitability_score,
        brand.culture_score,
    )


class TestScoresFollowApprovals:
    def test_approval_updates_scores_before_returning(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        moderate(make_review(brand_id=brand_id, overall=5, support=5))
        moderate(make_review(brand_id=brand_id, overall=4, support=3))

        brand = _brand(brand_id)
        assert brand.total_reviews == 2
        assert brand.average_rating == 4.5
        assert brand.support_score == 4.0
        assert brand.z_score == 2.4

    def test_pending_reviews_do_not_count(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        moderate(make_review(brand_id=brand_id, overall=5))
        make_review(brand_id=brand_id, overall=1)

        assert _brand(brand_id).total_reviews == 1
        assert _brand(brand_id).average_rating == 5.0

    def test_rejection_never_alters_scores(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        moderate(make_review(brand_id=brand_id, overall=4, culture=4))
        before = _scores(_brand(brand_id))

        moderate(make_review(brand_id=brand_id, overall=1, culture=1), action="reject", notes="Spam")

        assert _scores(_brand(brand_id)) == before

    def test_total_reviews_matches_approved_count(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        decisions = ["approve", "reject", "approve", "approve", "reject"]
        for i, action in enumerate(decisions):
            moderate(make_review(brand_id=brand_id, overall=(i % 5) + 1), action=action)

        assert _brand(brand_id).total_reviews == decisions.count("approve")

    def test_reviews_of_other_brands_are_ignored(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        other_id = make_brand()
        moderate(make_review(brand_id=brand_id, overall=5))
        moderate(make_review(brand_id=other_id, overall=1))

        assert _brand(brand_id).average_rating == 5.0
        assert _brand(other_id).average_rating == 1.0


class TestRecomputeCommand:
    def test_recompute_is_idempotent(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        moderate(make_review(brand_id=brand_id, overall=5, support=4, training=3))
        moderate(make_review(brand_id=brand_id, overall=2, profitability=2))

        current_domain.process(RecomputeBrandScores(brand_id=brand_id), asynchronous=False)
        first = _scores(_brand(brand_id))
        current_domain.process(RecomputeBrandScores(brand_id=brand_id), asynchronous=False)

        assert _scores(_brand(brand_id)) == first

    def test_recompute_without_reviews_gives_zero_state(self, make_brand):
        brand_id = make_brand()
        total = current_domain.process(RecomputeBrandScores(brand_id=brand_id), asynchronous=False)

        brand = _brand(brand_id)
        assert total == 0
        assert brand.total_reviews == 0
        assert brand.z_score == 0.0
        assert brand.scores_updated_at is not None

    def test_recompute_matches_incremental_result(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        for overall in (5, 4, 4, 3):
            moderate(make_review(brand_id=brand_id, overall=overall, support=overall))
        incremental = _scores(_brand(brand_id))

        current_domain.process(RecomputeBrandScores(brand_id=brand_id), asynchronous=False)

        assert _scores(_brand(brand_id)) == incremental

    def test_approved_set_beyond_one_page(self, make_brand, make_review, moderate, make_account):
        brand_id = make_brand()
        author_id = make_account()
        for _ in range(105):
            moderate(make_review(brand_id=brand_id, author_id=author_id, overall=4))

        current_domain.process(RecomputeBrandScores(brand_id=brand_id), asynchronous=False)

        assert _brand(brand_id).total_reviews == 105
