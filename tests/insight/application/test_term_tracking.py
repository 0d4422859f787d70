"""Tests for per-brand term frequency tracking."""

from protean import current_domain

from franchise.classifier.port import ExtractedTerm
from franchise.insight.tracker import normalize_terms, top_terms, track_review_terms
from franchise.insight.word_frequency import WordFrequency, word_frequency_id


class TestNormalizeTerms:
    def test_trims_and_lowercases(self):
        assert normalize_terms([ExtractedTerm("  Support ", "positive")]) == {"support": "positive"}

    def test_blank_terms_skipped(self):
        assert normalize_terms([ExtractedTerm("   ", "positive"), ExtractedTerm("", "neutral")]) == {}

    def test_long_terms_truncated(self):
        [word] = normalize_terms([ExtractedTerm("x" * 150, "neutral")])
        assert len(word) == 100

    def test_repeat_within_review_counts_once_latest_sentiment_wins(self):
        terms = [ExtractedTerm("fees", "negative"), ExtractedTerm("Fees", "positive")]
        assert normalize_terms(terms) == {"fees": "positive"}

    def test_unknown_sentiment_becomes_neutral(self):
        assert normalize_terms([ExtractedTerm("fees", "angry")]) == {"fees": "neutral"}


class TestTrackReviewTerms:
    def test_first_occurrence_inserts(self):
        track_review_terms("brand-1", [ExtractedTerm("support", "positive")])
        record = current_domain.repository_for(WordFrequency).get(word_frequency_id("brand-1", "support"))
        assert record.count == 1
        assert record.sentiment == "positive"

    def test_repeat_increments_and_records_latest_sentiment(self):
        track_review_terms("brand-1", [ExtractedTerm("fees", "positive")])
        track_review_terms("brand-1", [ExtractedTerm("fees", "negative")])
        record = current_domain.repository_for(WordFrequency).get(word_frequency_id("brand-1", "fees"))
        assert record.count == 2
        assert record.sentiment == "negative"

    def test_brands_are_tracked_separately(self):
        track_review_terms("brand-1", [ExtractedTerm("training", "positive")])
        track_review_terms("brand-2", [ExtractedTerm("training", "negative")])
        assert [t.count for t in top_terms("brand-1")] == [1]
        assert [t.sentiment for t in top_terms("brand-2")] == ["negative"]


class TestTopTerms:
    def test_ordered_by_count(self):
        for _ in range(3):
            track_review_terms("brand-1", [ExtractedTerm("support", "positive")])
        track_review_terms("brand-1", [ExtractedTerm("fees", "negative")])
        track_review_terms("brand-1", [ExtractedTerm("training", "positive"), ExtractedTerm("fees", "negative")])

        assert [(t.word, t.count) for t in top_terms("brand-1")] == [("support", 3), ("fees", 2), ("training", 1)]

    def test_limit(self):
        track_review_terms("brand-1", [ExtractedTerm(f"term{i}", "neutral") for i in range(30)])
        assert len(top_terms("brand-1")) == 20
        assert len(top_terms("brand-1", limit=5)) == 5


class TestTrackingOnApproval:
    def test_approval_tracks_terms(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        moderate(make_review(brand_id=brand_id, content="Support was excellent. Fees are too expensive."))
        words = {t.word: t.sentiment for t in top_terms(brand_id)}
        assert words == {"support": "positive", "fees": "negative"}

    def test_rejection_tracks_nothing(self, make_brand, make_review, moderate):
        brand_id = make_brand()
        moderate(make_review(brand_id=brand_id, content="Support was excellent."), action="reject")
        assert top_terms(brand_id) == []

    def test_extraction_failure_does_not_fail_approval(self, make_brand, make_review, moderate, fake_classifier):
        brand_id = make_brand()
        review_id = make_review(brand_id=brand_id)
        fake_classifier.configure(should_fail=True)

        assert moderate(review_id) == "approved"
        assert top_terms(brand_id) == []
