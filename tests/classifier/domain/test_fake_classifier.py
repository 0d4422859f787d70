"""Tests for the keyword-based FakeClassifier."""

import pytest

from franchise.classifier.fake_adapter import FakeClassifier


@pytest.fixture()
def classifier():
    return FakeClassifier()


class TestClassify:
    def test_positive_review_is_clean(self, classifier):
        result = classifier.classify("Great", "Excellent training and helpful support.")
        assert result.category == "clean"
        assert result.sentiment == "positive"
        assert result.sentiment_score == 1.0

    def test_negative_review(self, classifier):
        result = classifier.classify("Avoid", "Terrible support and hidden fees.")
        assert result.sentiment == "negative"
        assert result.sentiment_score == -1.0

    def test_mixed_review_is_neutral(self, classifier):
        result = classifier.classify("Mixed", "Great training, terrible fees.")
        assert result.sentiment == "neutral"

    def test_links_need_review(self, classifier):
        result = classifier.classify("Deal", "Visit https://example.com for more.")
        assert result.category == "needs_review"
        assert "spam" in result.flags

    def test_configured_failure_raises(self, classifier):
        classifier.configure(should_fail=True, failure_reason="timeout")
        with pytest.raises(RuntimeError, match="timeout"):
            classifier.classify("t", "c")


class TestExtractTerms:
    def test_terms_carry_sentence_sentiment(self, classifier):
        terms = classifier.extract_terms("The training was excellent. The fees are terrible.")
        assert {(t.word, t.sentiment) for t in terms} == {("training", "positive"), ("fees", "negative")}

    def test_no_franchise_vocabulary(self, classifier):
        assert classifier.extract_terms("Nice weather today.") == []
