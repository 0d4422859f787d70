"""Tests for coercing classifier payloads into ClassificationResult."""

from franchise.classifier.port import CLASSIFICATION_ERROR_FLAG, ClassificationResult


class TestFallback:
    def test_fallback_is_conservative(self):
        result = ClassificationResult.fallback()
        assert result.category == "needs_review"
        assert result.sentiment == "neutral"
        assert result.sentiment_score == 0.0
        assert result.flags == (CLASSIFICATION_ERROR_FLAG,)


class TestFromRaw:
    def test_well_formed_payload(self):
        result = ClassificationResult.from_raw(
            {
                "category": "clean",
                "sentiment": "positive",
                "sentimentScore": 0.7,
                "flags": [],
                "summary": "Owner is happy",
            }
        )
        assert result == ClassificationResult("clean", "positive", 0.7, (), "Owner is happy")

    def test_unknown_values_degrade(self):
        result = ClassificationResult.from_raw({"category": "maybe", "sentiment": "ecstatic"})
        assert result.category == "needs_review"
        assert result.sentiment == "neutral"

    def test_score_is_clamped(self):
        assert ClassificationResult.from_raw({"sentimentScore": 4}).sentiment_score == 1.0
        assert ClassificationResult.from_raw({"sentimentScore": -3}).sentiment_score == -1.0

    def test_garbage_score_becomes_zero(self):
        assert ClassificationResult.from_raw({"sentimentScore": "very"}).sentiment_score == 0.0

    def test_flags_are_deduplicated(self):
        result = ClassificationResult.from_raw({"flags": ["spam", "spam", "profanity", ""]})
        assert result.flags == ("spam", "profanity")

    def test_single_flag_string(self):
        assert ClassificationResult.from_raw({"flags": "spam"}).flags == ("spam",)
