"""Deterministic keyword classifier for development and testing.

Scores sentiment from small word lists, flags profanity and link spam, and
extracts the franchise vocabulary that appears in the text. It can be
configured to fail so callers' degradation paths can be exercised.
"""

import re

from franchise.classifier.port import (
    ClassificationResult,
    Classifier,
    ExtractedTerm,
    ModerationCategory,
    Sentiment,
)

POSITIVE_WORDS = frozenset(
    {"great", "excellent", "supportive", "helpful", "profitable", "love", "recommend", "good", "amazing", "fair"}
)
NEGATIVE_WORDS = frozenset(
    {"bad", "terrible", "poor", "awful", "unprofitable", "hidden", "expensive", "avoid", "worst", "lacking"}
)
PROFANITY = frozenset({"damn", "crap", "scam"})
FRANCHISE_TERMS = (
    "support",
    "training",
    "profit",
    "culture",
    "communication",
    "fees",
    "royalties",
    "marketing",
    "territory",
    "onboarding",
)

_WORD_RE = re.compile(r"[a-z']+")
_LINK_RE = re.compile(r"https?://|www\.", re.IGNORECASE)
_SENTENCE_RE = re.compile(r"[.!?]+")


def _sentiment_of(words: list[str]) -> tuple[str, float]:
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    total = positive + negative
    if total == 0:
        return Sentiment.NEUTRAL.value, 0.0

    score = round((positive - negative) / total, 2)
    if score > 0:
        return Sentiment.POSITIVE.value, score
    if score < 0:
        return Sentiment.NEGATIVE.value, score
    return Sentiment.NEUTRAL.value, 0.0


class FakeClassifier(Classifier):
    """Configurable keyword-based classifier."""

    def __init__(self) -> None:
        self.should_fail: bool = False
        self.failure_reason: str = "Classifier unavailable"
        self.calls: list[dict] = []

    def configure(self, should_fail: bool, failure_reason: str = "Classifier unavailable") -> None:
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def classify(self, title: str, content: str) -> ClassificationResult:
        self.calls.append({"method": "classify", "title": title, "content": content})
        if self.should_fail:
            raise RuntimeError(self.failure_reason)

        text = f"{title} {content}"
        words = _WORD_RE.findall(text.lower())
        sentiment, score = _sentiment_of(words)

        flags = []
        if any(w in PROFANITY for w in words):
            flags.append("profanity")
        if _LINK_RE.search(text):
            flags.append("spam")

        if "profanity" in flags:
            category = ModerationCategory.REJECTED.value
        elif flags:
            category = ModerationCategory.NEEDS_REVIEW.value
        else:
            category = ModerationCategory.CLEAN.value

        return ClassificationResult(
            category=category,
            sentiment=sentiment,
            sentiment_score=score,
            flags=tuple(flags),
            summary=content[:120],
        )

    def extract_terms(self, content: str) -> list[ExtractedTerm]:
        self.calls.append({"method": "extract_terms", "content": content})
        if self.should_fail:
            raise RuntimeError(self.failure_reason)

        terms = []
        for sentence in _SENTENCE_RE.split(content.lower()):
            words = _WORD_RE.findall(sentence)
            if not words:
                continue
            sentiment, _ = _sentiment_of(words)
            for term in FRANCHISE_TERMS:
                if any(w.startswith(term) for w in words):
                    terms.append(ExtractedTerm(word=term, sentiment=sentiment))
        return terms
