"""Review classifier port (abstract interface).

The classifier is an advisory collaborator: its verdict is attached to a
review at submission time and its extracted terms feed brand insights, but
it never changes a review's moderation status.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

CLASSIFICATION_ERROR_FLAG = "moderation_error"


class ModerationCategory(Enum):
    CLEAN = "clean"
    NEEDS_REVIEW = "needs_review"
    REJECTED = "rejected"


class Sentiment(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class ClassificationResult:
    """Advisory verdict for a single review."""

    category: str
    sentiment: str
    sentiment_score: float
    flags: tuple[str, ...] = field(default_factory=tuple)
    summary: str = ""

    @classmethod
    def fallback(cls) -> "ClassificationResult":
        """Conservative verdict used when the classifier cannot be reached."""
        return cls(
            category=ModerationCategory.NEEDS_REVIEW.value,
            sentiment=Sentiment.NEUTRAL.value,
            sentiment_score=0.0,
            flags=(CLASSIFICATION_ERROR_FLAG,),
            summary="Unable to analyze content automatically",
        )

    @classmethod
    def from_raw(cls, raw: dict) -> "ClassificationResult":
        """Coerce an untrusted classifier payload into a valid result.

        Unknown categories degrade to ``needs_review``, unknown sentiments to
        ``neutral``, and the score is clamped to [-1, 1].
        """
        categories = {c.value for c in ModerationCategory}
        sentiments = {s.value for s in Sentiment}

        category = raw.get("category")
        if category not in categories:
            category = ModerationCategory.NEEDS_REVIEW.value

        sentiment = raw.get("sentiment")
        if sentiment not in sentiments:
            sentiment = Sentiment.NEUTRAL.value

        try:
            score = float(raw.get("sentimentScore", raw.get("sentiment_score", 0.0)) or 0.0)
        except (TypeError, ValueError):
            score = 0.0
        score = max(-1.0, min(1.0, score))

        flags = raw.get("flags") or []
        if not isinstance(flags, list | tuple):
            flags = [flags]
        unique_flags = tuple(dict.fromkeys(str(f) for f in flags if f))

        return cls(
            category=category,
            sentiment=sentiment,
            sentiment_score=score,
            flags=unique_flags,
            summary=str(raw.get("summary") or ""),
        )


@dataclass(frozen=True)
class ExtractedTerm:
    """A franchise-relevant word or phrase with the sentiment of its context."""

    word: str
    sentiment: str


class Classifier(ABC):
    """Abstract review classifier interface."""

    @abstractmethod
    def classify(self, title: str, content: str) -> ClassificationResult:
        """Classify a review. May raise on transport or provider errors."""
        ...

    @abstractmethod
    def extract_terms(self, content: str) -> list[ExtractedTerm]:
        """Extract key terms with sentiment. May raise on transport or provider errors."""
        ...
