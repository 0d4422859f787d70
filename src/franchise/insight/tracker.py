"""Brand term tracking: upsert extracted terms and read the top terms."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from franchise.classifier.port import ExtractedTerm, Sentiment
from franchise.insight.word_frequency import MAX_WORD_LENGTH, WordFrequency, word_frequency_id

logger = structlog.get_logger(__name__)

DEFAULT_TOP_TERMS = 20

_SENTIMENTS = {s.value for s in Sentiment}


def normalize_terms(terms: list[ExtractedTerm]) -> dict[str, str]:
    """Map normalised word → sentiment.

    Words are trimmed, lower-cased and truncated; blanks are dropped. A word
    repeated within one review counts once and its last sentiment wins.
    """
    normalized: dict[str, str] = {}
    for term in terms:
        word = (term.word or "").strip().lower()[:MAX_WORD_LENGTH].strip()
        if not word:
            continue
        sentiment = (term.sentiment or "").strip().lower()
        normalized[word] = sentiment if sentiment in _SENTIMENTS else Sentiment.NEUTRAL.value
    return normalized


def track_review_terms(brand_id, terms: list[ExtractedTerm]) -> int:
    """Increment the brand's count for each term. Returns the number of distinct terms."""
    repo = current_domain.repository_for(WordFrequency)
    normalized = normalize_terms(terms)

    for word, sentiment in normalized.items():
        try:
            record = repo.get(word_frequency_id(brand_id, word))
            record.record_occurrence(sentiment)
        except ObjectNotFoundError:
            record = WordFrequency.first_seen(brand_id, word, sentiment)
        repo.add(record)

    logger.debug("brand_terms_tracked", brand_id=str(brand_id), terms=len(normalized))
    return len(normalized)


def top_terms(brand_id, limit: int = DEFAULT_TOP_TERMS) -> list[WordFrequency]:
    """Return the brand's most frequent terms, highest count first."""
    repo = current_domain.repository_for(WordFrequency)
    return (
        repo._dao.query.filter(brand_id=str(brand_id))
        .order_by(["-count", "word"])
        .limit(limit)
        .all()
        .items
    )
