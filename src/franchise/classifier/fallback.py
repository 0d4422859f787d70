"""Degradation wrappers around the active classifier.

The classifier is never allowed to fail a submission or a moderation: a
failed classification becomes the conservative fallback verdict and a
failed term extraction yields no terms.
"""

import structlog

from franchise.classifier import get_classifier
from franchise.classifier.port import ClassificationResult, ExtractedTerm

logger = structlog.get_logger(__name__)


def classify_review(title: str, content: str) -> ClassificationResult:
    try:
        return get_classifier().classify(title, content)
    except Exception:
        logger.exception("review_classification_failed")
        return ClassificationResult.fallback()


def extract_review_terms(content: str) -> list[ExtractedTerm]:
    try:
        return get_classifier().extract_terms(content)
    except Exception:
        logger.exception("review_term_extraction_failed")
        return []
