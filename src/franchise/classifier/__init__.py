"""Review classifier factory.

Provides get_classifier() / set_classifier() to swap implementations:
- FakeClassifier for development and testing
- OpenAIClassifier when OPENAI_API_KEY is configured
"""

import os

from franchise.classifier.fake_adapter import FakeClassifier
from franchise.classifier.port import Classifier

_current_classifier: Classifier | None = None


def get_classifier() -> Classifier:
    """Return the current classifier, choosing one from the environment on first use."""
    global _current_classifier
    if _current_classifier is None:
        if os.getenv("OPENAI_API_KEY"):
            from franchise.classifier.openai_adapter import OpenAIClassifier

            _current_classifier = OpenAIClassifier()
        else:
            _current_classifier = FakeClassifier()
    return _current_classifier


def set_classifier(classifier: Classifier) -> None:
    """Override the active classifier (useful for tests)."""
    global _current_classifier
    _current_classifier = classifier


def reset_classifier() -> None:
    """Reset to the default classifier."""
    global _current_classifier
    _current_classifier = None
