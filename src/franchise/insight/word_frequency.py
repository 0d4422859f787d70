"""WordFrequency aggregate: per-brand term counts for insight display.

One record exists per (brand, word). Its identity is derived from that pair
so concurrent first inserts of the same term collide instead of duplicating.
"""

import uuid
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from franchise.classifier.port import Sentiment
from franchise.domain import franchise

MAX_WORD_LENGTH = 100

_NAMESPACE = uuid.UUID("6f1c4f0e-2d7b-4b8e-9a43-3c1d5e7a9b20")


def word_frequency_id(brand_id, word: str) -> str:
    return str(uuid.uuid5(_NAMESPACE, f"{brand_id}:{word}"))


@franchise.aggregate
class WordFrequency:
    brand_id = Identifier(required=True)
    word = String(required=True, max_length=MAX_WORD_LENGTH)
    count = Integer(required=True, default=1)
    sentiment = String(choices=Sentiment, default=Sentiment.NEUTRAL.value)
    last_updated = DateTime()

    @invariant.post
    def count_must_be_positive(self):
        if self.count is not None and self.count < 1:
            raise ValidationError({"count": ["Word count must be at least 1"]})

    @classmethod
    def first_seen(cls, brand_id, word, sentiment):
        return cls(
            id=word_frequency_id(brand_id, word),
            brand_id=str(brand_id),
            word=word,
            count=1,
            sentiment=sentiment,
            last_updated=datetime.now(UTC),
        )

    def record_occurrence(self, sentiment):
        self.count = self.count + 1
        self.sentiment = sentiment
        self.last_updated = datetime.now(UTC)
