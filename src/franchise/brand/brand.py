"""Brand aggregate (CQRS): a franchise brand listed in the directory.

The Brand owns two independent pieces of mutable state:

* Reputation aggregates (total_reviews, average_rating, z_score and the four
  category scores). They are only ever replaced wholesale from a freshly
  computed ``BrandScores`` and never patched incrementally.
* Ownership (is_claimed, claimed_by_id, claimed_at). Set exactly once, by a
  completed claim payment.
"""

import re
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from franchise.brand.events import BrandClaimed, BrandListed, BrandScoresRecalculated
from franchise.brand.scoring import BrandScores
from franchise.domain import franchise

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _SLUG_RE.sub("-", name.lower()).strip("-")


@franchise.aggregate
class Brand:
    name = String(required=True, max_length=255)
    slug = String(required=True, max_length=255, unique=True)
    category = String(max_length=100)
    description = Text()

    # Ownership
    is_claimed = Boolean(default=False)
    claimed_by_id = Identifier()
    claimed_at = DateTime()

    # Reputation aggregates (2 dp)
    total_reviews = Integer(default=0)
    average_rating = Float(default=0.0)
    z_score = Float(default=0.0)
    support_score = Float(default=0.0)
    training_score = Float(default=0.0)
    profitability_score = Float(default=0.0)
    culture_score = Float(default=0.0)
    scores_updated_at = DateTime()

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def claim_fields_must_agree(self):
        if self.is_claimed and not self.claimed_by_id:
            raise ValidationError({"claimed_by_id": ["A claimed brand must have a claim holder"]})

    @invariant.post
    def total_reviews_cannot_be_negative(self):
        if self.total_reviews is not None and self.total_reviews < 0:
            raise ValidationError({"total_reviews": ["Total reviews cannot be negative"]})

    @classmethod
    def create(cls, name, slug=None, category=None, description=None):
        """Add a brand to the directory, unclaimed and without reviews."""
        now = datetime.now(UTC)
        slug = slug or slugify(name)

        brand = cls(
            name=name,
            slug=slug,
            category=category,
            description=description,
            is_claimed=False,
            total_reviews=0,
            created_at=now,
            updated_at=now,
        )
        brand.raise_(
            BrandListed(
                brand_id=str(brand.id),
                name=name,
                slug=slug,
                listed_at=now,
            )
        )
        return brand

    def apply_scores(self, scores: BrandScores) -> None:
        """Replace every reputation aggregate with freshly computed values."""
        now = datetime.now(UTC)

        with atomic_change(self):
            self.total_reviews = scores.total_reviews
            self.average_rating = float(scores.average_rating)
            self.z_score = float(scores.z_score)
            self.support_score = float(scores.support_score)
            self.training_score = float(scores.training_score)
            self.profitability_score = float(scores.profitability_score)
            self.culture_score = float(scores.culture_score)
            self.scores_updated_at = now
            self.updated_at = now

        self.raise_(
            BrandScoresRecalculated(
                brand_id=str(self.id),
                total_reviews=self.total_reviews,
                average_rating=self.average_rating,
                z_score=self.z_score,
                support_score=self.support_score,
                training_score=self.training_score,
                profitability_score=self.profitability_score,
                culture_score=self.culture_score,
                recalculated_at=now,
            )
        )

    def is_claimed_by(self, account_id) -> bool:
        return bool(self.is_claimed) and str(self.claimed_by_id) == str(account_id)

    def assert_claimable(self) -> None:
        if self.is_claimed:
            raise InvalidStateError(f"Brand {self.name} has already been claimed")

    def claim(self, account_id, gateway_session_id, amount, currency) -> bool:
        """Record ``account_id`` as the brand's owner.

        Returns False when the same account already holds the claim. A claim
        held by a different account is never overwritten.
        """
        if self.is_claimed_by(account_id):
            return False
        self.assert_claimable()

        now = datetime.now(UTC)
        with atomic_change(self):
            self.is_claimed = True
            self.claimed_by_id = account_id
            self.claimed_at = now
            self.updated_at = now

        self.raise_(
            BrandClaimed(
                brand_id=str(self.id),
                brand_name=self.name,
                claimed_by_id=str(account_id),
                gateway_session_id=gateway_session_id,
                amount=amount,
                currency=currency,
                claimed_at=now,
            )
        )
        return True
