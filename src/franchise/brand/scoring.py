"""Brand reputation arithmetic.

The Z-Score is a weighted blend of the overall rating (40%) and the four
category averages (15% each). Sums and means are accumulated as Decimal and
only the persisted values are rounded, so thousands of reviews produce the
same result regardless of summation order.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

OVERALL_WEIGHT = Decimal("0.4")
CATEGORY_WEIGHT = Decimal("0.15")
CATEGORIES = ("support", "training", "profitability", "culture")

_ZERO = Decimal("0")
_TWO_PLACES = Decimal("0.01")


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def _mean(values: list[int]) -> Decimal:
    # No ratings present for a category counts as 0 in the weighted formula
    if not values:
        return _ZERO
    return Decimal(sum(values)) / Decimal(len(values))


@dataclass(frozen=True)
class BrandScores:
    """Rounded reputation metrics derived from a set of approved reviews."""

    total_reviews: int
    average_rating: Decimal
    z_score: Decimal
    support_score: Decimal
    training_score: Decimal
    profitability_score: Decimal
    culture_score: Decimal

    @classmethod
    def empty(cls) -> "BrandScores":
        return cls(
            total_reviews=0,
            average_rating=_ZERO,
            z_score=_ZERO,
            support_score=_ZERO,
            training_score=_ZERO,
            profitability_score=_ZERO,
            culture_score=_ZERO,
        )


def compute_brand_scores(ratings: Iterable) -> BrandScores:
    """Compute reputation metrics from the ratings of every approved review.

    Each item must expose ``overall`` and the optional category attributes
    ``support``, ``training``, ``profitability`` and ``culture``.
    """
    overall: list[int] = []
    by_category: dict[str, list[int]] = {c: [] for c in CATEGORIES}

    for rating in ratings:
        overall.append(int(rating.overall))
        for category in CATEGORIES:
            value = getattr(rating, category, None)
            if value is not None:
                by_category[category].append(int(value))

    if not overall:
        return BrandScores.empty()

    average_rating = _mean(overall)
    category_means = {c: _mean(values) for c, values in by_category.items()}

    z_score = OVERALL_WEIGHT * average_rating + sum(
        (CATEGORY_WEIGHT * category_means[c] for c in CATEGORIES),
        _ZERO,
    )

    return BrandScores(
        total_reviews=len(overall),
        average_rating=_quantize(average_rating),
        z_score=_quantize(z_score),
        support_score=_quantize(category_means["support"]),
        training_score=_quantize(category_means["training"]),
        profitability_score=_quantize(category_means["profitability"]),
        culture_score=_quantize(category_means["culture"]),
    )
