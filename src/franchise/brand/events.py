"""Domain events for the Brand aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from franchise.domain import franchise


@franchise.event(part_of="Brand")
class BrandListed:
    """A franchise brand was added to the directory."""

    __version__ = 1

    brand_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    listed_at = DateTime(required=True)


@franchise.event(part_of="Brand")
class BrandScoresRecalculated:
    """The brand's reputation metrics were recomputed from its approved reviews."""

    __version__ = 1

    brand_id = Identifier(required=True)
    total_reviews = Integer(required=True)
    average_rating = Float(required=True)
    z_score = Float(required=True)
    support_score = Float()
    training_score = Float()
    profitability_score = Float()
    culture_score = Float()
    recalculated_at = DateTime(required=True)


@franchise.event(part_of="Brand")
class BrandClaimed:
    """A franchisor took ownership of the brand after a completed payment."""

    __version__ = 1

    brand_id = Identifier(required=True)
    brand_name = String(required=True)
    claimed_by_id = Identifier(required=True)
    gateway_session_id = String(required=True)
    amount = Integer(required=True)  # minor units
    currency = String(required=True)
    claimed_at = DateTime(required=True)
