"""Typed notification intents.

An intent says who should hear about what. Rendering and delivery are the
notifier's concern.
"""

from dataclasses import dataclass

PREVIEW_LENGTH = 200


def preview_of(content: str | None) -> str:
    return (content or "")[:PREVIEW_LENGTH]


@dataclass(frozen=True)
class ReviewApproved:
    author_email: str
    brand_name: str
    review_id: str


@dataclass(frozen=True)
class ReviewRejected:
    author_email: str
    brand_name: str
    reason: str | None


@dataclass(frozen=True)
class NewReviewForClaimedBrand:
    owner_email: str
    brand_name: str
    preview: str
    rating: int
    review_id: str


@dataclass(frozen=True)
class ReviewResponsePosted:
    author_email: str
    brand_name: str
    preview: str
    review_id: str


@dataclass(frozen=True)
class PaymentConfirmed:
    user_email: str
    brand_name: str
    amount: int  # minor units
    currency: str
    session_id: str


Intent = ReviewApproved | ReviewRejected | NewReviewForClaimedBrand | ReviewResponsePosted | PaymentConfirmed


def recipient_of(intent: Intent) -> str:
    for attr in ("author_email", "owner_email", "user_email"):
        value = getattr(intent, attr, None)
        if value:
            return value
    raise ValueError(f"{type(intent).__name__} has no recipient")
