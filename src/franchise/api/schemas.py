"""Pydantic request/response schemas for the franchise review API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterAccountRequest(BaseModel):
    email: str = Field(max_length=255)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    # Administrators are provisioned out of band
    role: Literal["browser", "franchisee", "franchisor"] = "browser"


class ListBrandRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None


class RatingsSchema(BaseModel):
    overall: int = Field(ge=1, le=5)
    support: int | None = Field(default=None, ge=1, le=5)
    training: int | None = Field(default=None, ge=1, le=5)
    profitability: int | None = Field(default=None, ge=1, le=5)
    culture: int | None = Field(default=None, ge=1, le=5)


class SubmitReviewRequest(BaseModel):
    brand_id: str
    author_id: str
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    ratings: RatingsSchema
    years_as_franchisee: int | None = Field(default=None, ge=0)


class ModerateReviewRequest(BaseModel):
    moderator_id: str
    action: str  # "approve" or "reject"
    notes: str | None = None


class ReportReviewRequest(BaseModel):
    reporter_id: str
    reason: str = Field(min_length=1, max_length=100)
    description: str | None = None


class RespondToReviewRequest(BaseModel):
    responder_id: str
    content: str = Field(min_length=1)


class StartCheckoutRequest(BaseModel):
    user_id: str
    return_url: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class AccountIdResponse(BaseModel):
    account_id: str


class BrandIdResponse(BaseModel):
    brand_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class ResponseIdResponse(BaseModel):
    response_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class BrandResponse(BaseModel):
    brand_id: str
    name: str
    slug: str
    category: str | None = None
    description: str | None = None
    is_claimed: bool
    claimed_by_id: str | None = None
    total_reviews: int
    average_rating: float
    z_score: float
    support_score: float
    training_score: float
    profitability_score: float
    culture_score: float
    scores_updated_at: datetime | None = None


class ScoresResponse(BaseModel):
    brand_id: str
    total_reviews: int
    average_rating: float
    z_score: float


class TermResponse(BaseModel):
    word: str
    count: int
    sentiment: str


class InsightsResponse(BaseModel):
    brand_id: str
    terms: list[TermResponse]


class CheckoutResponse(BaseModel):
    session_id: str
    client_secret: str | None = None


class ModerationLogEntry(BaseModel):
    action: str
    moderator_id: str
    previous_status: str
    new_status: str
    notes: str | None = None
    created_at: datetime


class ModerationLogResponse(BaseModel):
    review_id: str
    entries: list[ModerationLogEntry]


class QueueEntry(BaseModel):
    review_id: str
    brand_id: str
    title: str
    overall_rating: int
    moderation_category: str | None = None
    sentiment: str | None = None
    report_count: int
    status: str
    submitted_at: datetime | None = None


class ModerationQueueResponse(BaseModel):
    entries: list[QueueEntry]


class WebhookResponse(BaseModel):
    received: bool = True
    outcome: str
