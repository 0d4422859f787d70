"""FastAPI routes for the franchise review platform.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts).
"""

from fastapi import APIRouter, Header, Query, Request
from protean.utils.globals import current_domain

from franchise.account.registration import RegisterAccount
from franchise.api.schemas import (
    AccountIdResponse,
    BrandIdResponse,
    BrandResponse,
    CheckoutResponse,
    InsightsResponse,
    ListBrandRequest,
    ModerateReviewRequest,
    ModerationLogEntry,
    ModerationLogResponse,
    ModerationQueueResponse,
    QueueEntry,
    RegisterAccountRequest,
    ReportReviewRequest,
    ResponseIdResponse,
    RespondToReviewRequest,
    ReviewIdResponse,
    ScoresResponse,
    StartCheckoutRequest,
    StatusResponse,
    SubmitReviewRequest,
    TermResponse,
    WebhookResponse,
)
from franchise.brand.brand import Brand
from franchise.brand.listing import ListBrand
from franchise.brand.recompute import RecomputeBrandScores
from franchise.gateway import get_gateway
from franchise.insight.tracker import DEFAULT_TOP_TERMS, top_terms
from franchise.payment.checkout import StartClaimCheckout
from franchise.payment.webhook import WebhookProcessor
from franchise.projections.moderation_queue import queue_entries
from franchise.review.moderation import ModerateReview
from franchise.review.moderation_log import moderation_history
from franchise.review.reporting import ReportReview
from franchise.review.response import RespondToReview
from franchise.review.review import Review
from franchise.review.submission import SubmitReview


def _brand_response(brand: Brand) -> BrandResponse:
    return BrandResponse(
        brand_id=str(brand.id),
        name=brand.name,
        slug=brand.slug,
        category=brand.category,
        description=brand.description,
        is_claimed=bool(brand.is_claimed),
        claimed_by_id=str(brand.claimed_by_id) if brand.claimed_by_id else None,
        total_reviews=brand.total_reviews,
        average_rating=brand.average_rating,
        z_score=brand.z_score,
        support_score=brand.support_score,
        training_score=brand.training_score,
        profitability_score=brand.profitability_score,
        culture_score=brand.culture_score,
        scores_updated_at=brand.scores_updated_at,
    )


# ---------------------------------------------------------------------------
# Account Router
# ---------------------------------------------------------------------------
account_router = APIRouter(prefix="/accounts", tags=["accounts"])


@account_router.post("", status_code=201, response_model=AccountIdResponse)
async def register_account(body: RegisterAccountRequest) -> AccountIdResponse:
    command = RegisterAccount(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
    )
    account_id = current_domain.process(command, asynchronous=False)
    return AccountIdResponse(account_id=account_id)


# ---------------------------------------------------------------------------
# Brand Router
# ---------------------------------------------------------------------------
brand_router = APIRouter(prefix="/brands", tags=["brands"])


@brand_router.post("", status_code=201, response_model=BrandIdResponse)
async def list_brand(body: ListBrandRequest) -> BrandIdResponse:
    """Add a franchise brand to the directory."""
    command = ListBrand(
        name=body.name,
        slug=body.slug,
        category=body.category,
        description=body.description,
    )
    brand_id = current_domain.process(command, asynchronous=False)
    return BrandIdResponse(brand_id=brand_id)


@brand_router.get("/{brand_id}", response_model=BrandResponse)
async def get_brand(brand_id: str) -> BrandResponse:
    brand = current_domain.repository_for(Brand).get(brand_id)
    return _brand_response(brand)


@brand_router.get("/{brand_id}/insights", response_model=InsightsResponse)
async def get_brand_insights(
    brand_id: str,
    limit: int = Query(default=DEFAULT_TOP_TERMS, ge=1, le=100),
) -> InsightsResponse:
    """Most frequent terms across the brand's approved reviews."""
    current_domain.repository_for(Brand).get(brand_id)
    terms = [TermResponse(word=t.word, count=t.count, sentiment=t.sentiment) for t in top_terms(brand_id, limit)]
    return InsightsResponse(brand_id=brand_id, terms=terms)


@brand_router.post("/{brand_id}/recompute", response_model=ScoresResponse)
async def recompute_brand_scores(brand_id: str) -> ScoresResponse:
    """Rebuild the brand's scores from its approved reviews."""
    current_domain.process(RecomputeBrandScores(brand_id=brand_id), asynchronous=False)
    brand = current_domain.repository_for(Brand).get(brand_id)
    return ScoresResponse(
        brand_id=str(brand.id),
        total_reviews=brand.total_reviews,
        average_rating=brand.average_rating,
        z_score=brand.z_score,
    )


@brand_router.post("/{brand_id}/claim/checkout", response_model=CheckoutResponse)
async def start_claim_checkout(brand_id: str, body: StartCheckoutRequest) -> CheckoutResponse:
    command = StartClaimCheckout(
        brand_id=brand_id,
        user_id=body.user_id,
        return_url=body.return_url,
    )
    session = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(**session)


# ---------------------------------------------------------------------------
# Review Router
# ---------------------------------------------------------------------------
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest) -> ReviewIdResponse:
    """Submit a review. It stays pending until a moderator decides."""
    command = SubmitReview(
        brand_id=body.brand_id,
        author_id=body.author_id,
        title=body.title,
        content=body.content,
        overall_rating=body.ratings.overall,
        support_rating=body.ratings.support,
        training_rating=body.ratings.training,
        profitability_rating=body.ratings.profitability,
        culture_rating=body.ratings.culture,
        years_as_franchisee=body.years_as_franchisee,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@review_router.post("/{review_id}/moderate", response_model=StatusResponse)
async def moderate_review(review_id: str, body: ModerateReviewRequest) -> StatusResponse:
    """Approve or reject a pending review."""
    command = ModerateReview(
        review_id=review_id,
        moderator_id=body.moderator_id,
        action=body.action,
        notes=body.notes,
    )
    status = current_domain.process(command, asynchronous=False)
    return StatusResponse(status=status)


@review_router.post("/{review_id}/reports", response_model=StatusResponse)
async def report_review(review_id: str, body: ReportReviewRequest) -> StatusResponse:
    command = ReportReview(
        review_id=review_id,
        reporter_id=body.reporter_id,
        reason=body.reason,
        description=body.description,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="reported")


@review_router.post("/{review_id}/responses", status_code=201, response_model=ResponseIdResponse)
async def respond_to_review(review_id: str, body: RespondToReviewRequest) -> ResponseIdResponse:
    """Respond to an approved review as the brand's claim holder."""
    command = RespondToReview(
        review_id=review_id,
        responder_id=body.responder_id,
        content=body.content,
    )
    response_id = current_domain.process(command, asynchronous=False)
    return ResponseIdResponse(response_id=response_id)


@review_router.get("/{review_id}/moderation-log", response_model=ModerationLogResponse)
async def get_moderation_log(review_id: str) -> ModerationLogResponse:
    current_domain.repository_for(Review).get(review_id)
    entries = [
        ModerationLogEntry(
            action=entry.action,
            moderator_id=str(entry.moderator_id),
            previous_status=entry.previous_status,
            new_status=entry.new_status,
            notes=entry.notes,
            created_at=entry.created_at,
        )
        for entry in moderation_history(review_id)
    ]
    return ModerationLogResponse(review_id=review_id, entries=entries)


# ---------------------------------------------------------------------------
# Moderation Router
# ---------------------------------------------------------------------------
moderation_router = APIRouter(prefix="/moderation", tags=["moderation"])


@moderation_router.get("/queue", response_model=ModerationQueueResponse)
async def get_moderation_queue() -> ModerationQueueResponse:
    """Pending and reported reviews, oldest first."""
    items = queue_entries()
    return ModerationQueueResponse(
        entries=[
            QueueEntry(
                review_id=str(item.review_id),
                brand_id=str(item.brand_id),
                title=item.title,
                overall_rating=item.overall_rating,
                moderation_category=item.moderation_category,
                sentiment=item.sentiment,
                report_count=item.report_count or 0,
                status=item.status,
                submitted_at=item.submitted_at,
            )
            for item in items
        ]
    )


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/webhook", response_model=WebhookResponse)
async def payment_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None),
) -> WebhookResponse:
    """Receive a gateway webhook. The raw body is verified before parsing."""
    payload = await request.body()
    outcome = WebhookProcessor(get_gateway()).handle(payload, stripe_signature)
    return WebhookResponse(outcome=outcome.value)
