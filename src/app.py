"""ZeeVerify FastAPI application.

Processes commands synchronously via HTTP. Every request runs inside the
franchise domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from franchise.domain import franchise
from franchise.utils.logging import configure_logging

configure_logging()
franchise.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ZeeVerify API",
    description="Franchise reviews, moderation, brand reputation and brand claims",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Protean domain context for each request."""
    with franchise.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from franchise.api.errors import register_error_handlers  # noqa: E402
from franchise.api.routes import (  # noqa: E402
    account_router,
    brand_router,
    moderation_router,
    payment_router,
    review_router,
)

app.include_router(account_router)
app.include_router(brand_router)
app.include_router(review_router)
app.include_router(moderation_router)
app.include_router(payment_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": franchise.name})
