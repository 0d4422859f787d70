"""HTTP mapping for domain errors.

Protean's handlers cover validation (400), not found (404) and illegal
state (409). Authorization failures and forged webhooks are mapped here.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError
from protean.integrations.fastapi import register_exception_handlers

from franchise.gateway.port import WebhookSignatureError

logger = structlog.get_logger(__name__)


async def _forbidden(_request: Request, exc: InvalidOperationError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"error": str(exc)})


async def _bad_signature(request: Request, exc: WebhookSignatureError) -> JSONResponse:
    logger.warning("webhook_signature_invalid", path=request.url.path, reason=str(exc))
    return JSONResponse(status_code=400, content={"error": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(InvalidOperationError, _forbidden)
    app.add_exception_handler(WebhookSignatureError, _bad_signature)
