from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from app.api.schemas import ErrorOut
from app.core.clock import utc_now_iso
from app.core.llm.deps import get_groq_client
from app.core.llm.groq_client import ProviderErrorKind
from app.core.metrics import summaries_total
from app.core.settings import get_settings
from app.domain.exceptions import PayloadValidationError, ProviderError
from app.summarize.schemas import RateLimitedOut, SummarizeOut, ValidationErrorOut
from app.summarize.service import SummarizationService
from app.summarize.validation import validate_summarize_payload

router = APIRouter(tags=["summarize"])
logger = logging.getLogger("app.summarize")

# (status, error, message) per provider failure; must cover every ProviderErrorKind.
PROVIDER_ERROR_RESPONSES: dict[ProviderErrorKind, tuple[int, str, str]] = {
    ProviderErrorKind.RATE_LIMITED: (
        503,
        "Service temporarily unavailable due to rate limits",
        "Please try again later",
    ),
    ProviderErrorKind.UNAUTHORIZED: (
        500,
        "Configuration error",
        "API key is invalid or missing",
    ),
    ProviderErrorKind.CONTENT_TOO_LONG: (
        400,
        "Text too long",
        "The provided text exceeds the maximum allowed length",
    ),
    ProviderErrorKind.TIMEOUT: (
        504,
        "Provider timeout",
        "The summarization provider did not respond in time",
    ),
    ProviderErrorKind.UNKNOWN: (
        500,
        "Internal server error",
        "Failed to generate summary. Please try again.",
    ),
}


def provider_error(kind: ProviderErrorKind, detail: str | None = None) -> ProviderError:
    status_code, error, message = PROVIDER_ERROR_RESPONSES[kind]
    # Only the generic failure may expose upstream details, and only in development.
    details = None
    if kind is ProviderErrorKind.UNKNOWN and get_settings().is_development:
        details = detail
    return ProviderError(kind.value, error, message, status_code=status_code, details=details)


async def _read_json_body(request: Request) -> Any:
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


@router.post(
    "/summarize",
    response_model=SummarizeOut,
    summary="Summarize text",
    description=(
        "Summarize 200-10,000 characters of text with the configured language model.\n\n"
        "Optional `tone` (professional|casual|academic|creative, default professional) and "
        "`length` (short|medium|long, default medium) steer the summary."
    ),
    responses={
        400: {"model": ValidationErrorOut, "description": "Invalid input or text too long"},
        429: {"model": RateLimitedOut, "description": "Local rate limit exceeded"},
        500: {"model": ErrorOut, "description": "Configuration or internal error"},
        503: {"model": ErrorOut, "description": "Provider rate limited"},
        504: {"model": ErrorOut, "description": "Provider timed out"},
    },
)
async def summarize_text(
    request: Request,
    groq_client=Depends(get_groq_client),
) -> SummarizeOut:
    """
    Summarize caller text. The text and the summary are never logged or stored.
    """

    payload = await _read_json_body(request)
    validation = validate_summarize_payload(payload)
    if not validation.ok or validation.request is None:
        summaries_total.labels(outcome="invalid").inc()
        raise PayloadValidationError([v.model_dump() for v in validation.violations])

    req = validation.request
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")

    if groq_client is None:
        summaries_total.labels(outcome=ProviderErrorKind.UNAUTHORIZED.value).inc()
        logger.warning(
            "Summary failed (LLM not configured)",
            extra={
                "request_id": request_id,
                "tone": req.tone,
                "length": req.length,
                "outcome": "failed",
                "error_kind": ProviderErrorKind.UNAUTHORIZED.value,
            },
        )
        raise provider_error(ProviderErrorKind.UNAUTHORIZED)

    outcome = await SummarizationService(llm_client=groq_client).summarize(req)
    if outcome.data is None:
        kind = outcome.error or ProviderErrorKind.UNKNOWN
        summaries_total.labels(outcome=kind.value).inc()
        logger.warning(
            "Summary failed",
            extra={
                "request_id": request_id,
                "tone": req.tone,
                "length": req.length,
                "outcome": "failed",
                "error_kind": kind.value,
            },
        )
        raise provider_error(kind, outcome.detail)

    summaries_total.labels(outcome="success").inc()
    logger.info(
        "Summary generated",
        extra={
            "request_id": request_id,
            "tone": req.tone,
            "length": req.length,
            "outcome": "success",
        },
    )
    return SummarizeOut(data=outcome.data, timestamp=utc_now_iso())
