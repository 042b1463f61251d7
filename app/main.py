from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut, InfoOut
from app.core.clock import process_uptime_seconds, utc_now_iso
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.middleware.security_headers import SecurityHeadersMiddleware
from app.core.rate_limit import ClientRateLimiter, RateLimitMiddleware
from app.core.settings import get_settings
from app.summarize.router import router as summarize_router

setup_logging()
logger = logging.getLogger("app")

PROVIDER_NAME = "Groq"

ENDPOINTS = {
    "POST /summarize": "Summarize text using AI",
    "GET /health": "Health check endpoint",
    "GET /metrics": "Prometheus metrics",
}


def create_app(*, rate_limiter: ClientRateLimiter | None = None) -> FastAPI:
    """Build the application; pass `rate_limiter` to replace the configured one."""

    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Text Summarizer API ready (%s), environment=%s, port=%s",
            PROVIDER_NAME,
            settings.app_env,
            settings.port,
        )
        if not settings.groq_api_key:
            logger.warning("GROQ_API_KEY is not set; /summarize will answer with 500")
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "Summarize text with a hosted language model.\n\n"
            "- Submitted text and generated summaries are never stored or logged.\n"
            "- Requests are rate limited per client address (in-memory, per process)."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": "Service metadata and uptime checks.",
            },
            {
                "name": "summarize",
                "description": "Text summarization backed by the configured provider.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.state.rate_limiter = rate_limiter or ClientRateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.rate_limit_max_requests,
    )

    # Last added runs first: logging wraps everything, the limiter runs right before routing.
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/", response_model=InfoOut, tags=["health"], summary="Service information")
    async def info() -> InfoOut:
        return InfoOut(
            message=settings.app_name,
            version=settings.app_version,
            provider=PROVIDER_NAME,
            endpoints=ENDPOINTS,
        )

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint does not call the provider so it can be used for basic uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(
            status="healthy",
            timestamp=utc_now_iso(),
            uptime=process_uptime_seconds(),
            provider=PROVIDER_NAME,
        )

    app.include_router(metrics_router)
    app.include_router(summarize_router)
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
