from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.settings import get_settings
from app.domain.exceptions import ApiError, PayloadValidationError

logger = logging.getLogger("app.errors")


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        # Never log request bodies or the submitted text.
        logger.info(
            "Payload validation failed"
            if isinstance(exc, PayloadValidationError)
            else "Request failed",
            extra={
                "request_id": _request_id(request),
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "error_kind": getattr(exc, "kind", None),
            },
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown paths and known paths with an unsupported method are both "not found".
        if exc.status_code in (404, 405):
            target = request.url.path
            if request.url.query:
                target = f"{target}?{request.url.query}"
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Endpoint not found",
                    "message": f"The endpoint {request.method} {target} does not exist",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        # Last resort: must never raise itself.
        logger.error(
            "Unhandled error",
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={
                "request_id": _request_id(request),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": 500,
            },
        )
        content = {
            "error": "Internal server error",
            "message": "Something went wrong on our end",
        }
        if get_settings().is_development:
            content["details"] = str(exc)
        return JSONResponse(status_code=500, content=content)
