"""Process-local fixed-window rate limiting keyed by client address.

Counting is delegated to the `limits` package (the engine under slowapi). The
limiter is an explicit object built once per app (see `create_app`) and read
from `app.state.rate_limiter`, so tests can inject their own. Counters live in
memory: they are lost on restart and not shared between processes.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Request
from fastapi.responses import JSONResponse
from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.rate_limit")

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    # Seconds until the client's current window resets.
    reset_after: float

    @property
    def retry_after(self) -> int:
        """Whole seconds a denied client should wait (at least 1)."""
        return max(1, math.ceil(self.reset_after))


class ClientRateLimiter:
    """Fixed-window limiter: at most `max_requests` per client per `window_seconds`."""

    def __init__(
        self,
        *,
        window_seconds: int,
        max_requests: int,
        storage: Storage | None = None,
        clock: Callable[[], float] = time.time,
    ):
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self._item = RateLimitItemPerSecond(max_requests, window_seconds)
        self._storage = storage or MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)
        # Must share a time base with the storage's window expiry (wall clock).
        self._clock = clock

    @property
    def window_seconds(self) -> int:
        return self._item.get_expiry()

    @property
    def max_requests(self) -> int:
        return self._item.amount

    @property
    def storage(self) -> Storage:
        return self._storage

    def admit(self, client_key: str) -> RateLimitDecision:
        """Count one request for `client_key` and decide whether it may proceed."""

        # The storage increments and checks under a per-key lock.
        allowed = self._strategy.hit(self._item, client_key)
        stats = self._strategy.get_window_stats(self._item, client_key)
        reset_after = min(max(stats.reset_time - self._clock(), 0.0), self.window_seconds)
        return RateLimitDecision(
            allowed=allowed,
            limit=self.max_requests,
            remaining=stats.remaining,
            reset_after=reset_after,
        )

    def reset(self) -> None:
        self._storage.reset()


def _client_key(request: Request) -> str:
    client = request.client
    if client is None or not client.host:
        return "unknown"
    return client.host


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(decision.retry_after),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply `app.state.rate_limiter` to every request before routing."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: ClientRateLimiter = request.app.state.rate_limiter
        decision = limiter.admit(_client_key(request))
        headers = _rate_limit_headers(decision)

        if not decision.allowed:
            logger.info(
                "Rate limit exceeded",
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "http_method": request.method,
                    "request_path": "unmatched",
                    "status_code": 429,
                    "retry_after": decision.retry_after,
                },
            )
            headers["Retry-After"] = str(decision.retry_after)
            return JSONResponse(
                status_code=429,
                content={"error": RATE_LIMIT_MESSAGE, "retryAfter": decision.retry_after},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
