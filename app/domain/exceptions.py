from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """An error with a fixed HTTP status and a `{error, message}` response body."""

    status_code: int = 500

    def __init__(
        self,
        error: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: Any = None,
    ):
        super().__init__(message or error)
        self.error = error
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            content["message"] = self.message
        if self.details is not None:
            content["details"] = self.details
        return content


class PayloadValidationError(ApiError):
    """Raised when a request payload violates field constraints."""

    status_code = 400

    def __init__(self, violations: list[dict[str, str]]):
        super().__init__("Validation failed", details=violations)
        self.violations = violations


class ProviderError(ApiError):
    """Raised at the route boundary for a classified summarization provider failure."""

    def __init__(
        self,
        kind: str,
        error: str,
        message: str,
        *,
        status_code: int,
        details: Any = None,
    ):
        super().__init__(error, message, status_code=status_code, details=details)
        self.kind = kind
