from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import httpx


class ProviderErrorKind(str, enum.Enum):
    """Classified provider failures; each maps to a distinct HTTP response."""

    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    CONTENT_TOO_LONG = "content_too_long"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CompletionResult:
    """Either a generated text or a classified error, never both."""

    text: str | None = None
    error: ProviderErrorKind | None = None
    # Upstream description; only ever surfaced to callers in development mode.
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> CompletionResult:
        return cls(text=text)

    @classmethod
    def failure(cls, kind: ProviderErrorKind, detail: str | None = None) -> CompletionResult:
        return cls(error=kind, detail=detail)


@dataclass(frozen=True)
class GroqConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float
    max_tokens: int = 300
    temperature: float = 0.3


def _error_text(resp: httpx.Response) -> str:
    """Best-effort extraction of the provider's error message and code."""

    try:
        data = resp.json()
    except ValueError:
        return resp.text

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        parts = [str(error.get(k)) for k in ("code", "type", "message") if error.get(k)]
        return " ".join(parts)
    if error:
        return str(error)
    return resp.text


def _classify_status(resp: httpx.Response) -> CompletionResult:
    detail = _error_text(resp)
    if resp.status_code == 429:
        return CompletionResult.failure(ProviderErrorKind.RATE_LIMITED, detail)
    if resp.status_code == 401:
        return CompletionResult.failure(ProviderErrorKind.UNAUTHORIZED, detail)
    if "context_length" in detail:
        return CompletionResult.failure(ProviderErrorKind.CONTENT_TOO_LONG, detail)
    return CompletionResult.failure(
        ProviderErrorKind.UNKNOWN, f"Provider returned HTTP {resp.status_code}: {detail}"
    )


class GroqClient:
    """
    Minimal Groq chat-completions client (OpenAI-compatible wire format).

    Design notes:
    - No logging in this module (prompts/outputs are caller content).
    - One attempt per call; the timeout is enforced by the httpx transport.
    - Every failure is returned as a classified `CompletionResult`.
    """

    def __init__(
        self,
        *,
        config: GroqConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(self, *, system_prompt: str, user_prompt: str) -> CompletionResult:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            return CompletionResult.failure(ProviderErrorKind.TIMEOUT, str(exc) or "timed out")
        except httpx.HTTPError as exc:
            return CompletionResult.failure(
                ProviderErrorKind.UNKNOWN, f"LLM request failed: {exc!s}"
            )

        if resp.status_code != 200:
            return _classify_status(resp)

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            return CompletionResult.failure(
                ProviderErrorKind.UNKNOWN, f"Unexpected LLM response shape: {exc!r}"
            )

        if not isinstance(content, str) or not content.strip():
            return CompletionResult.failure(ProviderErrorKind.UNKNOWN, "LLM returned no content")

        return CompletionResult.success(content.strip())
