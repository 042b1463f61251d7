"""Shared test doubles."""

from __future__ import annotations

from app.core.llm.groq_client import CompletionResult, ProviderErrorKind

# 60 words, 300 characters.
VALID_TEXT = "word " * 60


class FakeLLMClient:
    """Records prompts and returns a canned completion result."""

    model = "fake-model"

    def __init__(self, result: CompletionResult | None = None):
        self.result = result or CompletionResult.success("A short stub summary.")
        self.calls: list[tuple[str, str]] = []

    async def complete(self, *, system_prompt: str, user_prompt: str) -> CompletionResult:
        self.calls.append((system_prompt, user_prompt))
        return self.result


def failing_client(kind: ProviderErrorKind, detail: str = "upstream said no") -> FakeLLMClient:
    return FakeLLMClient(CompletionResult.failure(kind, detail))
