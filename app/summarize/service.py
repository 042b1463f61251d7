from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from app.core.llm.groq_client import CompletionResult, ProviderErrorKind
from app.summarize.prompt import build_summary_prompts
from app.summarize.schemas import SummarizeRequest, SummaryData, SummarySettings
from app.summarize.text_metrics import compression_ratio, count_words


class LLMClient(Protocol):
    @property
    def model(self) -> str: ...

    async def complete(self, *, system_prompt: str, user_prompt: str) -> CompletionResult: ...


@dataclass(frozen=True)
class SummaryOutcome:
    """Either the assembled summary data or the classified provider failure."""

    data: SummaryData | None = None
    error: ProviderErrorKind | None = None
    detail: str | None = None


class SummarizationService:
    def __init__(self, *, llm_client: LLMClient):
        self._llm = llm_client

    async def summarize(self, request: SummarizeRequest) -> SummaryOutcome:
        system_prompt, user_prompt = build_summary_prompts(
            text=request.text, tone=request.tone, length=request.length
        )
        result = await self._llm.complete(system_prompt=system_prompt, user_prompt=user_prompt)
        if not result.ok or result.text is None:
            return SummaryOutcome(
                error=result.error or ProviderErrorKind.UNKNOWN, detail=result.detail
            )

        original_words = count_words(request.text)
        summary_words = count_words(result.text)
        data = SummaryData(
            original_text=request.text,
            summary=result.text,
            original_word_count=original_words,
            summary_word_count=summary_words,
            compression_ratio=compression_ratio(
                original_words=original_words, summary_words=summary_words
            ),
            settings=SummarySettings(tone=request.tone, length=request.length),
            model=self._llm.model,
        )
        return SummaryOutcome(data=data)
