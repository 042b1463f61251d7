from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SummaryTone = Literal["professional", "casual", "academic", "creative"]
SummaryLength = Literal["short", "medium", "long"]

TONES: tuple[str, ...] = ("professional", "casual", "academic", "creative")
LENGTHS: tuple[str, ...] = ("short", "medium", "long")

DEFAULT_TONE: SummaryTone = "professional"
DEFAULT_LENGTH: SummaryLength = "medium"

MIN_TEXT_CHARS = 200
MAX_TEXT_CHARS = 10_000


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummarizeRequest(BaseModel):
    """A validated request; defaults are already applied."""

    text: str = Field(min_length=MIN_TEXT_CHARS, max_length=MAX_TEXT_CHARS)
    tone: SummaryTone = DEFAULT_TONE
    length: SummaryLength = DEFAULT_LENGTH


class FieldViolation(BaseModel):
    field: str
    message: str


class SummarySettings(BaseModel):
    tone: SummaryTone
    length: SummaryLength


class SummaryData(_CamelModel):
    original_text: str
    summary: str
    original_word_count: int = Field(ge=0)
    summary_word_count: int = Field(ge=0)
    compression_ratio: str = Field(examples=["83.3%"])
    settings: SummarySettings
    model: str


class SummarizeOut(BaseModel):
    success: bool = True
    data: SummaryData
    timestamp: str


class ValidationErrorOut(BaseModel):
    error: str = Field(examples=["Validation failed"])
    details: list[FieldViolation]


class RateLimitedOut(_CamelModel):
    error: str
    retry_after: int
