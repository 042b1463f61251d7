from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, cast

from app.summarize.schemas import (
    DEFAULT_LENGTH,
    DEFAULT_TONE,
    LENGTHS,
    MAX_TEXT_CHARS,
    MIN_TEXT_CHARS,
    TONES,
    FieldViolation,
    SummarizeRequest,
    SummaryLength,
    SummaryTone,
)

_MISSING = object()


@dataclass(frozen=True)
class ValidationOutcome:
    """Either a normalized request or an ordered list of violations."""

    request: SummarizeRequest | None = None
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.request is not None


def _check_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return "Text must be a string"
    if len(value) < MIN_TEXT_CHARS:
        return f"Text must be at least {MIN_TEXT_CHARS} characters long"
    if len(value) > MAX_TEXT_CHARS:
        return f"Text must not exceed {MAX_TEXT_CHARS:,} characters"
    return None


def validate_summarize_payload(payload: Any) -> ValidationOutcome:
    """
    Check a decoded JSON body against the summarize request rules.

    Fields are checked in order (text, tone, length). `tone` and `length` are optional,
    but a key that is present must hold an allowed value (null included).
    """

    if not isinstance(payload, dict):
        return ValidationOutcome(
            violations=[FieldViolation(field="body", message="Request body must be a JSON object")]
        )

    violations: list[FieldViolation] = []

    text = payload.get("text")
    text_error = _check_text(text)
    if text_error is not None:
        violations.append(FieldViolation(field="text", message=text_error))

    tone = payload.get("tone", _MISSING)
    if tone is not _MISSING and tone not in TONES:
        violations.append(
            FieldViolation(field="tone", message=f"Tone must be one of: {', '.join(TONES)}")
        )

    length = payload.get("length", _MISSING)
    if length is not _MISSING and length not in LENGTHS:
        violations.append(
            FieldViolation(field="length", message=f"Length must be one of: {', '.join(LENGTHS)}")
        )

    if violations:
        return ValidationOutcome(violations=violations)

    request = SummarizeRequest(
        text=cast(str, text),
        tone=cast(SummaryTone, DEFAULT_TONE if tone is _MISSING else tone),
        length=cast(SummaryLength, DEFAULT_LENGTH if length is _MISSING else length),
    )
    return ValidationOutcome(request=request)
