from __future__ import annotations

import pytest

from app.summarize.validation import validate_summarize_payload
from tests._helpers import VALID_TEXT


def _messages(payload) -> dict[str, str]:
    outcome = validate_summarize_payload(payload)
    assert not outcome.ok
    return {v.field: v.message for v in outcome.violations}


def test_defaults_are_applied_when_tone_and_length_are_absent() -> None:
    outcome = validate_summarize_payload({"text": VALID_TEXT})
    assert outcome.ok
    assert outcome.violations == []
    assert outcome.request is not None
    assert outcome.request.tone == "professional"
    assert outcome.request.length == "medium"


def test_supplied_values_are_kept() -> None:
    outcome = validate_summarize_payload({"text": VALID_TEXT, "tone": "academic", "length": "long"})
    assert outcome.request is not None
    assert (outcome.request.tone, outcome.request.length) == ("academic", "long")


def test_extra_fields_are_ignored() -> None:
    assert validate_summarize_payload({"text": VALID_TEXT, "model": "other"}).ok


@pytest.mark.parametrize("text", [None, 123, ["a"] * 300, {"a": 1}])
def test_text_must_be_a_string(text) -> None:
    assert _messages({"text": text}) == {"text": "Text must be a string"}


def test_missing_text_is_rejected() -> None:
    assert _messages({}) == {"text": "Text must be a string"}


def test_bounds_are_inclusive() -> None:
    assert validate_summarize_payload({"text": "x" * 200}).ok
    assert validate_summarize_payload({"text": "x" * 10_000}).ok
    assert _messages({"text": "x" * 199}) == {
        "text": "Text must be at least 200 characters long"
    }
    assert _messages({"text": "x" * 10_001}) == {
        "text": "Text must not exceed 10,000 characters"
    }


def test_null_tone_counts_as_present() -> None:
    assert _messages({"text": VALID_TEXT, "tone": None}) == {
        "tone": "Tone must be one of: professional, casual, academic, creative"
    }


def test_unknown_length_is_rejected() -> None:
    assert _messages({"text": VALID_TEXT, "length": "SHORT"}) == {
        "length": "Length must be one of: short, medium, long"
    }


@pytest.mark.parametrize("payload", [None, [], "text", 42])
def test_non_object_body_is_a_single_violation(payload) -> None:
    assert _messages(payload) == {"body": "Request body must be a JSON object"}
