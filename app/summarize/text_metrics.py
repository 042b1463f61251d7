from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def count_words(text: str) -> int:
    """Count whitespace-separated words; blank text has zero words."""
    return len(text.split())


def compression_ratio(*, original_words: int, summary_words: int) -> str:
    """
    Percentage reduction in word count, formatted like `83.3%`.

    Ties round away from zero (12.25 -> 12.3). Zero original words has no defined
    ratio and is reported as `0.0%`.
    """

    if original_words <= 0:
        return "0.0%"
    # Decimal arithmetic keeps ties like 49/400 exact before rounding.
    ratio = Decimal(original_words - summary_words) * 100 / Decimal(original_words)
    rounded = ratio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded}%"
