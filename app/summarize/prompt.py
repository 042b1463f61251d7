from __future__ import annotations

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, accurate summaries. "
    "Always respond with just the summary, no additional text."
)

_LENGTH_GUIDANCE = {
    "short": "1-2 sentences",
    "medium": "2-4 sentences",
    "long": "4-6 sentences",
}

_TONE_GUIDANCE = {
    "professional": "Use a professional and formal tone.",
    "casual": "Use a casual and conversational tone.",
    "academic": "Use an academic and scholarly tone.",
    "creative": "Use a creative and engaging tone.",
}


def summary_length_instruction(length: str | None) -> str:
    return _LENGTH_GUIDANCE.get(length or "", _LENGTH_GUIDANCE["medium"])


def tone_instruction(tone: str | None) -> str:
    return _TONE_GUIDANCE.get(tone or "", "")


def build_prompt(*, text: str, tone: str | None, length: str | None) -> str:
    return (
        f"Summarize this content in {summary_length_instruction(length)}. "
        f"{tone_instruction(tone)} Focus on the key points and main ideas:\n\n"
        f"{text}"
    )


def build_summary_prompts(*, text: str, tone: str, length: str) -> tuple[str, str]:
    """
    Create (system_prompt, user_prompt) for summary generation.

    The system prompt stays fixed; tone and length steering goes in the user prompt.
    """

    return SUMMARY_SYSTEM_PROMPT, build_prompt(text=text, tone=tone, length=length)
