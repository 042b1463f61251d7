from __future__ import annotations

from app.core.llm.groq_client import GroqClient, GroqConfig
from app.core.settings import get_settings


def get_groq_client() -> GroqClient | None:
    """
    Dependency provider for GroqClient.

    Returns None when no API key is configured so the route can answer with a
    configuration error instead of raising during dependency resolution.
    """

    settings = get_settings()
    if not settings.groq_api_key:
        return None

    config = GroqConfig(
        api_key=settings.groq_api_key,
        base_url=settings.groq_base_url,
        model=settings.groq_model,
        timeout_seconds=float(settings.groq_timeout_seconds),
        max_tokens=int(settings.groq_max_tokens),
        temperature=float(settings.groq_temperature),
    )
    return GroqClient(config=config)
