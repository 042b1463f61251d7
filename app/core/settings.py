from __future__ import annotations

import math
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Text Summarizer API"
    app_version: str = "1.0.0"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
        description="Bind address for the HTTP server.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="Listening port for the HTTP server.",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
        description="Allowlist of origins for CORS.",
    )

    # Local rate limiting (per client address, process-local)
    rate_limit_window_ms: int = Field(
        default=15 * 60 * 1000,
        ge=1,
        validation_alias=AliasChoices("RATE_LIMIT_WINDOW_MS", "rate_limit_window_ms"),
        description="Rate-limit window length (milliseconds).",
    )
    rate_limit_max_requests: int = Field(
        default=100,
        ge=1,
        validation_alias=AliasChoices("RATE_LIMIT_MAX_REQUESTS", "rate_limit_max_requests"),
        description="Maximum requests per client address within one window.",
    )

    # LLM integration (Groq, OpenAI-compatible API)
    # Keep the key out of logs and error payloads.
    groq_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GROQ_API_KEY", "groq_api_key"),
        description="Groq API key (required for /summarize).",
    )
    groq_model: str = Field(
        default="llama-3.3-70b-versatile",
        validation_alias=AliasChoices("GROQ_MODEL", "groq_model"),
        description="Model identifier used for summary generation.",
    )
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        validation_alias=AliasChoices("GROQ_BASE_URL", "groq_base_url"),
        description="Base URL for the Groq API (override for proxies/emulators).",
    )
    groq_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("GROQ_TIMEOUT_SECONDS", "groq_timeout_seconds"),
        description="Timeout for Groq API requests (seconds).",
    )
    groq_max_tokens: int = Field(
        default=300,
        ge=1,
        validation_alias=AliasChoices("GROQ_MAX_TOKENS", "groq_max_tokens"),
        description="Upper bound on generated tokens per summary.",
    )
    groq_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("GROQ_TEMPERATURE", "groq_temperature"),
        description="Sampling temperature; low values favor repeatable summaries.",
    )

    @property
    def rate_limit_window_seconds(self) -> int:
        # Windows are counted in whole seconds; round partial seconds up.
        return max(1, math.ceil(self.rate_limit_window_ms / 1000))

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
