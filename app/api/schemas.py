from __future__ import annotations

from pydantic import BaseModel, Field


class InfoOut(BaseModel):
    """Static service metadata."""

    message: str = Field(examples=["Text Summarizer API"])
    version: str = Field(examples=["1.0.0"])
    provider: str = Field(examples=["Groq"])
    endpoints: dict[str, str] = Field(
        description="Available routes mapped to a short description.",
    )


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="`healthy` means the API process is up and responding.",
        examples=["healthy"],
    )
    timestamp: str = Field(description="Current server time (ISO-8601, UTC).")
    uptime: float = Field(ge=0, description="Seconds since the process started.")
    provider: str = Field(examples=["Groq"])


class ErrorOut(BaseModel):
    error: str
    message: str | None = None
