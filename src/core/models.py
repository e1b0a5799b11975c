"""
Pydantic v2 request / response models used across the API layer.

v0.1.0: Health, Completion, Transcription, Error
"""

from datetime import datetime

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


class CompletionRequest(BaseModel):
    """POST /completions request body.

    ``prompt`` is optional at the schema level so that a missing field is
    reported as "Prompt is required" rather than a generic validation error.
    """

    prompt: str | None = None


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint."""

    error: str


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscriptionResult(BaseModel):
    """Parsed response of the external speech-to-text endpoint."""

    text: str
    status_code: int = 200
    language: str | None = None
    duration: float | None = None
