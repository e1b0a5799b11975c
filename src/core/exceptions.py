"""
WhisperLive exception hierarchy.

All application-specific exceptions inherit from WhisperLiveError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class WhisperLiveError(Exception):
    """Base exception for all WhisperLive errors."""

    def __init__(
        self,
        detail: str = "An unknown error occurred",
        code: str = "WHISPERLIVE_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class PromptRequiredError(WhisperLiveError):
    """Raised when a completion request carries no usable prompt."""

    def __init__(self) -> None:
        super().__init__(
            detail="Prompt is required",
            code="PROMPT_REQUIRED",
            status_code=400,
        )


class CompletionStreamError(WhisperLiveError):
    """Raised when the upstream completion stream cannot be established."""

    def __init__(self, detail: str = "An unknown error occurred") -> None:
        super().__init__(
            detail=detail or "An unknown error occurred",
            code="COMPLETION_STREAM_ERROR",
            status_code=500,
        )


class TranscriptionError(WhisperLiveError):
    """Raised when the speech-to-text upload fails."""

    def __init__(self, detail: str = "Transcription failed", status_code: int | None = None) -> None:
        self.upstream_status = status_code
        super().__init__(
            detail=detail,
            code="TRANSCRIPTION_ERROR",
            status_code=500,
        )


class MicrophoneUnavailableError(WhisperLiveError, PermissionError):
    """Raised when microphone access is denied or no input device exists."""

    def __init__(self, detail: str = "Microphone is not available") -> None:
        super().__init__(
            detail=detail,
            code="MICROPHONE_UNAVAILABLE",
            status_code=503,
        )
