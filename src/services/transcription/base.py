"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface, enabling
provider-agnostic transcription in the recorder orchestrator.
"""

from abc import ABC, abstractmethod

from src.core.models import TranscriptionResult


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio: bytes, **kwargs) -> TranscriptionResult:
        """Transcribe one complete audio payload to text.

        Args:
            audio: Encoded audio file contents (e.g. WAV).
            **kwargs: Provider-specific options (language, prompt, etc.).

        Returns:
            The recognized text and the upstream status code.

        Raises:
            TranscriptionError: On transport failure, non-2xx status, or a
                response without a ``text`` field.
        """
