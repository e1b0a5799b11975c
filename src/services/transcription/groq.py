"""Groq Whisper STT via the OpenAI-compatible transcription endpoint.

Uploads one audio payload as ``multipart/form-data`` with a bearer token
and returns the ``text`` field of the JSON response.
"""

import logging

import httpx

from src.core.config import get_settings
from src.core.exceptions import TranscriptionError
from src.core.models import TranscriptionResult
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class GroqTranscriber(BaseSTT):
    """Speech-to-text provider backed by Groq's hosted Whisper models.

    Args:
        api_key: Bearer credential (defaults to ``groq_transcription_api_key``).
        url: Transcription endpoint URL.
        model: Model identifier sent in the ``model`` form field.
        filename: Filename attached to the ``file`` form field.
        timeout: Request timeout in seconds.
        client: Optional shared ``httpx.AsyncClient`` (a fresh one is used
            per call otherwise).
    """

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        model: str | None = None,
        filename: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.groq_transcription_api_key
        self._url = url or settings.transcription_url
        self._model = model or settings.transcription_model
        self._filename = filename or settings.transcription_filename
        self._timeout = timeout or settings.transcription_timeout
        self._client = client

    async def transcribe(self, audio: bytes, **kwargs) -> TranscriptionResult:
        """Upload ``audio`` and return the recognized text.

        Keyword Args:
            language: Optional ISO-639-1 hint forwarded as a form field.
            prompt: Optional context text forwarded as a form field.
        """
        data = {"model": self._model}
        for field in ("language", "prompt"):
            if kwargs.get(field):
                data[field] = kwargs[field]
        files = {"file": (self._filename, audio, "audio/wav")}
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            if self._client is not None:
                resp = await self._client.post(self._url, data=data, files=files, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(self._url, data=data, files=files, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("Transcription request timed out: %s", exc)
            raise TranscriptionError(f"Transcription request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Transcription request failed: %s", exc)
            raise TranscriptionError(f"Network error: {exc}") from exc

        logger.debug("Transcription response status: %s", resp.status_code)
        if not resp.is_success:
            raise TranscriptionError(
                f"HTTP error! status: {resp.status_code}", status_code=resp.status_code
            )

        try:
            body = resp.json()
            text = body["text"]
        except (ValueError, KeyError, TypeError) as exc:
            raise TranscriptionError(
                f"Malformed transcription response: {exc}", status_code=resp.status_code
            ) from exc

        return TranscriptionResult(
            text=text,
            status_code=resp.status_code,
            language=body.get("language"),
            duration=body.get("duration"),
        )
