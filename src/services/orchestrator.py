"""Recorder orchestrator: start, stop, and periodic transcript generation.

One ``TranscriptionOrchestrator`` is owned by each UI session. It holds the
capture handle, the current recording session, the transcript, and the
diagnostic log, and exposes the three user actions. Failures never escape
these actions; they are written to the log and, for uploads, to the
transcript.

Usage::

    from src.services.orchestrator import TranscriptionOrchestrator

    orch = TranscriptionOrchestrator()
    orch.start()
    await orch.generate_transcript()
    orch.stop()
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from src.core.config import get_settings
from src.services.audio.capture import MicrophoneCapture
from src.services.audio.processor import AudioProcessor
from src.services.audio.recorder import RecordingSession
from src.services.transcript import SessionLog, Transcript
from src.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)

TRANSCRIPTION_ERROR_MARKER = "Error transcribing audio. Please try again."


@dataclass
class OrchestratorSnapshot:
    """Read-only view of the orchestrator for rendering."""

    is_recording: bool
    transcript: str
    log: list[str] = field(default_factory=list)
    buffered_chunks: int = 0
    buffered_bytes: int = 0
    input_level: float = 0.0


class TranscriptionOrchestrator:
    """Coordinates microphone capture, chunk buffering, and uploads.

    Args:
        stt: Speech-to-text client (built from settings when omitted).
        capture_factory: Creates a fresh capture handle on each ``start()``.
        flush_timeout: Max seconds to wait for the final chunk on stop.
    """

    def __init__(
        self,
        stt: BaseSTT | None = None,
        capture_factory: Callable[[], MicrophoneCapture] | None = None,
        flush_timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._stt = stt
        self._stt_provider = settings.transcription_provider
        self._capture_factory = capture_factory or MicrophoneCapture
        self._flush_timeout = flush_timeout if flush_timeout is not None else settings.flush_timeout
        self._processor = AudioProcessor(sample_rate=settings.sample_rate, channels=settings.channels)
        self.transcript = Transcript()
        self.log = SessionLog(logger)
        self.session: RecordingSession | None = None
        self.capture: MicrophoneCapture | None = None

    @property
    def is_recording(self) -> bool:
        return self.session is not None and self.session.active

    @property
    def stt(self) -> BaseSTT:
        """Return the STT client, creating it on first use."""
        if self._stt is None:
            self._stt = create_stt(provider=self._stt_provider)
        return self._stt

    # -- actions --

    def start(self) -> bool:
        """Acquire the microphone and begin a new recording session.

        Returns:
            True when recording started; False if access was denied or no
            input device exists (the error is logged, not raised).
        """
        if self.is_recording:
            return True

        self.log.add("Requesting microphone access...")
        try:
            capture = self._capture_factory()
            session = RecordingSession(capture, self.log)
            session.begin()
        except PermissionError as exc:
            self.log.add(f"Error starting recording: {exc}", level=logging.ERROR)
            return False

        self.capture = capture
        self.session = session
        self.log.add("Microphone access granted.")
        self.log.add("Started recording.")
        return True

    def stop(self) -> None:
        """End the current session and release the device. No-op when idle."""
        if not self.is_recording:
            return

        self._finish_session()
        self.log.add("Stopped recording.")
        if self.capture is not None:
            try:
                self.capture.release()
            except Exception as exc:
                self.log.add(f"Error releasing microphone: {exc}", level=logging.ERROR)

    def poll(self) -> int:
        """Drain chunks delivered since the last call into the session buffer."""
        if not self.is_recording:
            return 0
        return self.session.drain()

    async def generate_transcript(self, **kwargs) -> str:
        """Flush the current session, upload it, and append the outcome.

        Keyword arguments are forwarded to the STT client (e.g. ``language``).

        Returns:
            The text appended to the transcript (recognized text or the
            error marker).
        """
        self.log.add("Preparing audio data for transcription...")

        if self.is_recording:
            self._finish_session()
            self.log.add("Temporarily stopped recording for transcription.")

        if self.session is not None:
            if self.session.chunks and self.session.is_silent():
                self.log.add(
                    "Recorded audio is silent; check the input device.", level=logging.WARNING
                )
            payload = self.session.assemble()
        else:
            # No session was ever started; still send a valid empty container
            payload = self._processor.to_wav_bytes(b"")
        self.log.add(f"Audio blob created. Size: {len(payload)} bytes")

        segment = await self._upload(payload, **kwargs)
        self.transcript.append(segment)

        self._resume()
        return segment

    def snapshot(self) -> OrchestratorSnapshot:
        """Drain pending chunks and return the current state for display."""
        self.poll()
        return OrchestratorSnapshot(
            is_recording=self.is_recording,
            transcript=self.transcript.text,
            log=self.log.entries,
            buffered_chunks=len(self.session.chunks) if self.session else 0,
            buffered_bytes=self.session.buffered_bytes if self.session else 0,
            input_level=self.session.level if self.is_recording else 0.0,
        )

    # -- internals --

    def _finish_session(self) -> None:
        """Flush the active session; a device failure is logged, never raised."""
        try:
            flushed = self.session.finish(self._flush_timeout)
        except Exception as exc:
            self.log.add(f"Error stopping recording: {exc}", level=logging.ERROR)
            return
        if not flushed:
            self.log.add(
                "Final chunk not confirmed (flush timed out or the device failed); "
                "uploading what was received.",
                level=logging.WARNING,
            )

    async def _upload(self, payload: bytes, **kwargs) -> str:
        """Send the payload; return recognized text or the error marker."""
        try:
            self.log.add("Sending request to Groq API...")
            result = await self.stt.transcribe(payload, **kwargs)
        except Exception as exc:
            status = getattr(exc, "upstream_status", None)
            if status is not None:
                self.log.add(f"Received response. Status: {status}")
            self.log.add(f"Error transcribing audio: {exc}", level=logging.ERROR)
            return TRANSCRIPTION_ERROR_MARKER

        self.log.add(f"Received response. Status: {result.status_code}")
        self.log.add("Successfully parsed response JSON.")
        self.log.add(f"Transcription appended: {result.text[:50]}...")
        return result.text

    def _resume(self) -> None:
        """Restart capture on the same device handle if one is held."""
        if self.capture is None or self.capture.is_released:
            return
        session = RecordingSession(self.capture, self.log)
        try:
            session.begin()
        except PermissionError as exc:
            self.log.add(f"Error resuming recording: {exc}", level=logging.ERROR)
            self.session = None
            return
        self.session = session
        self.log.add("Resumed recording.")
