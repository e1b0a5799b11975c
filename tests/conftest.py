"""Shared pytest fixtures for the WhisperLive test suite.

Provides fake LLM / STT providers, an in-memory capture handle that stands in
for the microphone, and PCM audio helpers.
"""

import math
import queue
import struct
from unittest.mock import AsyncMock

import pytest

from src.core.models import TranscriptionResult
from src.services.llm.base import BaseLLM

# ---------------------------------------------------------------------------
# LLM Fixtures
# ---------------------------------------------------------------------------


class FakeLLM(BaseLLM):
    """Streams a fixed list of fragments, optionally failing at an index.

    Args:
        fragments: Fragments to yield in order.
        fail_at: Raise ``error`` before yielding the fragment at this index
            (``len(fragments)`` fails after the last one).
        error: Exception raised at ``fail_at``.
    """

    def __init__(self, fragments=(), fail_at=None, error=None) -> None:
        self.fragments = list(fragments)
        self.fail_at = fail_at
        self.error = error or RuntimeError("upstream failure")
        self.prompts: list[str] = []
        self.closed = False

    async def stream_completion(self, prompt, **kwargs):
        self.prompts.append(prompt)
        try:
            for i, fragment in enumerate(self.fragments):
                if self.fail_at == i:
                    raise self.error
                yield fragment
            if self.fail_at == len(self.fragments):
                raise self.error
        finally:
            self.closed = True


@pytest.fixture
def fake_llm():
    """A FakeLLM streaming ``["Hi", " there"]``."""
    return FakeLLM(["Hi", " there"])


@pytest.fixture
def make_llm():
    """Factory fixture: ``make_llm(fragments, fail_at=None, error=None)``."""
    return FakeLLM


# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface with a
        default transcribe response.
    """
    from src.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = TranscriptionResult(text="This is a test transcription.")
    return stt


# ---------------------------------------------------------------------------
# Capture Fixtures
# ---------------------------------------------------------------------------


class FakeCapture:
    """In-memory stand-in for ``MicrophoneCapture``.

    ``feed()`` plays the role of the PortAudio callback thread. With
    ``fail_close`` set, ``close()`` raises like an unplugged device.
    """

    def __init__(self, sample_rate=16000, channels=1, deny=False, fail_close=False) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self.deny = deny
        self.fail_close = fail_close
        self.open_count = 0
        self.close_count = 0
        self.flushed = True
        self._queue: queue.Queue[bytes] = queue.Queue()
        self._open = False
        self._released = False
        self.pending_on_close: list[bytes] = []

    @property
    def is_open(self):
        return self._open

    @property
    def is_released(self):
        return self._released

    def open(self):
        from src.core.exceptions import MicrophoneUnavailableError

        if self.deny:
            raise MicrophoneUnavailableError("Permission denied")
        if self._released:
            raise MicrophoneUnavailableError("Capture device has been released")
        self.open_count += 1
        self._open = True

    def feed(self, data: bytes):
        self._queue.put_nowait(data)

    def get_nowait(self):
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def close(self):
        # Blocks still in flight when the stream stops arrive before the flush signal
        for data in self.pending_on_close:
            self._queue.put_nowait(data)
        self.pending_on_close = []
        self.close_count += 1
        self._open = False
        if self.fail_close:
            raise OSError("Stream stop failed: device unplugged")

    def wait_flushed(self, timeout):
        return self.flushed

    def release(self):
        self._released = True
        self.close()


@pytest.fixture
def fake_capture():
    """A FakeCapture that grants microphone access."""
    return FakeCapture()


@pytest.fixture
def make_capture():
    """Factory fixture: ``make_capture(deny=False, fail_close=False)``."""
    return FakeCapture


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_pcm_bytes():
    """Generate 1 second of 440Hz sine-wave PCM audio (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    sample_rate = 16000
    frequency = 440.0
    amplitude = 16000  # ~50% of max int16

    samples = []
    for i in range(sample_rate):
        value = int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate))
        samples.append(struct.pack("<h", value))
    return b"".join(samples)


@pytest.fixture
def silent_pcm_bytes():
    """Generate 1 second of silence as PCM audio (16kHz, 16-bit, mono)."""
    return b"\x00\x00" * 16000
