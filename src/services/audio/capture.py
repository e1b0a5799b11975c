"""Microphone capture backed by ``sounddevice``.

PortAudio delivers fixed-size blocks on its own thread. Each block is
pushed as raw 16-bit PCM bytes onto a bounded ``queue.Queue``; the
recording session drains that queue on demand instead of subscribing to
callbacks. ``stream.stop()`` returns only after pending callbacks have run,
so its return is the "flushed" signal; ``close()`` sets an explicit event
at that point, and records a device failure instead of raising it.
"""

import logging
import queue
import threading

from src.core.config import get_settings
from src.core.exceptions import MicrophoneUnavailableError

logger = logging.getLogger(__name__)


class MicrophoneCapture:
    """A capture handle bound to one input device.

    The handle can be closed and reopened on the same device (to flush a
    session and start the next one) until it is released.

    Args:
        sample_rate: Capture rate in Hz.
        channels: Number of input channels.
        chunk_duration: Seconds of audio per delivered block.
        queue_size: Maximum number of undrained blocks kept in memory.
        device: PortAudio device index or name (None = system default).
    """

    def __init__(
        self,
        sample_rate: int | None = None,
        channels: int | None = None,
        chunk_duration: float | None = None,
        queue_size: int | None = None,
        device: int | str | None = None,
    ) -> None:
        settings = get_settings()
        self.sample_rate = sample_rate or settings.sample_rate
        self.channels = channels or settings.channels
        self.chunk_duration = chunk_duration or settings.chunk_duration
        self.device = device
        self._queue: queue.Queue[bytes] = queue.Queue(
            maxsize=queue_size or settings.capture_queue_size
        )
        self._flushed = threading.Event()
        self._backend_error: type[Exception] = OSError
        self.close_error: Exception | None = None
        self._stream = None
        self._released = False
        self.dropped_chunks = 0

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @property
    def is_released(self) -> bool:
        return self._released

    def open(self) -> None:
        """Open and start an input stream on the configured device.

        Raises:
            MicrophoneUnavailableError: If PortAudio is missing, no input
                device exists, or the OS denies microphone access.
        """
        if self._released:
            raise MicrophoneUnavailableError("Capture device has been released")
        if self._stream is not None:
            return

        try:
            import sounddevice as sd
        except OSError as exc:  # PortAudio shared library not found
            raise MicrophoneUnavailableError(f"Audio backend unavailable: {exc}") from exc
        self._backend_error = sd.PortAudioError

        try:
            sd.check_input_settings(
                device=self.device,
                channels=self.channels,
                samplerate=self.sample_rate,
                dtype="int16",
            )
            stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype="int16",
                blocksize=int(self.sample_rate * self.chunk_duration),
                device=self.device,
                callback=self._on_block,
            )
            stream.start()
        except (sd.PortAudioError, ValueError) as exc:
            raise MicrophoneUnavailableError(f"Microphone access failed: {exc}") from exc

        self._flushed.clear()
        self._stream = stream
        logger.debug(
            "Input stream opened (device=%s, rate=%s, channels=%s)",
            self.device,
            self.sample_rate,
            self.channels,
        )

    def _on_block(self, indata, frames, time_info, status) -> None:  # noqa: ARG002
        """PortAudio callback: enqueue one block of PCM bytes."""
        if status:
            logger.debug("Input stream status: %s", status)
        try:
            self._queue.put_nowait(indata.tobytes())
        except queue.Full:
            self.dropped_chunks += 1
            logger.warning("Capture queue full; dropped block (%d total)", self.dropped_chunks)

    def get_nowait(self) -> bytes | None:
        """Return the next undrained block, or None if the queue is empty."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def close(self) -> None:
        """Stop the stream and set the flushed event.

        A PortAudio or OS failure while stopping (e.g. the device was
        unplugged) is logged and kept in ``close_error``; the event is set
        regardless so waiters never hang.
        """
        stream, self._stream = self._stream, None
        self.close_error = None
        if stream is None:
            self._flushed.set()
            return
        try:
            # stop() returns once pending callbacks have completed
            stream.stop()
            stream.close()
        except (self._backend_error, OSError) as exc:
            self.close_error = exc
            logger.error("Failed to stop input stream: %s", exc)
        finally:
            self._flushed.set()

    def wait_flushed(self, timeout: float) -> bool:
        """Wait for ``close()`` to finish.

        Returns:
            True if the stream stopped cleanly and every block it produced is
            queued; False on timeout or when stopping the stream failed.
        """
        return self._flushed.wait(timeout) and self.close_error is None

    def release(self) -> None:
        """Close the stream and give up the device for good."""
        self.close()
        self._released = True
