"""Recording session: chunk buffering between a start and a stop.

Chunks are pulled from the capture handle's queue on demand and kept in
arrival order. ``level`` tracks the RMS of the latest chunk for the input
meter, and ``assemble()`` concatenates the chunks into one WAV payload for
upload.
"""

from src.services.audio.capture import MicrophoneCapture
from src.services.audio.processor import AudioProcessor
from src.services.transcript import SessionLog


class RecordingSession:
    """Append-only chunk buffer bound to one capture handle.

    Args:
        capture: Capture handle producing PCM blocks.
        log: Diagnostic log receiving one entry per chunk.
        sample_width: Bytes per sample of the captured PCM.
    """

    def __init__(
        self,
        capture: MicrophoneCapture,
        log: SessionLog,
        sample_width: int = 2,
    ) -> None:
        self.capture = capture
        self.chunks: list[bytes] = []
        self.active = False
        self.level = 0.0
        self._log = log
        self._processor = AudioProcessor(
            sample_rate=capture.sample_rate,
            sample_width=sample_width,
            channels=capture.channels,
        )

    @property
    def buffered_bytes(self) -> int:
        """Total size of all buffered chunks."""
        return sum(len(c) for c in self.chunks)

    def begin(self) -> None:
        """Clear the buffer and open the capture stream.

        Raises:
            MicrophoneUnavailableError: Propagated from the capture handle.
        """
        self.chunks.clear()
        self.level = 0.0
        self.capture.open()
        self.active = True

    def add_chunk(self, data: bytes) -> bool:
        """Append one chunk if it is non-empty. Returns True when appended."""
        if not data:
            return False
        self.chunks.append(data)
        self.level = self._processor.rms_level(data)
        self._log.add(f"Received audio chunk of size: {len(data)} bytes")
        return True

    def drain(self) -> int:
        """Move every block waiting in the capture queue into the buffer.

        Returns:
            Number of non-empty chunks appended.
        """
        appended = 0
        while (data := self.capture.get_nowait()) is not None:
            if self.add_chunk(data):
                appended += 1
        return appended

    def finish(self, timeout: float) -> bool:
        """Stop capture and drain everything delivered before the stop.

        Waits for the capture handle's flushed signal rather than a fixed
        delay. The session is inactive afterwards even if stopping the
        device raised.

        Returns:
            False if the signal did not arrive within ``timeout`` or the
            device reported an error while stopping.
        """
        if not self.active:
            return True
        try:
            self.capture.close()
            return self.capture.wait_flushed(timeout)
        finally:
            self.drain()
            self.active = False
            self.level = 0.0

    def is_silent(self) -> bool:
        """True when the buffered audio has no signal above the noise floor."""
        return self._processor.is_silent(b"".join(self.chunks))

    def assemble(self) -> bytes:
        """Concatenate buffered chunks in arrival order into a WAV payload."""
        return self._processor.to_wav_bytes(b"".join(self.chunks))
