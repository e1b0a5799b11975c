"""Audio processing utilities for PCM data.

Converts raw PCM bytes to numpy arrays, wraps them in a WAV container for
upload, and measures signal level for the input meter and the silence
warning.
"""

import io
import wave

import numpy as np


class AudioProcessor:
    """Handles PCM audio data conversion and analysis.

    Provides utilities for converting raw PCM bytes to numpy arrays,
    packing them as an in-memory WAV payload, and measuring RMS energy.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        sample_width: int = 2,
        channels: int = 1,
    ) -> None:
        """Initialize the audio processor.

        Args:
            sample_rate: Audio sample rate in Hz (default: 16 kHz).
            sample_width: Bytes per sample (2 = 16-bit signed PCM).
            channels: Number of audio channels (1 = mono).
        """
        self.sample_rate = sample_rate
        self.sample_width = sample_width
        self.channels = channels

    @property
    def frame_size(self) -> int:
        """Bytes per frame across all channels."""
        return self.sample_width * self.channels

    def pcm_to_ndarray(self, pcm_data: bytes) -> np.ndarray:
        """Convert raw PCM bytes (16-bit signed) to float32 numpy array.

        Args:
            pcm_data: Raw PCM bytes (16-bit).

        Returns:
            Float32 numpy array normalized to [-1.0, 1.0].

        Raises:
            ValueError: If data length is not aligned to sample frame size.
        """
        if len(pcm_data) % self.frame_size != 0:
            raise ValueError(
                f"PCM data length ({len(pcm_data)}) is not aligned to frame size ({self.frame_size})"
            )
        # Convert 16-bit signed integers to float32 in [-1.0, 1.0] range
        return np.frombuffer(pcm_data, dtype=np.int16).astype(np.float32) / 32768.0

    def to_wav_bytes(self, pcm_data: bytes) -> bytes:
        """Wrap raw PCM bytes in an in-memory WAV container.

        Empty input yields a valid header-only WAV file, so an upload can
        still be attempted with no captured audio.

        Args:
            pcm_data: Raw PCM bytes (16-bit).

        Returns:
            Complete WAV file contents.
        """
        buf = io.BytesIO()
        with wave.open(buf, "wb") as wf:
            wf.setnchannels(self.channels)
            wf.setsampwidth(self.sample_width)
            wf.setframerate(self.sample_rate)
            wf.writeframes(pcm_data)
        return buf.getvalue()

    def rms_level(self, pcm_data: bytes) -> float:
        """Return RMS energy of a PCM chunk in [0.0, 1.0]; 0.0 for empty input."""
        usable = len(pcm_data) - (len(pcm_data) % self.frame_size)
        if usable == 0:
            return 0.0
        audio = self.pcm_to_ndarray(pcm_data[:usable])
        # RMS (Root Mean Square) measures signal energy, low RMS = silence
        return float(np.sqrt(np.mean(audio**2)))

    def is_silent(self, pcm_data: bytes, threshold: float = 0.01) -> bool:
        """Check if a PCM chunk is silence based on RMS energy."""
        return self.rms_level(pcm_data) < threshold
