"""Tests for AudioProcessor (PCM conversion, WAV packing, and level detection)."""

import io
import wave

import numpy as np
import pytest

from src.services.audio.processor import AudioProcessor


@pytest.fixture
def processor():
    """Create an AudioProcessor configured for 16 kHz, 16-bit mono audio."""
    return AudioProcessor(sample_rate=16000, sample_width=2, channels=1)


class TestPcmToNdarray:
    """Verify PCM-to-ndarray conversion produces valid float32 samples."""

    def test_converts_pcm_to_float32(self, processor, sample_pcm_bytes):
        result = processor.pcm_to_ndarray(sample_pcm_bytes)
        assert result.dtype == np.float32
        assert len(result) == 16000
        assert result.max() <= 1.0
        assert result.min() >= -1.0

    def test_rejects_misaligned_data(self, processor):
        with pytest.raises(ValueError, match="not aligned"):
            processor.pcm_to_ndarray(b"\x00\x00\x00")


class TestToWavBytes:
    """The upload payload is a readable WAV file."""

    def test_wraps_pcm_in_wav_container(self, processor, sample_pcm_bytes):
        payload = processor.to_wav_bytes(sample_pcm_bytes)

        with wave.open(io.BytesIO(payload), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 16000
            assert wf.readframes(wf.getnframes()) == sample_pcm_bytes

    def test_empty_pcm_gives_header_only_wav(self, processor):
        payload = processor.to_wav_bytes(b"")

        assert payload.startswith(b"RIFF")
        assert len(payload) == 44
        with wave.open(io.BytesIO(payload), "rb") as wf:
            assert wf.getnframes() == 0


class TestLevel:
    """RMS level and silence detection."""

    def test_silence_detected(self, processor, silent_pcm_bytes):
        assert processor.rms_level(silent_pcm_bytes) == 0.0
        assert processor.is_silent(silent_pcm_bytes)

    def test_tone_is_not_silent(self, processor, sample_pcm_bytes):
        assert processor.rms_level(sample_pcm_bytes) > 0.3
        assert not processor.is_silent(sample_pcm_bytes)

    def test_empty_and_partial_frames(self, processor):
        assert processor.rms_level(b"") == 0.0
        assert processor.rms_level(b"\x01") == 0.0
