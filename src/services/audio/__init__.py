"""
Audio module - Microphone capture, chunk buffering and PCM utilities.
"""

from .capture import MicrophoneCapture
from .processor import AudioProcessor
from .recorder import RecordingSession

__all__ = ["AudioProcessor", "MicrophoneCapture", "RecordingSession"]
