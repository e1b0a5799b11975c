"""Transcript text and diagnostic log owned by one UI session."""

import logging

from src.core.utils import utc_timestamp

logger = logging.getLogger(__name__)


class Transcript:
    """A single growing text value; segments are only ever appended."""

    def __init__(self) -> None:
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def append(self, segment: str) -> None:
        """Append ``segment`` separated from earlier content by a single space."""
        segment = segment.strip()
        if not segment:
            return
        self._text = f"{self._text} {segment}" if self._text else segment

    def __str__(self) -> str:
        return self._text


class SessionLog:
    """Ordered, unbounded list of ``"<timestamp>: <message>"`` entries.

    Every entry is mirrored to the Python logger so the diagnostic panel and
    the process log show the same sequence.
    """

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._entries: list[str] = []
        self._logger = logger_ or logger

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def add(self, message: str, level: int = logging.INFO) -> None:
        self._entries.append(f"{utc_timestamp()}: {message}")
        self._logger.log(level, message)

    def __len__(self) -> int:
        return len(self._entries)
