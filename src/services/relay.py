"""Streaming relay between an upstream completion stream and an HTTP response.

The relay pulls fragments from a ``BaseLLM`` async generator and hands them
to the response writer one at a time, so the caller sees partial output as
soon as the upstream produces it.

Usage::

    relay = CompletionRelay(llm, prompt)
    await relay.open()                 # raises CompletionStreamError
    return StreamingResponse(relay.fragments(), media_type=...)
"""

import json
import logging
from collections.abc import AsyncIterator

from src.core.exceptions import CompletionStreamError
from src.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def error_envelope(exc: BaseException) -> str:
    """Serialize an exception as the ``{"error": "..."}`` body used by the proxy."""
    return json.dumps({"error": str(exc) or UNKNOWN_ERROR_MESSAGE})


class CompletionRelay:
    """Relays one prompt's completion stream, fragment by fragment.

    ``open()`` establishes the upstream stream and waits for its first
    non-empty fragment, so connection and authentication failures surface
    before the HTTP status line is committed. Once ``fragments()`` has
    started, failures can no longer change the status; they are logged
    and reported as a trailing error envelope.

    Args:
        llm: Provider producing the upstream stream.
        prompt: The user's prompt, forwarded as the sole user message.
    """

    def __init__(self, llm: BaseLLM, prompt: str) -> None:
        self._llm = llm
        self._prompt = prompt
        self._stream: AsyncIterator[str] | None = None
        self._first: str | None = None
        self._exhausted = False

    async def open(self) -> None:
        """Start the upstream stream and buffer its first non-empty fragment.

        Raises:
            CompletionStreamError: If the stream fails before producing text.
        """
        self._stream = self._llm.stream_completion(self._prompt)
        try:
            async for fragment in self._stream:
                if fragment:
                    self._first = fragment
                    return
            self._exhausted = True
        except Exception as exc:
            logger.error("Completion stream failed before first fragment: %s", exc)
            await self._close()
            raise CompletionStreamError(str(exc)) from exc

    async def fragments(self) -> AsyncIterator[str]:
        """Yield the buffered first fragment, then every later non-empty fragment."""
        if self._stream is None:
            raise RuntimeError("CompletionRelay.open() must be awaited first")

        relayed = 0
        try:
            if self._first is not None:
                relayed += 1
                yield self._first
            if self._exhausted:
                return
            async for fragment in self._stream:
                if fragment:
                    relayed += 1
                    yield fragment
        except Exception as exc:
            logger.error(
                "Completion stream failed after %d fragment(s); partial output already sent: %s",
                relayed,
                exc,
            )
            yield error_envelope(exc)
        finally:
            await self._close()
            logger.debug("Completion relay closed after %d fragment(s)", relayed)

    async def _close(self) -> None:
        aclose = getattr(self._stream, "aclose", None)
        if aclose is not None:
            await aclose()
