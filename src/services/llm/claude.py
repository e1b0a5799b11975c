"""
Claude LLM provider implementation.

Uses the Anthropic Python SDK (``anthropic.AsyncAnthropic``) and its
``messages.stream()`` helper to relay text deltas as they arrive.
"""

import logging
from collections.abc import AsyncIterator

from anthropic import (
    APIConnectionError,
    APITimeoutError,
    AsyncAnthropic,
    RateLimitError,
)

from src.core.config import get_settings
from src.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)


class ClaudeLLM(BaseLLM):
    """Claude API LLM provider with streamed text deltas."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float = 0.7,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.claude_api_key
        self._model = model or settings.claude_model
        self._max_tokens = max_tokens or settings.claude_max_tokens
        self._temperature = temperature
        self._client = AsyncAnthropic(api_key=self._api_key)

    async def stream_completion(self, prompt: str, **kwargs) -> AsyncIterator[str]:
        """Stream text deltas for one user message."""
        temperature = kwargs.pop("temperature", None)
        max_tokens = kwargs.pop("max_tokens", None)
        try:
            async with self._client.messages.stream(
                model=self._model,
                max_tokens=max_tokens or self._max_tokens,
                temperature=temperature if temperature is not None else self._temperature,
                messages=[{"role": "user", "content": prompt}],
            ) as stream:
                async for text in stream.text_stream:
                    if text:
                        yield text

        except APITimeoutError as exc:
            logger.warning("Claude API timeout: %s", exc)
            raise TimeoutError(f"Claude API request timed out: {exc}") from exc
        except APIConnectionError as exc:
            logger.warning("Claude API connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to Claude API: {exc}") from exc
        except RateLimitError as exc:
            logger.warning("Claude API rate limit hit: %s", exc)
            raise ConnectionError(f"Claude API rate limit exceeded: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected Claude API error: %s", exc)
            raise RuntimeError(f"Claude API error: {exc}") from exc
