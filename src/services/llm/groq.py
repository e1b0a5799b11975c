"""
Groq LLM provider implementation.

Uses the Groq Python SDK (``groq.AsyncGroq``) to stream chat completions
from Groq's hosted models. The API key is read from server-side settings
and is never echoed back to proxy callers.
"""

import logging
from collections.abc import AsyncIterator

from groq import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncGroq,
    RateLimitError,
)

from src.core.config import get_settings
from src.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)


class GroqLLM(BaseLLM):
    """Groq chat-completion provider with incremental token streaming."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.groq_api_key
        self._model = model or settings.completion_model
        self._base_url = base_url or settings.groq_base_url
        self._client = AsyncGroq(api_key=self._api_key, base_url=self._base_url)

    async def stream_completion(self, prompt: str, **kwargs) -> AsyncIterator[str]:
        """Stream ``choices[0].delta.content`` fragments for one user message.

        SDK exceptions are translated to standard Python exceptions so the
        relay can report them without depending on the Groq SDK.
        """
        try:
            stream = await self._client.chat.completions.create(
                messages=[{"role": "user", "content": prompt}],
                model=self._model,
                stream=True,
                **kwargs,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content

        except APITimeoutError as exc:
            logger.warning("Groq API timeout: %s", exc)
            raise TimeoutError(f"Groq API request timed out: {exc}") from exc
        except APIConnectionError as exc:
            logger.warning("Groq API connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to Groq API: {exc}") from exc
        except RateLimitError as exc:
            logger.warning("Groq API rate limit hit: %s", exc)
            raise ConnectionError(f"Groq API rate limit exceeded: {exc}") from exc
        except APIStatusError as exc:
            logger.error("Groq API returned status %s: %s", exc.status_code, exc)
            raise RuntimeError(f"Groq API error ({exc.status_code}): {exc.message}") from exc
        except Exception as exc:
            logger.error("Unexpected Groq API error: %s", exc)
            raise RuntimeError(f"Groq API error: {exc}") from exc
