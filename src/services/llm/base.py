"""
Abstract base class for LLM providers.

All completion backends (Groq, Ollama, Claude) must implement this interface,
so the proxy relay can stream from any of them without knowing which one
is configured.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class BaseLLM(ABC):
    """Interface that every LLM provider must implement."""

    @abstractmethod
    def stream_completion(self, prompt: str, **kwargs) -> AsyncIterator[str]:
        """Stream a chat completion for a single user message.

        Implementations are async generators: each yielded item is one
        non-empty text fragment, in the order the upstream emitted it.

        Args:
            prompt: Free-text prompt sent as the sole user message.
            **kwargs: Provider-specific options (temperature, max_tokens, etc.).

        Yields:
            Text fragments as soon as the upstream produces them.
        """
