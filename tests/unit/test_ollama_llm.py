"""Unit tests for OllamaLLM streaming provider."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from ollama import ResponseError

from src.services.llm.ollama import OllamaLLM

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _part(text: str):
    """Build a minimal object that looks like a streamed ``ollama.ChatResponse``."""
    return SimpleNamespace(message=SimpleNamespace(content=text))


async def _aiter(items):
    for item in items:
        yield item


def _mock_settings(**overrides):
    defaults = {
        "ollama_base_url": "http://localhost:11434",
        "ollama_model": "llama3.2",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


async def _collect(llm, prompt="Hello", **kwargs):
    return [fragment async for fragment in llm.stream_completion(prompt, **kwargs)]


@pytest.fixture
def mock_client():
    """Return an ``AsyncMock`` mimicking ``ollama.AsyncClient``."""
    client = AsyncMock()
    client.chat = AsyncMock(return_value=_aiter([_part("Hi"), _part(""), _part(" there")]))
    return client


@pytest.fixture
def llm(mock_client):
    with patch("src.services.llm.ollama.get_settings", return_value=_mock_settings()):
        with patch("src.services.llm.ollama.AsyncClient", return_value=mock_client):
            instance = OllamaLLM()
    return instance


class TestOllamaLLMInit:
    def test_defaults_from_settings(self):
        with patch("src.services.llm.ollama.get_settings", return_value=_mock_settings()):
            with patch("src.services.llm.ollama.AsyncClient") as mock_cls:
                llm = OllamaLLM()

        assert llm._base_url == "http://localhost:11434"
        assert llm._model == "llama3.2"
        mock_cls.assert_called_once_with(host="http://localhost:11434")


class TestStreamCompletion:
    async def test_yields_non_empty_parts(self, llm):
        assert await _collect(llm) == ["Hi", " there"]

    async def test_requests_streaming_chat(self, llm, mock_client):
        await _collect(llm, "Hello", temperature=0.2)

        call_kwargs = mock_client.chat.call_args.kwargs
        assert call_kwargs["stream"] is True
        assert call_kwargs["messages"] == [{"role": "user", "content": "Hello"}]
        assert call_kwargs["options"] == {"temperature": 0.2}

    async def test_response_error_becomes_runtime_error(self, llm, mock_client):
        mock_client.chat.side_effect = ResponseError("model not found")

        with pytest.raises(RuntimeError, match="Ollama error"):
            await _collect(llm)

    async def test_connection_error_is_preserved(self, llm, mock_client):
        mock_client.chat.side_effect = ConnectionError("refused")

        with pytest.raises(ConnectionError, match="localhost:11434"):
            await _collect(llm)
