"""
Completion proxy endpoint.

Forwards a prompt to the configured chat-completion provider and relays the
streamed text back as a chunked ``text/plain`` response. The provider's
credential stays on the server.
"""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from src.core.config import get_settings
from src.core.exceptions import CompletionStreamError, PromptRequiredError
from src.core.models import CompletionRequest, ErrorResponse
from src.services.llm import BaseLLM, create_llm
from src.services.relay import CompletionRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/completions", tags=["completions"])

LLMFactory = Callable[[], BaseLLM]


def _default_llm() -> BaseLLM:
    return create_llm(provider=get_settings().llm_provider)


def get_llm_factory() -> LLMFactory:
    """Return the provider factory; the provider is only built for valid prompts."""
    return _default_llm


@router.post(
    "",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/plain": {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def stream_completion(
    body: CompletionRequest | None = None,
    llm_factory: LLMFactory = Depends(get_llm_factory),
):
    """Stream a completion for ``body.prompt``, one fragment per chunk."""
    if body is None or not body.prompt:
        raise PromptRequiredError()

    logger.info("Completion prompt: %s", body.prompt)

    try:
        llm = llm_factory()
    except Exception as exc:
        logger.error("Failed to initialize completion provider: %s", exc)
        raise CompletionStreamError(str(exc)) from exc

    relay = CompletionRelay(llm, body.prompt)
    await relay.open()

    return StreamingResponse(
        relay.fragments(),
        media_type="text/plain; charset=utf-8",
    )
