"""Fixtures for API integration tests against the ASGI app in-process."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.api.routes.completion import get_llm_factory


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def use_llm(app):
    """Route completion requests to the given provider: ``use_llm(llm)``."""

    def _use(llm):
        app.dependency_overrides[get_llm_factory] = lambda: (lambda: llm)
        return llm

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
