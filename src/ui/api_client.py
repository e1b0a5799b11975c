"""
Synchronous HTTP client for the WhisperLive completion proxy.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import json
import logging
from collections.abc import Iterator

import httpx
import streamlit as st

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "stream", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


def _error_message(response: httpx.Response) -> str:
    """Extract ``error`` from a JSON error envelope, falling back to raw text."""
    try:
        return str(response.json().get("error", response.text))
    except Exception:
        return response.text or f"HTTP {response.status_code}"


ERROR_MARKER = '{"error"'


def _partial_marker_len(text: str) -> int:
    """Length of the longest suffix of ``text`` that starts ``ERROR_MARKER``."""
    for size in range(min(len(text), len(ERROR_MARKER) - 1), 0, -1):
        if text.endswith(ERROR_MARKER[:size]):
            return size
    return 0


def _envelope_message(text: str) -> str | None:
    """Return the message if ``text`` is exactly one error envelope."""
    if not text.startswith(ERROR_MARKER):
        return None
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if isinstance(payload, dict) and set(payload) == {"error"}:
        return str(payload["error"])
    return None


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON dicts / text fragments or raise
    ``APIError`` with user-friendly messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:8000") -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the WhisperLive FastAPI backend.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=30.0)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn src.api.app:app --reload --port 8000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            raise APIError(_error_message(exc.response), category="http") from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- completions --

    def stream_completion(self, prompt: str) -> Iterator[str]:
        """POST a prompt to the proxy and yield text fragments as they arrive.

        The proxy reports a mid-stream upstream failure by appending a
        ``{"error": "..."}`` object as the last chunk. Text from the first
        ``{"error"`` marker onward is held back until the stream ends, so an
        envelope split across reads is still recognized. Only a complete
        object ending the stream counts as an error; a reply that itself ends
        with such an object is indistinguishable and is reported as one.

        Raises:
            APIError: If the proxy rejects the prompt, the upstream fails
                before streaming starts, or the stream ends with an error
                envelope after partial output.
        """
        try:
            with self._client.stream(
                "POST", "/api/v1/completions", json={"prompt": prompt}, timeout=None
            ) as resp:
                if resp.is_error:
                    resp.read()
                    raise APIError(_error_message(resp), category="http")
                pending = ""
                for text in resp.iter_text():
                    pending += text
                    idx = pending.find(ERROR_MARKER)
                    if idx == -1:
                        idx = len(pending) - _partial_marker_len(pending)
                    if idx:
                        yield pending[:idx]
                        pending = pending[idx:]
                tail = pending.rfind(ERROR_MARKER)
                message = _envelope_message(pending[tail:]) if tail != -1 else None
                if message is not None:
                    if tail:
                        yield pending[:tail]
                    raise APIError(message, category="stream")
                if pending:
                    yield pending
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn src.api.app:app --reload --port 8000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError("Request timed out.", category="timeout") from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:8000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    """
    return APIClient(base_url=base_url)
