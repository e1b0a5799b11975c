"""Tests for the Streamlit-side APIClient using ``httpx.MockTransport``."""

import json

import httpx
import pytest

from src.ui.api_client import APIClient, APIError


def _client(handler) -> APIClient:
    api = APIClient(base_url="http://proxy.test")
    api._client = httpx.Client(base_url="http://proxy.test", transport=httpx.MockTransport(handler))
    return api


class TestStreamCompletion:
    def test_yields_fragments(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=iter([b"Hi", b" there"]))

        fragments = list(_client(handler).stream_completion("Hello"))

        assert "".join(fragments) == "Hi there"
        assert seen == {"path": "/api/v1/completions", "body": {"prompt": "Hello"}}

    def test_rejected_prompt_raises_http_error(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Prompt is required"})

        with pytest.raises(APIError) as exc_info:
            list(_client(handler).stream_completion(""))

        assert exc_info.value.message == "Prompt is required"
        assert exc_info.value.category == "http"

    def test_trailing_error_envelope_raises_after_partial_output(self):
        def handler(request):
            return httpx.Response(200, content=b'Hi{"error": "boom"}')

        received = []
        with pytest.raises(APIError) as exc_info:
            for fragment in _client(handler).stream_completion("Hello"):
                received.append(fragment)

        assert received == ["Hi"]
        assert exc_info.value.message == "boom"
        assert exc_info.value.category == "stream"

    def test_json_like_text_is_passed_through(self):
        def handler(request):
            return httpx.Response(200, content=b'Use {"error" as a key')

        fragments = list(_client(handler).stream_completion("Hello"))

        assert "".join(fragments) == 'Use {"error" as a key'

    def test_envelope_split_across_reads(self):
        def handler(request):
            return httpx.Response(200, content=iter([b'Hi{"er', b'ror": "bo', b'om"}']))

        received = []
        with pytest.raises(APIError) as exc_info:
            for fragment in _client(handler).stream_completion("Hello"):
                received.append(fragment)

        assert "".join(received) == "Hi"
        assert exc_info.value.message == "boom"
        assert exc_info.value.category == "stream"

    def test_error_object_inside_reply_is_kept(self):
        def handler(request):
            return httpx.Response(
                200, content=iter([b'Return {"error": "x"}', b" from the handler."])
            )

        fragments = list(_client(handler).stream_completion("Hello"))

        assert "".join(fragments) == 'Return {"error": "x"} from the handler.'

    def test_envelope_after_marker_in_reply(self):
        def handler(request):
            return httpx.Response(200, content=iter([b'Key {"error" here.', b'{"error": "boom"}']))

        received = []
        with pytest.raises(APIError) as exc_info:
            for fragment in _client(handler).stream_completion("Hello"):
                received.append(fragment)

        assert "".join(received) == 'Key {"error" here.'
        assert exc_info.value.message == "boom"

    def test_connection_refused(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        with pytest.raises(APIError) as exc_info:
            list(_client(handler).stream_completion("Hello"))

        assert exc_info.value.category == "connection"


class TestHealth:
    def test_check_connection_ok(self):
        def handler(request):
            return httpx.Response(200, json={"status": "ok"})

        assert _client(handler).check_connection() == (True, "Connected")

    def test_check_connection_reports_error(self):
        def handler(request):
            return httpx.Response(500, json={"error": "down"})

        assert _client(handler).check_connection() == (False, "down")
