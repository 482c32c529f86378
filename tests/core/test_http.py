"""
Tests for the backend HTTP client.
"""

import threading
from unittest.mock import MagicMock

import pytest
import requests

from admission_wizard.core.http import ApiClient, ApiError, extract_error_message


def make_response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.content = b"x" if body is not None or text else b""
    if body is not None:
        response.json.return_value = body
    else:
        response.json.side_effect = ValueError("no json")
    response.text = text
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return ApiClient(
        base_url="http://backend.test/api/", token="tok", timeout=5, session_factory=lambda: session
    )


class TestExtractErrorMessage:
    """Tests for extract_error_message."""

    def test_nested_error_message(self):
        assert extract_error_message({"error": {"message": "a"}}, "d") == "a"

    def test_error_string(self):
        assert extract_error_message({"error": "b"}, "d") == "b"

    def test_data_message(self):
        assert extract_error_message({"data": {"message": "c"}}, "d") == "c"

    def test_top_level_message(self):
        assert extract_error_message({"message": "e"}, "d") == "e"

    def test_plain_text_body(self):
        assert extract_error_message("  boom ", "d") == "boom"

    def test_default(self):
        assert extract_error_message(None, "d") == "d"


class TestApiClient:
    """Tests for ApiClient requests."""

    @pytest.mark.asyncio
    async def test_get_sends_token_and_timeout(self, client, session):
        session.request.return_value = make_response(body={"ok": True})

        result = await client.get("/applications/1", params={"a": 1})

        assert result == {"ok": True}
        session.request.assert_called_once()
        args, kwargs = session.request.call_args
        assert args == ("GET", "http://backend.test/api/applications/1")
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["timeout"] == 5
        assert kwargs["params"] == {"a": 1}

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self, client, session):
        client.set_token(None)
        session.request.return_value = make_response(body={})

        await client.get("/users/me")

        headers = session.request.call_args.kwargs["headers"]
        assert "Authorization" not in headers

    @pytest.mark.asyncio
    async def test_error_status_raises_api_error(self, client, session):
        session.request.return_value = make_response(
            status_code=409, body={"error": {"message": "RUT duplicado"}}
        )

        with pytest.raises(ApiError) as exc_info:
            await client.post("/applications", json={})

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "RUT duplicado"
        assert exc_info.value.payload == {"error": {"message": "RUT duplicado"}}

    @pytest.mark.asyncio
    async def test_transport_error_has_no_status(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ApiError) as exc_info:
            await client.delete("/documents/3")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_non_json_body_falls_back_to_text(self, client, session):
        session.request.return_value = make_response(text="plain")

        assert await client.put("/applications/1", json={}) == "plain"

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self, client, session):
        session.request.return_value = make_response()

        assert await client.delete("/documents/3") is None


class TestSessionPerThread:
    """Each worker thread gets its own requests.Session."""

    def test_threads_do_not_share_a_session(self):
        factory = MagicMock(side_effect=lambda: MagicMock(spec=requests.Session))
        client = ApiClient(base_url="http://backend.test", session_factory=factory)
        seen = []

        worker = threading.Thread(target=lambda: seen.append(client._session()))
        worker.start()
        worker.join()
        main_session = client._session()

        assert main_session is client._session()
        assert seen[0] is not main_session
        assert factory.call_count == 2

    def test_close_closes_every_session(self):
        factory = MagicMock(side_effect=lambda: MagicMock(spec=requests.Session))
        client = ApiClient(base_url="http://backend.test", session_factory=factory)
        sessions = []

        worker = threading.Thread(target=lambda: sessions.append(client._session()))
        worker.start()
        worker.join()
        sessions.append(client._session())

        client.close()

        for session in sessions:
            session.close.assert_called_once()
        assert client._session() is not sessions[1]
