"""Unit tests for the UI's HTTP client, with canned SSE bodies."""

import json

import httpx
import pytest
import pytest_check as check

from docchat.models.schemas import ChatRequest, StreamEvent
from docchat.ui import api_client
from docchat.ui.api_client import ApiError, parse_sse_line, stream_chat_response

BASE_URL = "http://api.test"


def _sse(*bodies: dict) -> str:
    return "".join(f"data: {json.dumps(body)}\n\n" for body in bodies)


async def _run_stream(handler) -> tuple[list[StreamEvent], list[str]]:
    events: list[StreamEvent] = []
    errors: list[str] = []
    await stream_chat_response(
        ChatRequest(chat_input="Hi", session_id="s1"),
        events.append,
        errors.append,
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )
    return events, errors


class TestParseSseLine:
    def test_data_line(self) -> None:
        event = parse_sse_line('data: {"chunk": "Hi", "isLast": true}')
        assert event == StreamEvent(chunk="Hi", is_last=True)

    def test_non_data_lines_are_skipped(self) -> None:
        assert parse_sse_line("") is None
        assert parse_sse_line(": keep-alive") is None

    def test_malformed_json_is_skipped(self) -> None:
        assert parse_sse_line("data: {not json") is None


class TestStreamChatResponse:
    """Tests for consuming the chat stream."""

    async def test_delivers_events_in_order(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            body = _sse(
                {"chunk": "Hola", "isLast": False},
                {"chunk": " mundo", "isLast": True, "sources": ["doc.pdf"]},
            )
            return httpx.Response(
                200, text=body, headers={"content-type": "text/event-stream"}
            )

        events, errors = await _run_stream(handler)

        check.equal([e.chunk for e in events], ["Hola", " mundo"])
        check.equal(events[-1].sources, ["doc.pdf"])
        check.equal(errors, [])
        check.equal(requests[0].url.path, "/api/chat/send")
        check.equal(
            json.loads(requests[0].content),
            {"chatInput": "Hi", "topK": 5, "temperature": 0.7, "sessionId": "s1"},
        )

    async def test_stops_after_last_event(self) -> None:
        body = _sse({"chunk": "a", "isLast": True}, {"chunk": "ignored", "isLast": True})

        events, _ = await _run_stream(lambda request: httpx.Response(200, text=body))

        assert [e.chunk for e in events] == ["a"]

    async def test_error_event_is_delivered(self) -> None:
        body = _sse({"error": "Internal server error", "details": "N8N request failed: 500"})

        events, errors = await _run_stream(lambda request: httpx.Response(200, text=body))

        check.equal(events[0].error, "Internal server error")
        check.equal(errors, [])

    async def test_http_error_uses_body_message(self) -> None:
        events, errors = await _run_stream(
            lambda request: httpx.Response(400, json={"error": "chatInput is required"})
        )

        check.equal(events, [])
        check.equal(errors, ["chatInput is required"])

    async def test_http_error_without_json(self) -> None:
        _, errors = await _run_stream(lambda request: httpx.Response(502, text="Bad Gateway"))
        assert errors == ["HTTP 502"]

    async def test_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        _, errors = await _run_stream(handler)

        assert errors == ["Connection failed: refused"]


class TestUploadAndAuth:
    """Tests for the JSON endpoints."""

    async def test_upload_document(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            check.equal(request.url.path, "/api/chat/upload")
            check.is_in(b'name="sessionId"', request.content)
            check.is_in(b'filename="policy.pdf"', request.content)
            return httpx.Response(
                200,
                json={
                    "message": "File uploaded successfully!",
                    "filename": "s1_1700000000000.pdf",
                    "originalName": "policy.pdf",
                    "size": 4,
                    "type": "application/pdf",
                },
            )

        result = await api_client.upload_document(
            b"%PDF",
            "policy.pdf",
            "application/pdf",
            "s1",
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
        )

        check.equal(result.filename, "s1_1700000000000.pdf")
        check.equal(result.original_name, "policy.pdf")

    async def test_upload_rejected(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(413, json={"error": "File too large. Maximum size is 10MB."})
        )

        with pytest.raises(ApiError) as exc_info:
            await api_client.upload_document(
                b"x", "big.pdf", "application/pdf", "s1", base_url=BASE_URL, transport=transport
            )

        assert exc_info.value.status_code == 413
        assert "too large" in exc_info.value.message

    async def test_login_returns_user(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                200, json={"id": "1", "email": "test@example.com", "name": "Test User"}
            )
        )

        user = await api_client.login(
            "test@example.com", "password123", base_url=BASE_URL, transport=transport
        )

        assert user.name == "Test User"

    async def test_login_rejected(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(401, json={"error": "Invalid credentials"})
        )

        with pytest.raises(ApiError, match="Invalid credentials"):
            await api_client.login("test@example.com", "bad", base_url=BASE_URL, transport=transport)

    async def test_register_conflict(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(409, json={"error": "User already exists"})
        )

        with pytest.raises(ApiError) as exc_info:
            await api_client.register(
                "Test", "test@example.com", "x", base_url=BASE_URL, transport=transport
            )

        assert exc_info.value.status_code == 409


class TestApiBaseUrl:
    """Tests for locating the API when no base_url is passed."""

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("API_BASE_URL", raising=False)
        assert api_client.api_base_url() == "http://localhost:8000"

    async def test_follows_environment_set_after_import(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A launcher that exports API_BASE_URL late still routes requests there."""
        monkeypatch.setenv("API_BASE_URL", "http://127.0.0.1:9100")
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"id": "u1", "name": "Ana", "email": "a@b.co"})

        await api_client.login("a@b.co", "secret", transport=httpx.MockTransport(handler))

        assert seen == ["http://127.0.0.1:9100/api/auth/login"]
