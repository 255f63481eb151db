"""Unit tests for the workflow webhook client using httpx.MockTransport."""

import json

import httpx
import pytest
import pytest_check as check

from docchat.relay.config import WorkflowConfig
from docchat.relay.workflow import WorkflowClient, WorkflowError

CONFIG = WorkflowConfig(base_url="http://n8n.test", webhook_path="/webhook/chat", timeout=5)


def _client(handler) -> WorkflowClient:
    return WorkflowClient(CONFIG, transport=httpx.MockTransport(handler))


class TestWorkflowConfig:
    def test_url_joins_base_and_path(self) -> None:
        assert CONFIG.url == "http://n8n.test/webhook/chat"
        assert CONFIG.is_configured

    def test_blank_values_are_unconfigured(self) -> None:
        config = WorkflowConfig(base_url="  ", webhook_path="/webhook/chat")
        assert not config.is_configured


class TestWorkflowClient:
    """Tests for request shape and response handling."""

    async def test_posts_payload_and_parses_answer(self) -> None:
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"output": "Answer", "sources": ["a.pdf"], "usage": {"tokens": 7, "cost": 0.5}},
            )

        answer = await _client(handler).ask(
            "Question", top_k=4, temperature=0.3, session_id="s1", file_name="s1_1.pdf"
        )

        check.equal(seen["url"], "http://n8n.test/webhook/chat")
        check.equal(
            seen["body"],
            {
                "chatInput": "Question",
                "topK": 4,
                "temperature": 0.3,
                "sessionId": "s1",
                "fileName": "s1_1.pdf",
            },
        )
        check.equal(answer.output, "Answer")
        check.equal(answer.sources, ["a.pdf"])
        check.equal(answer.usage.tokens, 7)

    async def test_omits_optional_fields(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"output": "ok"})

        await _client(handler).ask("Q", top_k=5, temperature=0.7)

        assert bodies == [{"chatInput": "Q", "topK": 5, "temperature": 0.7}]

    async def test_unwraps_single_item_list(self) -> None:
        client = _client(lambda request: httpx.Response(200, json=[{"output": "listed"}]))

        answer = await client.ask("Q", top_k=5, temperature=0.7)

        assert answer.output == "listed"

    async def test_error_status_raises(self) -> None:
        client = _client(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(WorkflowError, match="N8N request failed: 502"):
            await client.ask("Q", top_k=5, temperature=0.7)

    async def test_invalid_json_raises(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(WorkflowError, match="invalid JSON"):
            await client.ask("Q", top_k=5, temperature=0.7)

    async def test_unexpected_body_raises(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"output": ["not", "text"]}))

        with pytest.raises(WorkflowError, match="unexpected body"):
            await client.ask("Q", top_k=5, temperature=0.7)

    async def test_connection_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(WorkflowError, match="connection refused"):
            await _client(handler).ask("Q", top_k=5, temperature=0.7)
