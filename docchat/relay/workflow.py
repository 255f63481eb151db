"""HTTP client for the external workflow webhook.

The webhook receives the prompt and retrieval parameters and answers with a
single JSON document ``{"output": ..., "sources": [...], "usage": {...}}``.
"""

import logging

import httpx
from pydantic import ValidationError

from docchat.models.schemas import WorkflowAnswer
from docchat.relay.config import WorkflowConfig

logger = logging.getLogger(__name__)


class WorkflowError(Exception):
    """Raised when the webhook call fails or returns an unusable body."""

    pass


class WorkflowClient:
    """Posts chat prompts to the workflow webhook."""

    def __init__(
        self,
        config: WorkflowConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Webhook location and timeout.
            transport: Optional httpx transport, e.g. a MockTransport in tests.
        """
        self._config = config
        self._transport = transport

    @property
    def url(self) -> str:
        return self._config.url

    async def ask(
        self,
        chat_input: str,
        top_k: int,
        temperature: float,
        session_id: str | None = None,
        file_name: str | None = None,
    ) -> WorkflowAnswer:
        """Send one prompt and wait for the complete answer.

        Raises:
            WorkflowError: On transport errors, non-2xx status or invalid JSON.
        """
        payload: dict[str, object] = {
            "chatInput": chat_input,
            "topK": top_k,
            "temperature": temperature,
        }
        if session_id:
            payload["sessionId"] = session_id
        if file_name:
            payload["fileName"] = file_name

        async with httpx.AsyncClient(
            timeout=self._config.timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(self.url, json=payload)
            except httpx.RequestError as e:
                raise WorkflowError(f"N8N request failed: {e}") from e

        if response.is_error:
            raise WorkflowError(f"N8N request failed: {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise WorkflowError("N8N returned invalid JSON") from e

        # Some webhook responders wrap the item in a one-element list
        if isinstance(body, list) and len(body) == 1:
            body = body[0]

        try:
            answer = WorkflowAnswer.model_validate(body)
        except ValidationError as e:
            raise WorkflowError(f"N8N returned an unexpected body: {e}") from e

        logger.debug(f"Workflow answered with {len(answer.output or '')} characters")
        return answer
