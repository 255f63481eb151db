"""Chat relay: turns one chat request into a sequence of stream events.

The relay forwards the prompt either to the workflow webhook, which answers
in one piece, or to the model, which streams deltas. Either way the caller
receives ``StreamEvent`` objects in order, the final content event marked
with ``is_last``. Any failure ends the stream with a single error event.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable

from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from docchat.agent.chat_agent import AgentService, get_agent_service
from docchat.models.schemas import ChatRequest, StreamEvent, Usage
from docchat.relay.chunker import chunk_text
from docchat.relay.config import RelayConfig, get_relay_config
from docchat.relay.workflow import WorkflowClient
from docchat.storage.uploads import UploadStore, get_upload_store

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response from AI"
INTERNAL_ERROR = "Internal server error"


class RelayConfigError(Exception):
    """Raised when the selected backend is not configured."""

    pass


def build_prompt(
    question: str,
    document_text: str | None = None,
    document_name: str | None = None,
    max_document_chars: int = 30000,
) -> str:
    """Prefix the question with attached document text, if any."""
    if not document_text or not document_text.strip():
        return question

    excerpt = document_text.strip()
    if len(excerpt) > max_document_chars:
        excerpt = excerpt[:max_document_chars]
    label = f" ({document_name})" if document_name else ""
    return (
        f"Use the following document{label} to answer the question.\n\n"
        f"--- DOCUMENT START ---\n{excerpt}\n--- DOCUMENT END ---\n\n"
        f"Question: {question}"
    )


class ChatRelay:
    """Relays chat requests to the configured backend as stream events."""

    def __init__(
        self,
        config: RelayConfig | None = None,
        workflow: WorkflowClient | None = None,
        agent_provider: Callable[[], AgentService] = get_agent_service,
        uploads: UploadStore | None = None,
    ) -> None:
        """Initialize the relay.

        Args:
            config: Relay configuration. Loads from environment if not provided.
            workflow: Optional webhook client; built from config when omitted.
            agent_provider: Returns the model service, called only for the model backend.
            uploads: Store used to look up attached document text.
        """
        self._config = config or get_relay_config()
        self._workflow = workflow
        self._agent_provider = agent_provider
        self._uploads = uploads or get_upload_store()

    @property
    def config(self) -> RelayConfig:
        return self._config

    def check_ready(self) -> None:
        """Verify that the selected backend can be reached.

        Raises:
            RelayConfigError: If the webhook location or model key is missing.
        """
        if self._config.backend == "workflow":
            if self._workflow is None and not self._config.workflow.is_configured:
                raise RelayConfigError("N8N configuration missing")
            return
        try:
            self._agent_provider()
        except (ValidationError, ValueError) as e:
            raise RelayConfigError("Model configuration missing") from e

    async def _compose_prompt(self, request: ChatRequest) -> str:
        document_text = None
        if request.file_name:
            document_text = await run_in_threadpool(self._uploads.read_text, request.file_name)
            if document_text is None:
                logger.warning(f"Attached file not found, ignoring: {request.file_name}")
        return build_prompt(
            request.chat_input,
            document_text,
            request.file_name,
            self._config.max_document_chars,
        )

    async def events(self, request: ChatRequest) -> AsyncGenerator[StreamEvent]:
        """Produce the stream events answering one request.

        Yields:
            Content events in order, or a single error event.
        """
        try:
            prompt = await self._compose_prompt(request)
            if self._config.backend == "workflow":
                source = self._workflow_events(prompt, request)
            else:
                source = self._model_events(prompt, request)
            async for event in source:
                yield event
        except Exception as e:
            logger.exception(f"Chat relay failed: {e}")
            yield StreamEvent(error=INTERNAL_ERROR, details=str(e))

    async def _workflow_events(
        self, prompt: str, request: ChatRequest
    ) -> AsyncGenerator[StreamEvent]:
        client = self._workflow or WorkflowClient(self._config.workflow)
        answer = await client.ask(
            prompt,
            top_k=request.top_k,
            temperature=request.temperature,
            session_id=request.session_id,
            file_name=request.file_name,
        )
        if not answer.output:
            yield StreamEvent(error=NO_RESPONSE)
            return
        async for event in self._chunked_events(answer.output, answer.sources, answer.usage):
            yield event

    async def _model_events(
        self, prompt: str, request: ChatRequest
    ) -> AsyncGenerator[StreamEvent]:
        agent = self._agent_provider()

        if self._config.stream_mode == "chunked":
            output = await agent.get_response(prompt, temperature=request.temperature)
            if not output:
                yield StreamEvent(error=NO_RESPONSE)
                return
            async for event in self._chunked_events(output):
                yield event
            return

        # Hold one delta back so the final one can be flagged as last
        pending: str | None = None
        async for delta in agent.stream_response(prompt, temperature=request.temperature):
            if pending is not None:
                yield StreamEvent(chunk=pending, is_last=False)
            pending = delta
        if pending is None:
            yield StreamEvent(error=NO_RESPONSE)
            return
        yield StreamEvent(chunk=pending, is_last=True)

    async def _chunked_events(
        self,
        output: str,
        sources: list[str] | None = None,
        usage: Usage | None = None,
    ) -> AsyncGenerator[StreamEvent]:
        chunks = chunk_text(output)
        delay = self._config.chunk_delay_ms / 1000
        for i, chunk in enumerate(chunks):
            is_last = i == len(chunks) - 1
            yield StreamEvent(
                chunk=chunk,
                is_last=is_last,
                sources=sources if is_last else None,
                usage=usage if is_last else None,
            )
            if not is_last and delay:
                await asyncio.sleep(delay)


_chat_relay: ChatRelay | None = None


def get_chat_relay() -> ChatRelay:
    """Get or create the global chat relay."""
    global _chat_relay
    if _chat_relay is None:
        _chat_relay = ChatRelay()
    return _chat_relay
