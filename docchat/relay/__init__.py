"""Prompt relay between the chat route and the answering backend.

Responsibilities:
    - Backend selection (workflow webhook or direct model call)
    - Attached document injection into the prompt
    - Re-chunking complete answers for incremental display
    - Mapping failures to a terminal error event

The HTTP layer only frames the resulting events as SSE.
"""

from docchat.relay.chunker import chunk_text
from docchat.relay.config import RelayConfig, WorkflowConfig, get_relay_config
from docchat.relay.service import (
    ChatRelay,
    RelayConfigError,
    build_prompt,
    get_chat_relay,
)
from docchat.relay.workflow import WorkflowClient, WorkflowError

__all__ = [
    "ChatRelay",
    "RelayConfig",
    "RelayConfigError",
    "WorkflowClient",
    "WorkflowConfig",
    "WorkflowError",
    "build_prompt",
    "chunk_text",
    "get_chat_relay",
    "get_relay_config",
]
