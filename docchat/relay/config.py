"""Relay configuration: backend selection, webhook location and pacing."""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class WorkflowConfig(BaseModel):
    """Location of the workflow webhook.

    Attributes:
        base_url: Webhook host, e.g. ``http://localhost:5678``.
        webhook_path: Path appended to base_url, e.g. ``/webhook/chat``.
        timeout: Seconds to wait for the complete answer.
    """

    base_url: str = Field(default_factory=lambda: os.getenv("N8N_BASE_URL", ""))
    webhook_path: str = Field(default_factory=lambda: os.getenv("N8N_WEBHOOK_PATH", ""))
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("N8N_TIMEOUT_SECONDS", "120")),
        gt=0,
    )

    @field_validator("base_url", "webhook_path")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return v.strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.webhook_path)

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.webhook_path}"


class RelayConfig(BaseModel):
    """Configuration for the chat relay.

    Attributes:
        backend: ``workflow`` forwards to the webhook, ``model`` calls the LLM directly.
        stream_mode: For the model backend, ``tokens`` forwards deltas as they arrive,
            ``chunked`` waits for the full answer and re-chunks it.
        chunk_delay_ms: Pause between chunked events.
        max_document_chars: Cap on attached document text injected into the prompt.
        workflow: Webhook location.
    """

    backend: Literal["workflow", "model"] = Field(
        default_factory=lambda: os.getenv("CHAT_BACKEND", "workflow").strip().lower()
    )
    stream_mode: Literal["tokens", "chunked"] = Field(
        default_factory=lambda: os.getenv("RELAY_STREAM_MODE", "tokens").strip().lower()
    )
    chunk_delay_ms: int = Field(
        default_factory=lambda: int(os.getenv("RELAY_CHUNK_DELAY_MS", "50")),
        ge=0,
    )
    max_document_chars: int = Field(
        default_factory=lambda: int(os.getenv("RELAY_MAX_DOCUMENT_CHARS", "30000")),
        ge=0,
    )
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment."""
    return RelayConfig()
