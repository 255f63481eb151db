"""Pydantic models for API requests, responses and stream events.

Provides type safety, validation, and automatic OpenAPI documentation.
Wire names follow the browser client's camelCase JSON.

Models:
    - ChatRequest: Incoming chat send payload
    - StreamEvent: One SSE frame of the chat stream
    - WorkflowAnswer: Answer returned by the workflow webhook
    - UploadResponse: Stored upload metadata
    - LoginRequest / RegisterRequest / PublicUser: Auth payloads
"""

from docchat.models.schemas import (
    ChatRequest,
    ErrorResponse,
    LoginRequest,
    PublicUser,
    RegisterRequest,
    StreamEvent,
    UploadResponse,
    Usage,
    WorkflowAnswer,
)

__all__ = [
    "ChatRequest",
    "ErrorResponse",
    "LoginRequest",
    "PublicUser",
    "RegisterRequest",
    "StreamEvent",
    "UploadResponse",
    "Usage",
    "WorkflowAnswer",
]
