from pydantic import BaseModel, ConfigDict, Field, field_validator


class Usage(BaseModel):
    """Token accounting reported by the workflow webhook."""

    tokens: int | None = None
    cost: float | None = None


class ChatRequest(BaseModel):
    """Request payload for the chat send endpoint.

    Attributes:
        chat_input: User's question or prompt (wire name ``chatInput``).
        top_k: Retrieval depth forwarded to the workflow webhook.
        temperature: Sampling temperature.
        session_id: Optional chat session identifier.
        file_name: Optional stored upload whose text is injected into the prompt.
    """

    model_config = ConfigDict(populate_by_name=True)

    chat_input: str = Field("", alias="chatInput")
    top_k: int = Field(5, alias="topK", ge=1, le=50)
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    session_id: str | None = Field(None, alias="sessionId")
    file_name: str | None = Field(None, alias="fileName")

    @field_validator("chat_input", mode="before")
    @classmethod
    def strip_chat_input(cls, v: str | None) -> str:
        """Strip whitespace from the prompt before validation."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v


class WorkflowAnswer(BaseModel):
    """Complete answer returned by the workflow webhook."""

    output: str | None = None
    sources: list[str] | None = None
    usage: Usage | None = None


class StreamEvent(BaseModel):
    """One server-sent event of the chat stream.

    Content events carry ``chunk`` and ``isLast``; only the last one carries
    ``sources`` and ``usage``. Error events carry ``error`` and optionally
    ``details``. Unset fields are left out of the wire format.
    """

    model_config = ConfigDict(populate_by_name=True)

    chunk: str | None = None
    is_last: bool | None = Field(None, alias="isLast")
    sources: list[str] | None = None
    usage: Usage | None = None
    error: str | None = None
    details: str | None = None

    def to_sse(self) -> str:
        """Render as an SSE ``data:`` frame."""
        return f"data: {self.model_dump_json(by_alias=True, exclude_none=True)}\n\n"


class UploadResponse(BaseModel):
    """Response after a document upload."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    filename: str
    original_name: str = Field(alias="originalName")
    size: int
    type: str


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class PublicUser(BaseModel):
    """User as exposed over the API (never includes the password)."""

    id: str
    email: str
    name: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
