"""HTTP client used by the NiceGUI pages to talk to the DocChat API."""

import logging
import os
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from docchat.models.schemas import ChatRequest, PublicUser, StreamEvent, UploadResponse

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8000"


def api_base_url() -> str:
    """API location, read per call so the launcher can set it after import."""
    return os.getenv("API_BASE_URL") or DEFAULT_API_BASE_URL


class ApiError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


def _client(
    base_url: str | None, transport: httpx.AsyncBaseTransport | None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url or api_base_url(), timeout=120.0, transport=transport
    )


def parse_sse_line(line: str) -> StreamEvent | None:
    """Decode one ``data:`` line into a StreamEvent; other lines give None."""
    if not line.startswith("data: "):
        return None
    try:
        return StreamEvent.model_validate_json(line[6:])
    except ValidationError as e:
        logger.warning(f"Error parsing SSE data: {e}")
        return None


async def stream_chat_response(
    request: ChatRequest,
    on_event: Callable[[StreamEvent], None],
    on_error: Callable[[str], None],
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Consume the SSE stream from /api/chat/send.

    Every decoded event goes to ``on_event``; reading stops after an error
    event or the last chunk. Non-2xx responses and connection failures go to
    ``on_error`` instead.
    """
    payload = request.model_dump(by_alias=True, exclude_none=True)
    async with _client(base_url, transport) as client:
        try:
            async with client.stream(
                "POST",
                "/api/chat/send",
                json=payload,
                headers={"Accept": "text/event-stream"},
            ) as response:
                if response.is_error:
                    await response.aread()
                    on_error(_error_message(response))
                    return
                async for line in response.aiter_lines():
                    event = parse_sse_line(line)
                    if event is None:
                        continue
                    on_event(event)
                    if event.error or event.is_last:
                        return
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")


async def upload_document(
    content: bytes,
    filename: str,
    content_type: str,
    session_id: str,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UploadResponse:
    """Upload a document for a chat session.

    Raises:
        ApiError: If the upload is rejected or the API is unreachable.
    """
    async with _client(base_url, transport) as client:
        try:
            response = await client.post(
                "/api/chat/upload",
                files={"file": (filename, content, content_type)},
                data={"sessionId": session_id},
            )
        except httpx.RequestError as e:
            raise ApiError(f"Connection failed: {e}") from e
    if response.is_error:
        raise ApiError(_error_message(response), response.status_code)
    return UploadResponse.model_validate(response.json())


async def _post_json(
    path: str,
    payload: dict[str, str],
    base_url: str | None,
    transport: httpx.AsyncBaseTransport | None,
) -> dict:
    async with _client(base_url, transport) as client:
        try:
            response = await client.post(path, json=payload)
        except httpx.RequestError as e:
            raise ApiError(f"Connection failed: {e}") from e
    if response.is_error:
        raise ApiError(_error_message(response), response.status_code)
    return response.json()


async def login(
    email: str,
    password: str,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PublicUser:
    """Sign in and return the user. Raises ApiError on rejection."""
    body = await _post_json(
        "/api/auth/login", {"email": email, "password": password}, base_url, transport
    )
    return PublicUser.model_validate(body)


async def register(
    name: str,
    email: str,
    password: str,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PublicUser:
    """Create an account and return the user. Raises ApiError on rejection."""
    body = await _post_json(
        "/api/auth/register",
        {"name": name, "email": email, "password": password},
        base_url,
        transport,
    )
    return PublicUser.model_validate(body)
