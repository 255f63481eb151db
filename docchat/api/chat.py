"""Chat send endpoint relaying answers as server-sent events."""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from docchat.models.schemas import ChatRequest
from docchat.relay.service import ChatRelay, RelayConfigError, get_chat_relay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post("/send")
async def send_message(
    payload: ChatRequest,
    relay: ChatRelay = Depends(get_chat_relay),
) -> StreamingResponse:
    """Send a prompt and stream the answer.

    Each SSE frame is ``data: {json}``: content frames carry ``chunk`` and
    ``isLast`` (the last one also ``sources`` and ``usage``); a failure
    produces a single frame with ``error`` and ``details``.

    Raises:
        400: chatInput is missing or blank.
        500: The selected backend is not configured.
    """
    if not payload.chat_input:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="chatInput is required",
        )

    try:
        relay.check_ready()
    except RelayConfigError as e:
        logger.error(f"Chat backend unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    async def event_stream() -> AsyncGenerator[str]:
        async for event in relay.events(payload):
            yield event.to_sse()

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
