"""Document upload endpoint.

Validates the upload, extracts its text and stores both on disk so later
chat requests can attach the document by filename.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from starlette.concurrency import run_in_threadpool

from docchat.i18n import LOCALE_COOKIE, negotiate_locale, translate
from docchat.models.schemas import UploadResponse
from docchat.parsing import ALLOWED_CONTENT_TYPES, MAX_FILE_SIZE, extract_text_or_marker
from docchat.storage.uploads import UploadStore, get_upload_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["upload"])


def _validate_upload(file: UploadFile | None, session_id: str | None) -> UploadFile:
    """Check presence and declared type of the upload.

    Raises:
        HTTPException: 400 if the file or session is missing or the type is not allowed.
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided",
        )

    if not session_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Session ID is required",
        )

    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only PDF and Word documents are allowed.",
        )

    return file


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail="File too large. Maximum size is 10MB.",
        )

    return content


@router.post("/upload", response_model=UploadResponse)
async def upload_document(
    request: Request,
    file: UploadFile | None = File(None),
    session_id: str | None = Form(None, alias="sessionId"),
    store: UploadStore = Depends(get_upload_store),
) -> UploadResponse:
    """Upload a PDF or Word document for the given chat session.

    Text extraction failures do not fail the upload; the stored text is
    then a marker saying extraction failed.

    Raises:
        400: Missing file or session, or unsupported content type.
        413: File exceeds 10MB limit.
    """
    file = _validate_upload(file, session_id)
    content = await _read_and_validate_size(file)
    original_name = file.filename or "document"
    content_type = file.content_type or ""

    text = await run_in_threadpool(
        extract_text_or_marker, content, content_type, original_name
    )
    stored = await run_in_threadpool(store.save, session_id, original_name, content, text)

    locale = negotiate_locale(
        request.headers.get("accept-language"), request.cookies.get(LOCALE_COOKIE)
    )
    return UploadResponse(
        message=translate("chat.uploadSuccess", locale),
        filename=stored.filename,
        original_name=original_name,
        size=len(content),
        type=content_type,
    )
