"""Document parsing utilities for uploaded attachments.

Responsibilities:
    - PDF text extraction with pypdf
    - Word (.docx) text extraction with python-docx
    - Content-type validation for uploads

The extracted text is stored next to the upload and injected into chat
prompts on request.
"""

from docchat.parsing.errors import DocumentParseError, PDFParseError, WordParseError
from docchat.parsing.extract import (
    ALLOWED_CONTENT_TYPES,
    EXTRACTION_FAILED,
    MAX_FILE_SIZE,
    extract_text,
    extract_text_or_marker,
)

__all__ = [
    "ALLOWED_CONTENT_TYPES",
    "EXTRACTION_FAILED",
    "MAX_FILE_SIZE",
    "DocumentParseError",
    "PDFParseError",
    "WordParseError",
    "extract_text",
    "extract_text_or_marker",
]
