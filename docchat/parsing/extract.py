"""Content-type dispatch for document text extraction."""

import logging

from docchat.parsing.errors import DocumentParseError
from docchat.parsing.pdf_parser import parse_pdf
from docchat.parsing.word_parser import parse_word

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

PDF_TYPE = "application/pdf"
DOC_TYPE = "application/msword"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ALLOWED_CONTENT_TYPES = frozenset({PDF_TYPE, DOC_TYPE, DOCX_TYPE})

EXTRACTION_FAILED = "[Text extraction failed]"


def extract_text(file_content: bytes, content_type: str, filename: str) -> str:
    """Extract plain text from an uploaded document.

    Args:
        file_content: Raw bytes of the upload.
        content_type: Declared MIME type (one of ALLOWED_CONTENT_TYPES).
        filename: Original filename, used to tell .doc from .docx.

    Returns:
        Extracted text.

    Raises:
        DocumentParseError: If the content type is unsupported or parsing fails.
    """
    if content_type == PDF_TYPE:
        text, pages = parse_pdf(file_content)
        logger.info(f"Extracted {len(text)} characters from {pages} PDF pages: {filename}")
        return text
    if content_type in (DOC_TYPE, DOCX_TYPE):
        return parse_word(file_content, filename)
    raise DocumentParseError(f"Unsupported content type: {content_type}")


def extract_text_or_marker(file_content: bytes, content_type: str, filename: str) -> str:
    """Like extract_text, but degrade to EXTRACTION_FAILED instead of raising."""
    try:
        return extract_text(file_content, content_type, filename)
    except DocumentParseError as e:
        logger.warning(f"Could not extract text from {filename}: {e}")
        return EXTRACTION_FAILED
