"""PDF text extraction using pypdf."""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from docchat.parsing.errors import PDFParseError

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"


def parse_pdf(file_content: bytes) -> tuple[str, int]:
    """Extract the text of every page of a PDF.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        Tuple of (text, page count). Pages are joined with blank lines;
        pages without extractable text are skipped.

    Raises:
        PDFParseError: If the file is empty, not a PDF, or unreadable.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue
        if page_text:
            text_parts.append(page_text)

    text = "\n\n".join(text_parts)
    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return text, pages
