"""Word document text extraction using python-docx."""

import io
import logging

from docx import Document

from docchat.parsing.errors import WordParseError

logger = logging.getLogger(__name__)

# Legacy binary .doc files are stored but not parsed
DOC_PLACEHOLDER = "[Content extracted from DOC file - full parsing not implemented]"


def parse_docx(file_content: bytes) -> str:
    """Extract paragraph and table text from a .docx file.

    Args:
        file_content: Raw bytes of the document.

    Returns:
        Text with one line per paragraph or table row.

    Raises:
        WordParseError: If the bytes are not a readable .docx package.
    """
    if not file_content:
        raise WordParseError("Empty file provided")

    try:
        document = Document(io.BytesIO(file_content))
    except Exception as e:
        raise WordParseError(f"Corrupt or invalid Word document: {e}") from e

    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.append("\t".join(cell.text for cell in row.cells))

    return "\n".join(lines).strip()


def parse_word(file_content: bytes, filename: str) -> str:
    """Extract text from a Word upload, dispatching on the file extension."""
    if filename.lower().endswith(".docx"):
        return parse_docx(file_content)
    logger.info(f"Skipping text extraction for legacy Word file: {filename}")
    return DOC_PLACEHOLDER
