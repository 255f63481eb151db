class DocumentParseError(Exception):
    """Raised when text cannot be extracted from an uploaded document."""

    pass


class PDFParseError(DocumentParseError):
    """Raised when PDF parsing fails."""

    pass


class WordParseError(DocumentParseError):
    """Raised when a Word document cannot be read."""

    pass
