"""Local disk storage for uploaded documents and their extracted text.

Each upload is written as ``<session>_<epoch-ms>.<ext>`` with the extracted
text alongside it as ``<session>_<epoch-ms>.<ext>.txt``.
"""

import logging
import os
import re
import time
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_STORED_NAME = re.compile(r"^[A-Za-z0-9_-]+_\d+\.[A-Za-z0-9]+$")


class StoredUpload(BaseModel):
    filename: str
    path: Path
    text_path: Path


def _default_upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR", str(Path.cwd() / "uploads")))


class UploadStore:
    """Writes uploads under a root directory and reads their text back."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root or _default_upload_dir()

    @property
    def root(self) -> Path:
        return self._root

    def _ensure_root(self) -> Path:
        self._root.mkdir(parents=True, exist_ok=True)
        return self._root

    @staticmethod
    def make_filename(session_id: str, original_name: str) -> str:
        """Build the stored filename for an upload."""
        safe_session = _UNSAFE_CHARS.sub("_", session_id) or "session"
        extension = Path(original_name).suffix.lstrip(".").lower()
        extension = _UNSAFE_CHARS.sub("", extension) or "bin"
        timestamp = time.time_ns() // 1_000_000
        return f"{safe_session}_{timestamp}.{extension}"

    def save(
        self,
        session_id: str,
        original_name: str,
        content: bytes,
        text: str,
    ) -> StoredUpload:
        """Persist the raw upload and its extracted text.

        Returns:
            StoredUpload describing where both files were written.
        """
        root = self._ensure_root()
        filename = self.make_filename(session_id, original_name)
        path = root / filename
        text_path = root / f"{filename}.txt"

        path.write_bytes(content)
        text_path.write_text(text, encoding="utf-8")
        logger.info(f"Stored upload {original_name} as {filename} ({len(content)} bytes)")

        return StoredUpload(filename=filename, path=path, text_path=text_path)

    def read_text(self, filename: str) -> str | None:
        """Return the extracted text for a stored upload, or None if unknown.

        Only names produced by make_filename are accepted, so callers cannot
        reach files outside the upload directory.
        """
        if not _STORED_NAME.match(filename):
            logger.warning(f"Rejected upload lookup for invalid name: {filename!r}")
            return None
        text_path = self._root / f"{filename}.txt"
        if not text_path.is_file():
            return None
        return text_path.read_text(encoding="utf-8")


_upload_store: UploadStore | None = None


def get_upload_store() -> UploadStore:
    """Get or create the global upload store."""
    global _upload_store
    if _upload_store is None:
        _upload_store = UploadStore()
    return _upload_store
