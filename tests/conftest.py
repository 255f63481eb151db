"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_pdf / sample_pdf_bytes / blank_pdf_bytes: generated PDF documents
    - sample_docx_bytes: generated Word document
    - upload_store: UploadStore rooted in a temporary directory
    - async_client: HTTPX client for API testing
    - mock_session_id: Consistent session ID for tests
"""

import io
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
from docx import Document
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from docchat.api import app
from docchat.storage.uploads import UploadStore


def build_pdf(text: str) -> bytes:
    """Build a one-page PDF showing ``text`` in Helvetica."""
    stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[[str], bytes]:
    return build_pdf


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    return build_pdf("Information security policy")


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_docx_bytes() -> bytes:
    document = Document()
    document.add_paragraph("Quarterly report")
    document.add_paragraph("Revenue grew in every region.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Region"
    table.rows[0].cells[1].text = "North"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def upload_store(tmp_path: Path) -> UploadStore:
    return UploadStore(tmp_path / "uploads")


@pytest.fixture
def mock_session_id() -> str:
    """Predictable session ID for test assertions."""
    return "test-session-12345"


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Dependency overrides set by a test are removed afterwards.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
