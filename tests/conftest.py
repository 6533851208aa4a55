"""Pytest configuration and fixtures."""

import io
import zlib
from collections.abc import Callable, Generator

import pytest
from PIL import Image

from src.application.services import reset_services
from src.config import reset_settings
from src.core.entities.invoice import InvoiceRecord


@pytest.fixture(autouse=True)
def _isolated_singletons() -> Generator[None, None, None]:
    """Fresh settings and services for every test."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def make_png() -> Callable[..., bytes]:
    """Build small PNG images in memory."""

    def _make(
        width: int = 40,
        height: int = 20,
        color: tuple[int, ...] = (200, 30, 30),
        mode: str = "RGB",
    ) -> bytes:
        buffer = io.BytesIO()
        Image.new(mode, (width, height), color).save(buffer, format="PNG")
        return buffer.getvalue()

    return _make


@pytest.fixture
def png_bytes(make_png: Callable[..., bytes]) -> bytes:
    """A 40x20 red PNG."""
    return make_png()


@pytest.fixture
def sample_record() -> InvoiceRecord:
    """Fully populated invoice without assets."""
    return InvoiceRecord(
        invoice_no="2025-001",
        date="18/10/2026",
        issuer_company="NovaPay Solutions",
        issuer_address="742 Evergreen Terrace, Suite 200, Austin, TX 78701",
        issuer_email="billing@novapay.io",
        recipient_name="James Mitchell",
        recipient_address="350 Fifth Avenue, New York, NY 10118",
        recipient_email="j.mitchell@acmecorp.com",
        recipient_phone="+1 212 555 0147",
        description="Software Development (hours)",
        quantity="80",
        unit_price="75",
        tax_rate="8.25",
    )


@pytest.fixture
def empty_record() -> InvoiceRecord:
    """Record with every optional field absent."""
    return InvoiceRecord()


def _extract_pdf_text(pdf_bytes: bytes) -> str:
    """Decompress FlateDecode streams in *pdf_bytes* and return all text.

    fpdf2 compresses page content with zlib (FlateDecode).  We find
    each ``stream ... endstream`` block, attempt to decompress it, and
    concatenate the decoded text together with the uncompressed object
    metadata.  Simplistic, for assertions only.
    """
    texts: list[str] = [pdf_bytes.decode("latin-1")]

    start_marker = b"stream\n"
    end_marker = b"\nendstream"
    idx = 0
    while True:
        s = pdf_bytes.find(start_marker, idx)
        if s == -1:
            break
        s += len(start_marker)
        e = pdf_bytes.find(end_marker, s)
        if e == -1:
            break
        try:
            texts.append(zlib.decompress(pdf_bytes[s:e]).decode("latin-1", errors="replace"))
        except zlib.error:
            pass
        idx = e + len(end_marker)

    return "\n".join(texts)


@pytest.fixture
def pdf_text() -> Callable[[bytes], str]:
    """Text extractor for fpdf2 output."""
    return _extract_pdf_text
