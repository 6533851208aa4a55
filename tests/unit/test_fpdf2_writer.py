"""Tests for the fpdf2 page-writer."""

import pytest

from src.config.settings import PdfSettings
from src.core.entities.drawing import (
    FilledRectCommand,
    FontStyle,
    ImageCommand,
    LineCommand,
    ResolvedImage,
    TextAlign,
    TextCommand,
)
from src.infrastructure.pdf.fpdf2_writer import Fpdf2PageWriter, _safe_text


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def writer() -> Fpdf2PageWriter:
    """Create page-writer with default layout settings."""
    return Fpdf2PageWriter(pdf_settings=PdfSettings())


@pytest.fixture
def resolved_png(png_bytes: bytes) -> ResolvedImage:
    return ResolvedImage(data=png_bytes, width_px=40, height_px=20)


# ---------------------------------------------------------------------------
# Writer tests
# ---------------------------------------------------------------------------


class TestFpdf2PageWriter:
    """Tests for Fpdf2PageWriter."""

    def test_empty_page_is_valid_pdf(self, writer: Fpdf2PageWriter):
        result = writer.output()
        assert isinstance(result, bytes)
        assert result[:5] == b"%PDF-"
        assert result.rstrip().endswith(b"%%EOF")

    def test_single_a4_page(self, writer: Fpdf2PageWriter, pdf_text):
        text = pdf_text(writer.output())
        assert "/Count 1" in text
        assert "595.28" in text  # A4 width in points

    def test_text_is_written(self, writer: Fpdf2PageWriter, pdf_text):
        writer.text(
            200,
            15,
            "Invoice",
            size=20,
            style=FontStyle.BOLD,
            align=TextAlign.RIGHT,
            color=(0, 0, 0),
        )
        writer.text(140, 23, "Invoice No.", size=10)
        text = pdf_text(writer.output())
        assert "(Invoice No.)" in text
        assert "Helvetica-Bold" in text

    def test_draw_dispatches_commands(self, writer: Fpdf2PageWriter, pdf_text):
        writer.draw(FilledRectCommand(10, 80, 190, 10, (230, 230, 230)))
        writer.draw(LineCommand(10, 100, 200, 100, (200, 200, 200)))
        writer.draw(TextCommand(198, 140, "$ 6.495,00", size=12, style=FontStyle.BOLD))
        text = pdf_text(writer.output())
        assert "$ 6.495,00" in text

    def test_non_latin_text_does_not_crash(self, writer: Fpdf2PageWriter, pdf_text):
        """Helvetica cannot encode these; they degrade to '?'."""
        writer.text(10, 48, "Tokyo 東京 €", size=10)
        text = pdf_text(writer.output())
        assert "Tokyo" in text

    def test_image_embedded(
        self, writer: Fpdf2PageWriter, resolved_png: ResolvedImage, pdf_text
    ):
        writer.draw(ImageCommand(10, 8, 33, 16.5, resolved_png, name="logo"))
        assert "/Image" in pdf_text(writer.output())

    def test_invalid_image_raises(self, writer: Fpdf2PageWriter):
        broken = ResolvedImage(data=b"not an image", width_px=1, height_px=1)
        with pytest.raises(Exception):
            writer.image(10, 8, 33, 33, broken)

    def test_creation_date_pinned(self, writer: Fpdf2PageWriter):
        assert b"D:20000101" in writer.output()

    def test_identical_commands_identical_bytes(self, resolved_png: ResolvedImage):
        def build() -> bytes:
            w = Fpdf2PageWriter(pdf_settings=PdfSettings())
            w.draw(ImageCommand(10, 8, 33, 16.5, resolved_png, name="logo"))
            w.draw(TextCommand(200, 15, "Invoice", size=20, style=FontStyle.BOLD))
            return w.output()

        assert build() == build()

    def test_writer_is_single_use(self, writer: Fpdf2PageWriter):
        writer.output()
        with pytest.raises(RuntimeError, match="finalized"):
            writer.text(10, 10, "late", size=10)
        with pytest.raises(RuntimeError):
            writer.output()

    def test_custom_font_family(self, pdf_text):
        w = Fpdf2PageWriter(pdf_settings=PdfSettings(font_family="Times"))
        w.text(10, 10, "Serif", size=10, style=FontStyle.BOLD)
        assert "Times-Bold" in pdf_text(w.output())


# ---------------------------------------------------------------------------
# Core-font helper tests
# ---------------------------------------------------------------------------


class TestSafeText:
    """Tests for the Latin-1 safety helper."""

    def test_latin1_unchanged(self):
        assert _safe_text("Café Müller") == "Café Müller"

    def test_replaces_unencodable(self):
        assert _safe_text("€ 5") == "? 5"

    def test_cjk_replaced(self):
        assert _safe_text("東京") == "??"

    def test_empty_string(self):
        assert _safe_text("") == ""
