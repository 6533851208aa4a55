"""
Fpdf2 implementation of the page-writer.

Draws absolute-positioned text, fills, lines and images onto a single
fpdf2 page and serializes it. The creation date is pinned so identical
commands always produce identical bytes.
"""

import io
from datetime import datetime, timezone

from fpdf import FPDF

from src.config.settings import PdfSettings, get_settings
from src.core.entities.drawing import RGB, FontStyle, ResolvedImage, TextAlign
from src.core.interfaces.page_writer import IPageWriter

FIXED_CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Core-font helpers
# ---------------------------------------------------------------------------


def _safe_text(text: str) -> str:
    """Return *text* encodable by fpdf2's built-in fonts.

    Helvetica and the other core fonts only cover Latin-1; anything else
    would raise ``FPDFUnicodeEncodingException``.  Such characters are
    replaced with '?' so the rest of the text still renders.
    """
    return text.encode("latin-1", errors="replace").decode("latin-1")


# ---------------------------------------------------------------------------
# Custom FPDF subclass with a fixed single-page setup
# ---------------------------------------------------------------------------


class _InvoicePdf(FPDF):
    """FPDF subclass: one portrait page in millimetres, no auto page break."""

    def __init__(self, pdf_settings: PdfSettings) -> None:
        super().__init__(
            orientation="P",
            unit="mm",
            format=(pdf_settings.page_width, pdf_settings.page_height),
        )
        self.set_auto_page_break(auto=False)
        self.set_margins(pdf_settings.left_margin, 0, pdf_settings.right_margin)
        self.creation_date = FIXED_CREATION_DATE
        self.set_title(pdf_settings.title_text)
        self.add_page()


class Fpdf2PageWriter(IPageWriter):
    """Single-use page-writer backed by fpdf2."""

    def __init__(self, pdf_settings: PdfSettings | None = None) -> None:
        if pdf_settings is None:
            pdf_settings = get_settings().pdf
        self._settings = pdf_settings
        self._pdf = _InvoicePdf(pdf_settings)
        self._finalized = False

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        size: float,
        style: FontStyle = FontStyle.NORMAL,
        align: TextAlign = TextAlign.LEFT,
        color: RGB = (0, 0, 0),
    ) -> None:
        """Draw text with its baseline at ``y``; right alignment ends at ``x``."""
        self._check_open()
        if not text:
            return
        pdf = self._pdf
        pdf.set_font(self._settings.font_family, FontStyle(style).value, size)
        pdf.set_text_color(*color)
        safe = _safe_text(text)
        if align == TextAlign.RIGHT:
            x -= pdf.get_string_width(safe)
        pdf.text(x, y, safe)

    def filled_rect(
        self, x: float, y: float, width: float, height: float, color: RGB
    ) -> None:
        self._check_open()
        self._pdf.set_fill_color(*color)
        self._pdf.rect(x, y, width, height, style="F")

    def line(self, x1: float, y1: float, x2: float, y2: float, color: RGB) -> None:
        self._check_open()
        self._pdf.set_draw_color(*color)
        self._pdf.line(x1, y1, x2, y2)

    def image(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        image: ResolvedImage,
        name: str = "image",
    ) -> None:
        self._check_open()
        self._pdf.image(io.BytesIO(image.data), x=x, y=y, w=width, h=height)

    def output(self) -> bytes:
        """Serialize the page. The writer cannot be used afterwards."""
        self._check_open()
        self._finalized = True
        return bytes(self._pdf.output())

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("Page-writer already finalized")
