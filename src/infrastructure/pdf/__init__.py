"""PDF generation infrastructure."""

from src.infrastructure.pdf.fpdf2_writer import Fpdf2PageWriter

__all__ = [
    "Fpdf2PageWriter",
]
