"""Core domain entities."""

from src.core.entities.drawing import (
    BLACK,
    RGB,
    DrawCommand,
    FilledRectCommand,
    FontStyle,
    ImageCommand,
    LineCommand,
    ResolvedImage,
    TextAlign,
    TextCommand,
)
from src.core.entities.invoice import AssetReference, DerivedTotals, InvoiceRecord

__all__ = [
    # Invoice
    "AssetReference",
    "DerivedTotals",
    "InvoiceRecord",
    # Drawing
    "BLACK",
    "RGB",
    "DrawCommand",
    "FilledRectCommand",
    "FontStyle",
    "ImageCommand",
    "LineCommand",
    "ResolvedImage",
    "TextAlign",
    "TextCommand",
]
