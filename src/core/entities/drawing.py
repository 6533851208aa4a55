"""
Draw commands produced by the layout engine.

Coordinates are absolute millimetres from the top-left page corner;
text ``y`` is the baseline. Commands live for one render only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

RGB = tuple[int, int, int]

BLACK: RGB = (0, 0, 0)


class FontStyle(str, Enum):
    """Font weight, using fpdf-style style codes."""

    NORMAL = ""
    BOLD = "B"


class TextAlign(str, Enum):
    """Horizontal anchoring of a text command at its ``x``."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ResolvedImage:
    """Decoded raster asset ready to embed."""

    data: bytes  # PNG
    width_px: int
    height_px: int

    def height_for_width(self, width: float) -> float:
        """Height that keeps the aspect ratio at the given width."""
        return width * self.height_px / self.width_px


@dataclass(frozen=True)
class TextCommand:
    x: float
    y: float
    text: str
    size: float
    style: FontStyle = FontStyle.NORMAL
    align: TextAlign = TextAlign.LEFT
    color: RGB = BLACK


@dataclass(frozen=True)
class FilledRectCommand:
    x: float
    y: float
    width: float
    height: float
    color: RGB


@dataclass(frozen=True)
class LineCommand:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB


@dataclass(frozen=True)
class ImageCommand:
    x: float
    y: float
    width: float
    height: float
    image: ResolvedImage
    name: str = "image"


DrawCommand = Union[TextCommand, FilledRectCommand, LineCommand, ImageCommand]
