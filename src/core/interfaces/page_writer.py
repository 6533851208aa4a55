"""
Abstract page-writer interface.

A page-writer accumulates draw commands for exactly one page and
serializes them into a document buffer. Instances are single-use:
one writer per render call.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from src.core.entities.drawing import (
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


class IPageWriter(ABC):
    """
    Abstract interface for page serialization backends.

    Coordinates are millimetres from the top-left corner.
    """

    @abstractmethod
    def text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        size: float,
        style: FontStyle,
        align: TextAlign,
        color: RGB,
    ) -> None:
        """Draw a single line of text with its baseline at ``y``."""
        pass

    @abstractmethod
    def filled_rect(
        self, x: float, y: float, width: float, height: float, color: RGB
    ) -> None:
        """Fill a rectangle without a border."""
        pass

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float, color: RGB) -> None:
        """Stroke a straight line."""
        pass

    @abstractmethod
    def image(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        image: ResolvedImage,
        name: str = "image",
    ) -> None:
        """Embed a raster image at the given box."""
        pass

    @abstractmethod
    def output(self) -> bytes:
        """Finalize the page and return the document bytes."""
        pass

    def draw(self, command: DrawCommand) -> None:
        """Dispatch a draw command to the matching primitive."""
        if isinstance(command, TextCommand):
            self.text(
                command.x,
                command.y,
                command.text,
                size=command.size,
                style=command.style,
                align=command.align,
                color=command.color,
            )
        elif isinstance(command, FilledRectCommand):
            self.filled_rect(
                command.x, command.y, command.width, command.height, command.color
            )
        elif isinstance(command, LineCommand):
            self.line(command.x1, command.y1, command.x2, command.y2, command.color)
        elif isinstance(command, ImageCommand):
            self.image(
                command.x,
                command.y,
                command.width,
                command.height,
                command.image,
                name=command.name,
            )
        else:
            raise TypeError(f"Unknown draw command: {type(command).__name__}")


PageWriterFactory = Callable[[], IPageWriter]
