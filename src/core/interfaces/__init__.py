"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.asset_resolver import IAssetResolver
from src.core.interfaces.page_writer import IPageWriter, PageWriterFactory

__all__ = [
    "IAssetResolver",
    "IPageWriter",
    "PageWriterFactory",
]
