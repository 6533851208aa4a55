"""
Service factory functions for dependency injection.

This module wires infrastructure implementations (fpdf2 page-writer,
httpx/Pillow asset resolver) to the core layout engine. Use cases
should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.config import get_settings
from src.core.services import InvoiceLayoutEngine

if TYPE_CHECKING:
    from src.config import PdfSettings
    from src.core.interfaces import IAssetResolver, PageWriterFactory


# Singleton engine instance (stateless between renders)
_layout_engine: InvoiceLayoutEngine | None = None


def get_layout_engine(
    writer_factory: "PageWriterFactory | None" = None,
    asset_resolver: "IAssetResolver | None" = None,
    pdf_settings: "PdfSettings | None" = None,
) -> InvoiceLayoutEngine:
    """
    Get or create the InvoiceLayoutEngine.

    Creates infrastructure dependencies if not provided. The engine keeps
    no per-render state, so the default instance is shared; passing any
    override builds a fresh, unshared engine.

    Args:
        writer_factory: Optional page-writer factory override
        asset_resolver: Optional asset resolver override
        pdf_settings: Optional layout settings override

    Returns:
        Configured InvoiceLayoutEngine
    """
    global _layout_engine

    overridden = any(
        dep is not None for dep in (writer_factory, asset_resolver, pdf_settings)
    )
    if _layout_engine is not None and not overridden:
        return _layout_engine

    # Lazy import infrastructure to avoid circular imports
    from src.infrastructure.assets import AssetResolver
    from src.infrastructure.pdf import Fpdf2PageWriter

    settings = pdf_settings or get_settings().pdf

    engine = InvoiceLayoutEngine(
        writer_factory=writer_factory or (lambda: Fpdf2PageWriter(settings)),
        asset_resolver=asset_resolver or AssetResolver(),
        pdf_settings=settings,
    )

    if not overridden:
        _layout_engine = engine
    return engine


def reset_services() -> None:
    """Reset singleton services (for testing)."""
    global _layout_engine
    _layout_engine = None
