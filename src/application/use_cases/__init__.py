"""Application use cases."""

from src.application.use_cases.render_invoice import (
    RenderInvoiceResult,
    RenderInvoiceUseCase,
)

__all__ = [
    "RenderInvoiceResult",
    "RenderInvoiceUseCase",
]
