"""Data transfer objects between the form layer and use cases."""

from src.application.dto.requests import InvoiceFormData
from src.application.dto.responses import RenderInvoiceResponse

__all__ = [
    "InvoiceFormData",
    "RenderInvoiceResponse",
]
