"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for the form contract
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for the editor and download handlers.
"""

from src.application.dto.requests import InvoiceFormData
from src.application.dto.responses import RenderInvoiceResponse
from src.application.services import get_layout_engine, reset_services
from src.application.use_cases import RenderInvoiceResult, RenderInvoiceUseCase

__all__ = [
    # Request DTOs
    "InvoiceFormData",
    # Response DTOs
    "RenderInvoiceResponse",
    # Use Cases
    "RenderInvoiceUseCase",
    "RenderInvoiceResult",
    # Service factories
    "get_layout_engine",
    "reset_services",
]
