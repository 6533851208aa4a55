"""
Render Invoice Use Case.

Turns the editor's form state into a PDF ready for preview or download.
"""

from dataclasses import dataclass

from src.application.dto.requests import InvoiceFormData
from src.application.dto.responses import RenderInvoiceResponse
from src.config import get_logger
from src.core.services.invoice_layout import InvoiceLayoutEngine

logger = get_logger(__name__)


@dataclass
class RenderInvoiceResult:
    """Result of rendering one invoice."""

    pdf_bytes: bytes
    invoice_no: str
    file_name: str
    file_size: int


class RenderInvoiceUseCase:
    """
    Use case for rendering an invoice from form data.

    Flow:
    1. Convert form strings into an InvoiceRecord (bad numbers become 0)
    2. Render via InvoiceLayoutEngine
    3. Return PDF bytes plus a suggested download name
    """

    def __init__(
        self,
        layout_engine: InvoiceLayoutEngine | None = None,
    ):
        self._layout_engine = layout_engine

    def _get_layout_engine(self) -> InvoiceLayoutEngine:
        if self._layout_engine is None:
            from src.application.services import get_layout_engine

            self._layout_engine = get_layout_engine()
        return self._layout_engine

    async def execute(self, form: InvoiceFormData) -> RenderInvoiceResult:
        """
        Render the invoice described by *form*.

        Args:
            form: Current form state.

        Returns:
            RenderInvoiceResult with PDF bytes and metadata.

        Raises:
            RenderError: If the document could not be assembled.
        """
        record = form.to_record()
        logger.info("render_invoice_started", invoice_no=record.invoice_no)

        pdf_bytes = await self._get_layout_engine().render(record)

        result = RenderInvoiceResult(
            pdf_bytes=pdf_bytes,
            invoice_no=record.invoice_no,
            file_name=form.download_name,
            file_size=len(pdf_bytes),
        )
        logger.info(
            "render_invoice_complete",
            invoice_no=result.invoice_no,
            file_size=result.file_size,
        )
        return result

    @staticmethod
    def to_response(result: RenderInvoiceResult) -> RenderInvoiceResponse:
        """Convert result to response metadata."""
        return RenderInvoiceResponse(
            invoice_no=result.invoice_no,
            file_name=result.file_name,
            file_size=result.file_size,
        )
