"""Response DTOs returned to the preview and download collaborators."""

from pydantic import BaseModel


class RenderInvoiceResponse(BaseModel):
    """Metadata about a rendered invoice (the bytes travel separately)."""

    invoice_no: str
    file_name: str
    file_size: int
    content_type: str = "application/pdf"
