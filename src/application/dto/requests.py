"""Request DTOs for the invoice form.

Pydantic v2 models mirroring the editing form's payload: camelCase keys
and numbers typed as strings. These are the ONLY contracts between the
form and the render use case.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.invoice import AssetReference, InvoiceRecord
from src.core.formatting import format_today


class InvoiceFormData(BaseModel):
    """Live form state as sent by the editor.

    Numeric fields stay raw strings here; they are parsed with the
    "invalid means 0" rule when converted to an InvoiceRecord.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    invoice_no: str = Field(default="", alias="invoiceNo", examples=["2025-001"])
    date: str = Field(default="", examples=["18/10/2026"])

    issuer_company: str = Field(default="", alias="issuerCompany")
    issuer_address: str = Field(default="", alias="issuerAddress")
    issuer_email: str = Field(default="", alias="issuerEmail")

    recipient_name: str = Field(default="", alias="recipientName")
    recipient_address: str = Field(default="", alias="recipientAddress")
    recipient_email: str = Field(default="", alias="recipientEmail")
    recipient_phone: str = Field(default="", alias="recipientPhone")

    description: str = ""
    quantity: str | float = Field(default="", examples=["80"])
    unit_price: str | float = Field(default="", alias="unitPrice", examples=["75"])
    tax_rate: str | float = Field(default="", alias="taxRate", examples=["8.25"])

    logo: AssetReference | None = Field(
        default=None,
        alias="logoDataUrl",
        description="Data URL, remote URL, path or raw bytes of the logo",
    )
    signature: AssetReference | None = Field(
        default=None,
        alias="signatureDataUrl",
        description="Data URL, remote URL, path or raw bytes of the signature",
    )

    @classmethod
    def sample(cls, today: dt.date | None = None) -> "InvoiceFormData":
        """Pre-filled form shown when the editor first opens."""
        return cls(
            invoice_no="2025-001",
            date=format_today(today),
            issuer_company="NovaPay Solutions",
            issuer_address="742 Evergreen Terrace, Suite 200, Austin, TX 78701",
            issuer_email="billing@novapay.io",
            recipient_name="James Mitchell",
            recipient_address="350 Fifth Avenue, New York, NY 10118",
            recipient_email="j.mitchell@acmecorp.com",
            recipient_phone="+1 212 555 0147",
            description="Software Development (hours)",
            quantity="80",
            unit_price="75",
            tax_rate="8.25",
        )

    @property
    def download_name(self) -> str:
        """File name offered when the rendered invoice is saved."""
        return f"invoice_{self.invoice_no.strip() or 'draft'}.pdf"

    def to_record(self) -> InvoiceRecord:
        """Convert to the engine's immutable input record."""
        return InvoiceRecord(**self.model_dump(by_alias=False))
