"""
Invoice domain entities with Pydantic v2 validation.

All numeric fields use validators to ensure they're never None or NaN,
so a half-typed form can always be rendered.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, field_validator

from src.core.formatting import parse_number

# Raw encoded image bytes, a data: URL, an http(s) URL, or a filesystem path
AssetReference = Union[bytes, str, Path]


class InvoiceRecord(BaseModel):
    """
    Everything one render call needs: parties, one line item, tax rate, assets.

    Frozen: the engine reads it during a single pass and keeps nothing.
    """

    model_config = ConfigDict(frozen=True)

    # Identity (date is pre-formatted by the caller)
    invoice_no: str = ""
    date: str = ""

    # Issuer
    issuer_company: str = ""
    issuer_address: str = ""
    issuer_email: str = ""

    # Recipient
    recipient_name: str = ""
    recipient_address: str = ""
    recipient_email: str = ""
    recipient_phone: str = ""

    # Line item - numeric fields NEVER None
    description: str = ""
    quantity: float = 0.0
    unit_price: float = 0.0
    tax_rate: float = 0.0

    # Raster assets
    logo: AssetReference | None = None
    signature: AssetReference | None = None

    @field_validator("quantity", "unit_price", "tax_rate", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> float:
        """Convert None/empty/invalid to 0.0."""
        return parse_number(v)

    @field_validator(
        "invoice_no",
        "date",
        "issuer_company",
        "issuer_address",
        "issuer_email",
        "recipient_name",
        "recipient_address",
        "recipient_email",
        "recipient_phone",
        "description",
        mode="before",
    )
    @classmethod
    def coerce_string(cls, v: Any) -> str:
        """Ensure string fields are never None."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("logo", "signature", mode="before")
    @classmethod
    def empty_asset_is_absent(cls, v: Any) -> Any:
        if v is None:
            return None
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, (bytes, bytearray)):
            return bytes(v) or None
        return v

    @property
    def issuer_lines(self) -> list[str]:
        """Non-empty issuer fields in display order."""
        return [
            line
            for line in (self.issuer_company, self.issuer_address, self.issuer_email)
            if line
        ]

    @property
    def recipient_lines(self) -> list[str]:
        """Non-empty recipient fields in display order."""
        return [
            line
            for line in (
                self.recipient_name,
                self.recipient_address,
                self.recipient_email,
                self.recipient_phone,
            )
            if line
        ]


@dataclass(frozen=True)
class DerivedTotals:
    """Monetary summary computed from a record on every render."""

    line_total: float
    tax_amount: float
    grand_total: float

    @classmethod
    def from_record(cls, record: InvoiceRecord) -> "DerivedTotals":
        line_total = record.quantity * record.unit_price
        tax_amount = line_total * record.tax_rate / 100
        return cls(
            line_total=line_total,
            tax_amount=tax_amount,
            grand_total=line_total + tax_amount,
        )
