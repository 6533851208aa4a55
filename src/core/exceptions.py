"""
Domain exceptions for the invoice layout engine.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class InvoiceError(Exception):
    """Base exception for all invoice rendering errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for callers that surface errors to users."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Asset Exceptions (recovered at the resolver boundary)
class AssetError(InvoiceError):
    """Base exception for logo/signature resolution."""

    pass


class AssetNotFoundError(AssetError):
    """Asset file does not exist or cannot be read."""

    def __init__(self, reference: str, reason: str | None = None):
        super().__init__(
            f"Asset not found: {reference}" + (f" - {reason}" if reason else ""),
            code="ASSET_NOT_FOUND",
            details={"reference": reference, "reason": reason},
        )


class AssetFetchError(AssetError):
    """Asset could not be downloaded."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Failed to fetch asset {url}: {reason}",
            code="ASSET_FETCH_ERROR",
            details={"url": url, "reason": reason, "status_code": status_code},
        )
        self.status_code = status_code

    @property
    def is_transient(self) -> bool:
        """Network errors, timeouts and 5xx responses may succeed on retry."""
        return self.status_code is None or self.status_code >= 500


class AssetDecodeError(AssetError):
    """Asset bytes are not a decodable raster image."""

    def __init__(self, reason: str):
        super().__init__(
            f"Cannot decode asset image: {reason}",
            code="ASSET_DECODE_ERROR",
            details={"reason": reason},
        )


class AssetTooLargeError(AssetError):
    """Asset exceeds the configured size limit."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            f"Asset too large: {size} bytes (max {max_size})",
            code="ASSET_TOO_LARGE",
            details={
                "size": size,
                "max_size": max_size,
                "size_mb": round(size / (1024 * 1024), 2),
            },
        )


# Rendering Exceptions (fatal for one render call)
class RenderError(InvoiceError):
    """Document assembly failed; no output was produced."""

    def __init__(self, invoice_no: str, reason: str):
        super().__init__(
            f"Failed to render invoice '{invoice_no}': {reason}",
            code="RENDER_FAILED",
            details={"invoice_no": invoice_no, "reason": reason},
        )


# Configuration Exceptions
class ConfigurationError(InvoiceError):
    """Invalid configuration."""

    def __init__(self, setting: str, reason: str):
        super().__init__(
            f"Configuration error for {setting}: {reason}",
            code="CONFIGURATION_ERROR",
            details={"setting": setting, "reason": reason},
        )
