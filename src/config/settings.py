"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
The defaults reproduce the standard invoice layout, so nothing has to be
configured for a render to work.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PdfSettings(BaseSettings):
    """Page geometry and fixed texts for the invoice layout (millimetres)."""

    model_config = SettingsConfigDict(env_prefix="PDF_")

    page_width: float = 210.0
    page_height: float = 297.0
    left_margin: float = 10.0
    right_margin: float = 10.0

    font_family: str = "Helvetica"
    title_text: str = "Invoice"
    tax_label: str = "NY Income Tax"
    currency_symbol: str = "$"

    # Raster assets: anchor is the top-left corner, height follows the aspect ratio
    logo_x: float = 10.0
    logo_y: float = 8.0
    logo_width: float = 33.0
    signature_x: float = 10.0
    signature_y: float = 250.0
    signature_width: float = 40.0

    @field_validator("page_width", "page_height", "logo_width", "signature_width")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @property
    def content_right(self) -> float:
        """X coordinate of the right margin."""
        return self.page_width - self.right_margin


class AssetSettings(BaseSettings):
    """Logo/signature loading configuration."""

    model_config = SettingsConfigDict(env_prefix="ASSET_")

    fetch_timeout: float = 10.0
    max_retries: int = 2
    backoff_delays: list[float] = [0.5, 1.0]
    max_bytes: int = 10 * 1024 * 1024  # 10 MB


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Invoice Layout Engine"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    pdf: PdfSettings = Field(default_factory=PdfSettings)
    assets: AssetSettings = Field(default_factory=AssetSettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
