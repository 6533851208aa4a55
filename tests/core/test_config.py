"""Tests for settings and logging configuration."""

import logging

import pytest
import structlog
from pydantic import ValidationError

from src.config import (
    AssetSettings,
    PdfSettings,
    configure_logging,
    get_logger,
    get_settings,
    reset_settings,
)
from src.config.logging import shorten_payloads


class TestSettings:
    def test_defaults_reproduce_layout(self):
        pdf = PdfSettings()
        assert (pdf.page_width, pdf.page_height) == (210.0, 297.0)
        assert pdf.content_right == 200.0
        assert pdf.font_family == "Helvetica"
        assert pdf.title_text == "Invoice"
        assert pdf.tax_label == "NY Income Tax"
        assert (pdf.logo_x, pdf.logo_y, pdf.logo_width) == (10.0, 8.0, 33.0)
        assert (pdf.signature_x, pdf.signature_y, pdf.signature_width) == (10.0, 250.0, 40.0)

    def test_asset_defaults(self):
        assets = AssetSettings()
        assert assets.max_retries == 2
        assert assets.backoff_delays == [0.5, 1.0]
        assert assets.max_bytes == 10 * 1024 * 1024

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PDF_TAX_LABEL", "VAT")
        monkeypatch.setenv("ASSET_FETCH_TIMEOUT", "2.5")
        assert PdfSettings().tax_label == "VAT"
        assert AssetSettings().fetch_timeout == 2.5

    def test_non_positive_width_rejected(self):
        with pytest.raises(ValidationError):
            PdfSettings(logo_width=0)

    def test_singleton_and_reset(self):
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first


class TestLogging:
    def test_bytes_replaced_by_size(self):
        event = shorten_payloads(None, "info", {"event": "x", "payload": b"\x89PNG" * 10})
        assert event["payload"] == "<40 bytes>"

    def test_long_reference_truncated(self):
        url = "data:image/png;base64," + "A" * 5000
        event = shorten_payloads(None, "info", {"event": "x", "reference": url})
        assert event["reference"].startswith("data:image/png;base64,AAA")
        assert event["reference"].endswith(f"({len(url)} chars)")
        assert len(event["reference"]) < 120

    def test_inline_data_url_truncated_under_any_key(self):
        url = "data:image/png;base64," + "B" * 500
        event = shorten_payloads(None, "info", {"event": "x", "logo": url})
        assert event["logo"].endswith(f"({len(url)} chars)")

    def test_long_error_messages_kept(self):
        reason = "Failed to fetch asset https://cdn.example.test/logo.png: " + "x" * 200
        event = shorten_payloads(None, "warning", {"event": "x", "error": reason, "reason": reason})
        assert event["error"] == reason
        assert event["reason"] == reason

    def test_short_values_untouched(self):
        event = shorten_payloads(None, "info", {"event": "asset_resolved", "width_px": 40})
        assert event == {"event": "asset_resolved", "width_px": 40}

    def test_configure_logging(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        configure_logging()

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("fontTools").level == logging.WARNING
        assert structlog.is_configured()
        get_logger(__name__).info("config_test_event", payload=b"abc")
