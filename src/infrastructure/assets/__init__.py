"""Raster asset loading (logos, signatures)."""

from src.infrastructure.assets.resolver import AssetResolver

__all__ = ["AssetResolver"]
