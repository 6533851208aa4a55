"""Infrastructure layer implementations."""

from src.infrastructure import assets, pdf

__all__ = ["assets", "pdf"]
