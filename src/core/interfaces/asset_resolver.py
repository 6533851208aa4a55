"""
Abstract interface for turning asset references into embeddable images.

Used by the layout engine to load logos and signatures before layout.
"""

from abc import ABC, abstractmethod

from src.core.entities.drawing import ResolvedImage
from src.core.entities.invoice import AssetReference


class IAssetResolver(ABC):
    """
    Resolve inline bytes, data URLs, remote URLs or paths to pixel data.

    Implementations must not raise for unusable assets: ``None`` means
    "asset unavailable" and the caller simply leaves it out.
    """

    @abstractmethod
    async def resolve(self, reference: AssetReference | None) -> ResolvedImage | None:
        """
        Load and decode an asset.

        Args:
            reference: Asset reference, or None when the field is empty.

        Returns:
            ResolvedImage, or None if the asset is absent or unusable.
        """
        pass
