"""
Logo and signature resolver.

Accepts raw image bytes, ``data:`` URLs, ``http(s)`` URLs and filesystem
paths, and returns the image re-encoded as PNG together with its pixel
size.  Remote fetches retry with backoff (tenacity) on network errors and
5xx responses.  Every failure is logged and reported as "unavailable"
(None) so one bad asset never aborts a render.
"""

import asyncio
import base64
import binascii
import io
from pathlib import Path
from typing import Any
from urllib.parse import unquote, unquote_to_bytes, urlparse

import httpx
from PIL import Image, UnidentifiedImageError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_chain,
    wait_fixed,
)

from src.config import AssetSettings, get_logger, get_settings
from src.core.entities.drawing import ResolvedImage
from src.core.entities.invoice import AssetReference
from src.core.exceptions import (
    AssetDecodeError,
    AssetError,
    AssetFetchError,
    AssetNotFoundError,
    AssetTooLargeError,
)
from src.core.interfaces.asset_resolver import IAssetResolver

logger = get_logger(__name__)

_REMOTE_SCHEMES = {"http", "https"}

# Modes that carry alpha; everything else is flattened to RGB
_ALPHA_MODES = {"RGBA", "LA", "PA", "RGBa", "La"}


def describe_reference(reference: AssetReference) -> str:
    """Short, log-safe description of an asset reference."""
    if isinstance(reference, bytes):
        return f"<{len(reference)} inline bytes>"
    text = str(reference)
    if text.startswith("data:"):
        header = text.split(",", 1)[0]
        return f"{header},... ({len(text)} chars)"
    return text


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, AssetFetchError) and exc.is_transient


def decode_data_url(url: str) -> bytes:
    """Decode an RFC 2397 ``data:`` URL into its payload bytes."""
    try:
        header, payload = url[len("data:"):].split(",", 1)
    except ValueError as exc:
        raise AssetDecodeError("malformed data URL") from exc
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise AssetDecodeError(f"invalid base64 payload: {exc}") from exc
    return unquote_to_bytes(payload)


class AssetResolver(IAssetResolver):
    """Resolves asset references into PNG pixel data.

    Features:
    - Inline bytes and data URLs decoded in-process
    - Remote URLs fetched with httpx (timeout, redirects), retried via tenacity
    - Local files read off the event loop
    - Size limit and Pillow verification before anything is embedded
    """

    def __init__(self, asset_settings: AssetSettings | None = None):
        if asset_settings is None:
            asset_settings = get_settings().assets
        self._settings = asset_settings

    async def resolve(self, reference: AssetReference | None) -> ResolvedImage | None:
        """Load and decode *reference*; None when absent or unusable."""
        if reference is None:
            return None
        try:
            raw = await self._load(reference)
            self._check_size(len(raw))
            image = self._decode(raw)
        except AssetError as exc:
            logger.warning(
                "asset_unavailable",
                reference=describe_reference(reference),
                error=exc.code,
                reason=exc.message,
            )
            return None

        logger.debug(
            "asset_resolved",
            reference=describe_reference(reference),
            width_px=image.width_px,
            height_px=image.height_px,
        )
        return image

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def _load(self, reference: AssetReference) -> bytes:
        if isinstance(reference, bytes):
            return reference
        if isinstance(reference, Path):
            return await self._read_file(reference)
        if not isinstance(reference, str):
            raise AssetNotFoundError(
                repr(reference), f"unsupported reference type {type(reference).__name__}"
            )

        if reference.startswith("data:"):
            return decode_data_url(reference)

        scheme = urlparse(reference).scheme.lower()
        if scheme in _REMOTE_SCHEMES:
            return await self._fetch(reference)
        if scheme == "file":
            return await self._read_file(Path(unquote(urlparse(reference).path)))
        return await self._read_file(Path(reference))

    async def _read_file(self, path: Path) -> bytes:
        try:
            return await asyncio.to_thread(path.read_bytes)
        except (OSError, ValueError) as exc:
            raise AssetNotFoundError(str(path), str(exc)) from exc

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator with current settings."""
        delays = self._settings.backoff_delays or [0.0]
        return retry(
            stop=stop_after_attempt(max(1, self._settings.max_retries)),
            wait=wait_chain(*(wait_fixed(delay) for delay in delays)),
            retry=retry_if_exception(_is_transient),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        """Log retry attempts."""
        logger.info(
            "asset_fetch_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _fetch(self, url: str) -> bytes:
        """Download *url*, retrying transient failures with backoff."""
        return await self._get_retry_decorator()(self._fetch_once)(url)

    async def _fetch_once(self, url: str) -> bytes:
        logger.debug("asset_fetch_attempt", url=url)
        max_bytes = self._settings.max_bytes
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.fetch_timeout,
                follow_redirects=True,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()

                    declared = response.headers.get("content-length", "")
                    if declared.isdigit() and int(declared) > max_bytes:
                        raise AssetTooLargeError(int(declared), max_bytes)

                    # Stop reading as soon as the body outgrows the limit
                    body = bytearray()
                    async for chunk in response.aiter_bytes():
                        body.extend(chunk)
                        if len(body) > max_bytes:
                            raise AssetTooLargeError(len(body), max_bytes)
                    return bytes(body)

        except httpx.TimeoutException as exc:
            raise AssetFetchError(
                url, f"timeout after {self._settings.fetch_timeout}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise AssetFetchError(url, f"HTTP {status}", status_code=status) from exc
        except httpx.RequestError as exc:
            raise AssetFetchError(url, str(exc) or type(exc).__name__) from exc

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _check_size(self, size: int) -> None:
        if size == 0:
            raise AssetDecodeError("empty payload")
        if size > self._settings.max_bytes:
            raise AssetTooLargeError(size, self._settings.max_bytes)

    @staticmethod
    def _decode(raw: bytes) -> ResolvedImage:
        """Verify the image and normalize it to PNG."""
        try:
            with Image.open(io.BytesIO(raw)) as probe:
                probe.verify()

            # verify() leaves the image unusable; reopen to convert
            with Image.open(io.BytesIO(raw)) as img:
                img.load()
                width, height = img.size
                has_alpha = img.mode in _ALPHA_MODES or "transparency" in img.info
                converted = img.convert("RGBA" if has_alpha else "RGB")
                buffer = io.BytesIO()
                converted.save(buffer, format="PNG")
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            ValueError,
        ) as exc:
            raise AssetDecodeError(str(exc) or type(exc).__name__) from exc

        if width <= 0 or height <= 0:
            raise AssetDecodeError(f"invalid dimensions {width}x{height}")

        return ResolvedImage(data=buffer.getvalue(), width_px=width, height_px=height)
