# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
ICC device transform for CMYK swatches.

Wraps a Pillow ``ImageCms`` transform from a CMYK device profile (for
example Coated FOGRA39) to sRGB, using relative colorimetric intent with
black-point compensation.

The transform is optional. Until ``load()`` (or ``await load_async()``)
succeeds, ``is_ready`` is False and ``transform_cmyk`` raises
ConversionServiceUnavailable; the color engine then falls back to the
analytic CMYK formula.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from PIL import Image, ImageCms

from chromaforge.errors import ConversionServiceUnavailable

logger = logging.getLogger(__name__)

# Distinct quantized inputs kept per transform
CACHE_SIZE = 4096


@runtime_checkable
class DeviceTransform(Protocol):
    """Anything that can turn device CMYK into 8-bit sRGB."""

    @property
    def is_ready(self) -> bool: ...

    def transform_cmyk(self, c: float, m: float, y: float, k: float) -> tuple[int, int, int]:
        """
        Args:
            c, m, y, k: Ink coverage in [0, 1]

        Returns:
            (r, g, b) bytes in 0-255

        Raises:
            ConversionServiceUnavailable: The transform cannot serve the request
        """
        ...


def _to_byte(value: float) -> int:
    return int(round(min(1.0, max(0.0, value)) * 255))


class IccCmykTransform:
    """
    CMYK → sRGB transform backed by LittleCMS through Pillow.

    Results are cached per 8-bit quantized CMYK input, which is the
    resolution the transform works at anyway, keeping the ``CACHE_SIZE``
    most recently used.
    """

    def __init__(
        self,
        cmyk_profile: Union[str, Path],
        srgb_profile: Optional[Union[str, Path]] = None,
    ) -> None:
        self.cmyk_profile = Path(cmyk_profile)
        self.srgb_profile = Path(srgb_profile) if srgb_profile is not None else None
        self._transform = None
        self._convert = functools.lru_cache(maxsize=CACHE_SIZE)(self._apply)

    @property
    def is_ready(self) -> bool:
        return self._transform is not None

    def load(self) -> bool:
        """
        Open both profiles and build the transform.

        Returns:
            True on success. Failures are logged and leave the transform
            unavailable; they are never raised.
        """
        try:
            source = ImageCms.getOpenProfile(str(self.cmyk_profile))
        except (OSError, ImageCms.PyCMSError) as e:
            logger.warning("[ICC] Cannot open CMYK profile %s: %s", self.cmyk_profile, e)
            return False

        destination = None
        if self.srgb_profile is not None:
            try:
                destination = ImageCms.getOpenProfile(str(self.srgb_profile))
            except (OSError, ImageCms.PyCMSError) as e:
                logger.info(
                    "[ICC] sRGB profile %s unusable (%s); using built-in sRGB",
                    self.srgb_profile, e,
                )
        if destination is None:
            destination = ImageCms.createProfile("sRGB")

        try:
            self._transform = ImageCms.buildTransform(
                source,
                destination,
                "CMYK",
                "RGB",
                renderingIntent=ImageCms.Intent.RELATIVE_COLORIMETRIC,
                flags=ImageCms.Flags.BLACKPOINTCOMPENSATION,
            )
        except ImageCms.PyCMSError as e:
            logger.warning("[ICC] Cannot build CMYK → sRGB transform: %s", e)
            return False

        self._convert.cache_clear()
        logger.info("[ICC] Transform ready: %s → sRGB", self.cmyk_profile.name)
        return True

    async def load_async(self) -> bool:
        """Run ``load`` in a worker thread."""
        return await asyncio.to_thread(self.load)

    def transform_cmyk(self, c: float, m: float, y: float, k: float) -> tuple[int, int, int]:
        if self._transform is None:
            raise ConversionServiceUnavailable("ICC transform not loaded")

        return self._convert(_to_byte(c), _to_byte(m), _to_byte(y), _to_byte(k))

    def _apply(self, c: int, m: int, y: int, k: int) -> tuple[int, int, int]:
        try:
            pixel = Image.new("CMYK", (1, 1), (c, m, y, k))
            rgb = ImageCms.applyTransform(pixel, self._transform).getpixel((0, 0))
        except (ImageCms.PyCMSError, OSError, ValueError) as e:
            raise ConversionServiceUnavailable(f"ICC transform failed: {e}") from e
        return (int(rgb[0]), int(rgb[1]), int(rgb[2]))

    def clear_cache(self) -> None:
        """Drop cached transform results."""
        self._convert.cache_clear()

    def cache_info(self):
        """Hit and miss counters of the result cache."""
        return self._convert.cache_info()
