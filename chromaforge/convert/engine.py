# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Display color resolution and model transcoding.

``ColorEngine.resolve_display_color`` is the single entry point for
turning a swatch into the sRGB triplet shown on screen. Resolution order,
first match wins:

1. Authority: the name matches a reference entry and the stored values
   still agree with it → the reference color
2. CMYK: ICC device transform, or the analytic formula when the transform
   is missing, not loaded yet, or failing
3. Lab: CIE Lab (D50) → sRGB
4. RGB: pass through
5. Gray: replicated to R = G = B
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from chromaforge.authority import AuthorityTable
from chromaforge.convert.colorspace import (
    cmyk_to_srgb,
    contrast_ratio,
    lab_to_srgb,
    relative_luminance,
    srgb_to_cmyk,
    srgb_to_gray,
    srgb_to_hex,
    srgb_to_hsl,
    srgb_to_lab,
)
from chromaforge.convert.icc import DeviceTransform
from chromaforge.schema import Color, ColorModel

logger = logging.getLogger(__name__)


RGBTriplet = tuple[float, float, float]

WHITE_TEXT = "#FFFFFF"
BLACK_TEXT = "#000000"


@dataclass(frozen=True, slots=True)
class ContrastRatios:
    """Contrast of a swatch against white and black text."""
    white: float
    black: float

    @property
    def best_text_color(self) -> str:
        """White if it contrasts strictly better, otherwise black."""
        return WHITE_TEXT if self.white > self.black else BLACK_TEXT

    @property
    def best(self) -> float:
        return max(self.white, self.black)


def _triplet(rgb) -> RGBTriplet:
    r, g, b = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0)
    return float(r), float(g), float(b)


class ColorEngine:
    """
    Converts swatches to display colors and between color models.

    Args:
        authority: Reference table consulted before any math
        device_transform: Optional CMYK → sRGB service (see
            ``chromaforge.convert.icc``). May be absent or not ready.
    """

    def __init__(
        self,
        authority: Optional[AuthorityTable] = None,
        device_transform: Optional[DeviceTransform] = None,
    ) -> None:
        self.authority = authority if authority is not None else AuthorityTable.empty()
        self.device_transform = device_transform

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def resolve_display_color(self, entry: Color) -> RGBTriplet:
        """
        Display color of ``entry`` as (r, g, b) in [0, 1].

        Swatches without values or with an unsupported model render black.
        """
        if not entry.values or entry.model is None:
            return (0.0, 0.0, 0.0)

        reference = self.authority.resolve(entry)
        if reference is not None:
            return reference.srgb

        model = entry.model
        if model is ColorModel.CMYK:
            return self.cmyk_to_rgb(*(entry.channel(i) for i in range(4)))
        if model is ColorModel.LAB:
            return _triplet(lab_to_srgb([entry.channel(i) for i in range(3)]))
        if model is ColorModel.RGB:
            return (entry.channel(0), entry.channel(1), entry.channel(2))
        # Gray
        v = entry.channel(0)
        return (v, v, v)

    def cmyk_to_rgb(self, c: float, m: float, y: float, k: float) -> RGBTriplet:
        """
        CMYK [0,1] → sRGB [0,1] through the device transform.

        Falls back to the analytic formula without raising.
        """
        transform = self.device_transform
        if transform is not None and transform.is_ready:
            try:
                r, g, b = transform.transform_cmyk(c, m, y, k)
                return (r / 255.0, g / 255.0, b / 255.0)
            except Exception as e:
                # any transform failure costs accuracy only
                logger.debug("[Engine] Device transform failed, using analytic CMYK: %r", e)
        return _triplet(cmyk_to_srgb([c, m, y, k]))

    def is_authoritative(self, entry: Color) -> bool:
        """True if ``entry`` renders from its reference color."""
        return self.authority.is_authoritative(entry)

    def to_hex(self, entry: Color) -> str:
        """Display color as "#RRGGBB"."""
        return srgb_to_hex(self.resolve_display_color(entry))

    def to_hsl(self, entry: Color) -> tuple[float, float, float]:
        """Display color as (hue, saturation, lightness), all in [0, 1]."""
        h, s, l = srgb_to_hsl(self.resolve_display_color(entry))
        return float(h), float(s), float(l)

    # -------------------------------------------------------------------------
    # Transcoding
    # -------------------------------------------------------------------------

    def convert_model(self, entry: Color, target: ColorModel) -> Color:
        """
        Return a copy of ``entry`` re-expressed in ``target``.

        The source is read through ``resolve_display_color``, so a verified
        reference color is what gets converted. Same-model conversion
        returns an unchanged copy.
        """
        if entry.model is target:
            return replace(entry)
        rgb = self.resolve_display_color(entry)
        return replace(entry, model=target, values=rgb_to_model(rgb, target))

    # -------------------------------------------------------------------------
    # Accessibility
    # -------------------------------------------------------------------------

    def luminance(self, entry: Color) -> float:
        """WCAG relative luminance of the display color."""
        return float(relative_luminance(self.resolve_display_color(entry)))

    def contrast_ratios(self, entry: Color) -> ContrastRatios:
        """Contrast of the display color against white and black."""
        lum = self.luminance(entry)
        return ContrastRatios(
            white=contrast_ratio(1.0, lum),
            black=contrast_ratio(lum, 0.0),
        )

    def best_text_color(self, entry: Color) -> str:
        """"#FFFFFF" or "#000000", whichever reads better on the swatch."""
        return self.contrast_ratios(entry).best_text_color


def rgb_to_model(rgb, target: ColorModel) -> tuple[float, ...]:
    """
    Express an sRGB [0,1] color as native values of ``target``.

    Lab values come out with L on the 0-100 scale.
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    if target is ColorModel.RGB:
        values = rgb
    elif target is ColorModel.CMYK:
        values = srgb_to_cmyk(rgb)
    elif target is ColorModel.LAB:
        values = srgb_to_lab(rgb)
    elif target is ColorModel.GRAY:
        values = srgb_to_gray(rgb)
    else:
        raise ValueError(f"Unsupported target model: {target!r}")
    return tuple(float(v) for v in values)
