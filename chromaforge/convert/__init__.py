# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Color conversion.

- ``colorspace``: pure NumPy conversions between sRGB, Lab, CMYK, Gray, HSL
- ``icc``: optional ICC device transform for CMYK
- ``engine``: ``ColorEngine``, the display-color pipeline (import it from
  ``chromaforge.convert.engine`` or the top-level package)
"""

from chromaforge.convert.colorspace import (
    cmyk_to_srgb,
    hex_to_srgb,
    lab_to_srgb,
    normalize_lab_lightness,
    relative_luminance,
    srgb_to_cmyk,
    srgb_to_gray,
    srgb_to_hex,
    srgb_to_hsl,
    srgb_to_lab,
)
from chromaforge.convert.icc import DeviceTransform, IccCmykTransform

__all__ = [
    "lab_to_srgb",
    "srgb_to_lab",
    "cmyk_to_srgb",
    "srgb_to_cmyk",
    "srgb_to_gray",
    "srgb_to_hsl",
    "srgb_to_hex",
    "hex_to_srgb",
    "normalize_lab_lightness",
    "relative_luminance",
    "DeviceTransform",
    "IccCmykTransform",
]
