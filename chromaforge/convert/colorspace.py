# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Display chain for Lab swatches:
    CIE Lab (D50) → XYZ (D50) → Bradford → XYZ (D65) → Linear sRGB → sRGB

References:
- CIE Lab: http://www.brucelindbloom.com/index.html?Eqn_Lab_to_XYZ.html
- Bradford adaptation: http://www.brucelindbloom.com/index.html?Eqn_ChromAdapt.html

The RGB → Lab direction uses the exact matrix inverses of the decode
direction so that in-gamut colors round-trip.

All functions accept arrays of shape (..., channels) and are pure NumPy.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


# =============================================================================
# sRGB ↔ Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((np.maximum(srgb, 0.04045) + 0.055) / 1.055, 2.4),
    )


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to sRGB values [0,1].

    Inverse of srgb_to_linear. Out-of-gamut results are clipped.
    """
    linear = np.asarray(linear, dtype=np.float64)
    # Clip negative values to avoid NaN in power function
    linear_safe = np.maximum(linear, 0.0)
    srgb = np.where(
        linear_safe <= 0.0031308,
        linear_safe * 12.92,
        1.055 * np.power(linear_safe, 1.0 / 2.4) - 0.055,
    )
    return np.clip(srgb, 0.0, 1.0)


# =============================================================================
# CIE Lab ↔ XYZ (D50)
# =============================================================================

# D50 reference white, Y = 100 scale
REF_WHITE_D50 = np.array([96.422, 100.0, 82.521], dtype=np.float64)

LAB_EPSILON = 0.008856
LAB_KAPPA = 903.3

# Stored Lab lightness at or below this (and above 0) is taken as 0-1 scale
LAB_UNIT_LIGHTNESS_MAX = 1.05


def normalize_lab_lightness(lightness):
    """
    Bring a stored L value onto the 0-100 scale.

    Some writers store L as 0-1. Any 0 < L <= 1.05 is scaled by 100.
    A genuinely very dark color stored on the 0-100 scale (L ≈ 1) is
    misread by this rule; it is kept for compatibility with existing files.
    """
    L = np.asarray(lightness, dtype=np.float64)
    scaled = np.where((L > 0.0) & (L <= LAB_UNIT_LIGHTNESS_MAX), L * 100.0, L)
    if scaled.ndim == 0:
        return float(scaled)
    return scaled


def lab_to_xyz(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert CIE Lab (L in 0-100) to XYZ relative to D50, with Y in [0, 1].
    """
    lab = np.asarray(lab, dtype=np.float64)

    fy = (lab[..., 0] + 16.0) / 116.0
    fx = lab[..., 1] / 500.0 + fy
    fz = fy - lab[..., 2] / 200.0

    f = np.stack([fx, fy, fz], axis=-1)
    f3 = f ** 3
    t = np.where(f3 > LAB_EPSILON, f3, (116.0 * f - 16.0) / LAB_KAPPA)

    return t * (REF_WHITE_D50 / 100.0)


def xyz_to_lab(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert XYZ relative to D50 (Y in [0, 1]) to CIE Lab (L in 0-100).

    Inverse of lab_to_xyz.
    """
    xyz = np.asarray(xyz, dtype=np.float64)

    t = xyz / (REF_WHITE_D50 / 100.0)
    f = np.where(t > LAB_EPSILON, np.cbrt(t), (LAB_KAPPA * t + 16.0) / 116.0)

    L = 116.0 * f[..., 1] - 16.0
    a = 500.0 * (f[..., 0] - f[..., 1])
    b = 200.0 * (f[..., 1] - f[..., 2])

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# XYZ ↔ Linear sRGB
# =============================================================================

# Bradford chromatic adaptation, D50 → D65
_BRADFORD_D50_TO_D65 = np.array([
    [0.9555766, -0.0230393, 0.0631636],
    [-0.0282895, 1.0099416, 0.0210077],
    [0.0122982, -0.0204830, 1.3299098],
], dtype=np.float64)

# XYZ (D65) to linear sRGB
_XYZ_TO_LINEAR_SRGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
], dtype=np.float64)

# Inverse matrices
_BRADFORD_D65_TO_D50 = np.linalg.inv(_BRADFORD_D50_TO_D65)
_LINEAR_SRGB_TO_XYZ = np.linalg.inv(_XYZ_TO_LINEAR_SRGB)


def xyz_d50_to_linear_srgb(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """Adapt D50 XYZ to D65 and project onto linear sRGB (unclipped)."""
    xyz = np.asarray(xyz, dtype=np.float64)
    xyz_d65 = np.einsum('...j,ij->...i', xyz, _BRADFORD_D50_TO_D65)
    return np.einsum('...j,ij->...i', xyz_d65, _XYZ_TO_LINEAR_SRGB)


def linear_srgb_to_xyz_d50(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Inverse of xyz_d50_to_linear_srgb."""
    rgb = np.asarray(rgb, dtype=np.float64)
    xyz_d65 = np.einsum('...j,ij->...i', rgb, _LINEAR_SRGB_TO_XYZ)
    return np.einsum('...j,ij->...i', xyz_d65, _BRADFORD_D65_TO_D50)


# =============================================================================
# Convenience: Lab ↔ sRGB (full chain)
# =============================================================================


def lab_to_srgb(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert stored Lab values to sRGB [0,1].

    Full chain: Lab → XYZ (D50) → Bradford → Linear sRGB → sRGB

    L may be stored on either scale (see normalize_lab_lightness).
    Out-of-gamut colors are clipped to [0, 1].
    """
    lab = np.array(lab, dtype=np.float64)
    lab[..., 0] = normalize_lab_lightness(lab[..., 0])
    linear = xyz_d50_to_linear_srgb(lab_to_xyz(lab))
    return linear_to_srgb(linear)


def srgb_to_lab(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB [0,1] to CIE Lab (D50), L in 0-100.

    Full chain: sRGB → Linear sRGB → XYZ (D65) → Bradford → XYZ (D50) → Lab
    """
    linear = srgb_to_linear(srgb)
    return xyz_to_lab(linear_srgb_to_xyz_d50(linear))


# =============================================================================
# CMYK / Gray (device-independent approximations)
# =============================================================================


def cmyk_to_srgb(cmyk: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Naive CMYK → RGB: ``R = (1 - c)(1 - k)`` and so on.

    Used when no ICC transform is available.
    """
    cmyk = np.asarray(cmyk, dtype=np.float64)
    k = cmyk[..., 3:4]
    return np.clip((1.0 - cmyk[..., :3]) * (1.0 - k), 0.0, 1.0)


def srgb_to_cmyk(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    RGB → CMYK with full black generation.

    ``k = min(1-r, 1-g, 1-b)``; pure black maps to (0, 0, 0, 1).
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    cmy = 1.0 - srgb
    k = np.min(cmy, axis=-1, keepdims=True)
    black = k >= 1.0
    denom = np.where(black, 1.0, 1.0 - k)
    cmy = np.where(black, 0.0, (cmy - k) / denom)
    return np.concatenate([cmy, k], axis=-1)


def srgb_to_gray(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rec. 601 luma, returned with a trailing channel axis of size 1."""
    srgb = np.asarray(srgb, dtype=np.float64)
    luma = srgb @ np.array([0.299, 0.587, 0.114])
    return luma[..., np.newaxis]


# =============================================================================
# HSL (sorting)
# =============================================================================


def srgb_to_hsl(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB [0,1] to HSL.

    Returns:
        Array of shape (..., 3) with (H, S, L), all in [0, 1].
        Hue is a fraction of a full turn; achromatic colors get H = S = 0.
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    r, g, b = srgb[..., 0], srgb[..., 1], srgb[..., 2]

    mx = np.max(srgb, axis=-1)
    mn = np.min(srgb, axis=-1)
    lightness = (mx + mn) / 2.0
    d = mx - mn
    chromatic = d > 0

    safe_d = np.where(chromatic, d, 1.0)
    denom = np.where(lightness > 0.5, 2.0 - mx - mn, mx + mn)
    denom = np.where(denom == 0, 1.0, denom)
    saturation = np.where(chromatic, d / denom, 0.0)

    hue = np.where(
        mx == r,
        (g - b) / safe_d + np.where(g < b, 6.0, 0.0),
        np.where(mx == g, (b - r) / safe_d + 2.0, (r - g) / safe_d + 4.0),
    )
    hue = np.where(chromatic, hue / 6.0, 0.0)

    return np.stack([hue, saturation, lightness], axis=-1)


# =============================================================================
# Luminance and contrast
# =============================================================================

_LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


def relative_luminance(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """WCAG relative luminance of sRGB [0,1] colors."""
    return srgb_to_linear(srgb) @ _LUMINANCE_WEIGHTS


def contrast_ratio(lum1: float, lum2: float) -> float:
    """WCAG contrast ratio between two relative luminances (>= 1)."""
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


# =============================================================================
# Hex
# =============================================================================


def srgb_to_hex(srgb: NDArray[np.float64]) -> str:
    """
    Convert one sRGB [0,1] color to a hex string like "#FF3333".

    Values are clipped to [0, 1] before rounding.
    """
    srgb = np.clip(np.asarray(srgb, dtype=np.float64), 0.0, 1.0)
    r, g, b = (srgb * 255).round().astype(int)
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_srgb(hex_color: str) -> NDArray[np.float64]:
    """
    Convert a hex string ("#3941C8" or "3941C8") to sRGB [0,1].

    Raises:
        ValueError: Not a 6-digit hex color
    """
    digits = hex_color.strip().lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected 6-digit hex color, got {hex_color!r}")
    try:
        r = int(digits[0:2], 16)
        g = int(digits[2:4], 16)
        b = int(digits[4:6], 16)
    except ValueError:
        raise ValueError(f"Invalid hex color {hex_color!r}") from None
    return np.array([r, g, b], dtype=np.float64) / 255.0
