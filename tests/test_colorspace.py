# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""Tests for color space conversions (sRGB ↔ Lab, CMYK, Gray, HSL)."""

import numpy as np
import pytest

from chromaforge.convert.colorspace import (
    cmyk_to_srgb,
    contrast_ratio,
    hex_to_srgb,
    lab_to_srgb,
    lab_to_xyz,
    linear_to_srgb,
    normalize_lab_lightness,
    relative_luminance,
    srgb_to_cmyk,
    srgb_to_gray,
    srgb_to_hex,
    srgb_to_hsl,
    srgb_to_lab,
    srgb_to_linear,
    xyz_to_lab,
)


class TestSRGBLinearRoundtrip:
    """sRGB ↔ Linear RGB conversions must roundtrip accurately."""

    def test_roundtrip_mid_gray(self):
        srgb = np.array([0.5, 0.5, 0.5])
        recovered = linear_to_srgb(srgb_to_linear(srgb))
        np.testing.assert_allclose(recovered, srgb, atol=1e-10)

    def test_gamma_threshold(self):
        """Values below 0.04045 use linear segment."""
        linear = srgb_to_linear(np.array([0.03]))
        assert float(linear[0]) == pytest.approx(0.03 / 12.92, abs=1e-10)

    def test_encode_linear_segment(self):
        assert float(linear_to_srgb(np.array([0.002]))[0]) == pytest.approx(0.002 * 12.92)

    def test_encode_clips(self):
        np.testing.assert_allclose(linear_to_srgb(np.array([-0.2, 1.7])), [0.0, 1.0])

    def test_batch_roundtrip(self):
        srgb = np.random.RandomState(42).random((100, 3))
        recovered = linear_to_srgb(srgb_to_linear(srgb))
        np.testing.assert_allclose(recovered, srgb, atol=1e-10)


class TestLab:
    """CIE Lab (D50) ↔ sRGB."""

    def test_black(self):
        np.testing.assert_allclose(lab_to_srgb([0.0, 0.0, 0.0]), [0.0, 0.0, 0.0], atol=1e-12)

    def test_white(self):
        np.testing.assert_allclose(lab_to_srgb([100.0, 0.0, 0.0]), [1.0, 1.0, 1.0], atol=2e-3)

    def test_white_to_lab(self):
        L, a, b = srgb_to_lab([1.0, 1.0, 1.0])
        assert L == pytest.approx(100.0, abs=0.5)
        assert a == pytest.approx(0.0, abs=0.5)
        assert b == pytest.approx(0.0, abs=0.5)

    def test_xyz_roundtrip(self):
        lab = np.array([[50.0, 20.0, -30.0], [5.0, 1.0, 1.0], [90.0, -40.0, 60.0]])
        np.testing.assert_allclose(xyz_to_lab(lab_to_xyz(lab)), lab, atol=1e-9)

    def test_white_point_is_d50(self):
        np.testing.assert_allclose(lab_to_xyz([100.0, 0.0, 0.0]), [0.96422, 1.0, 0.82521], atol=1e-9)

    @pytest.mark.parametrize("lab", [
        (50.0, 20.0, -30.0),
        (70.0, -20.0, 40.0),
        (30.0, 10.0, 10.0),
        (85.0, 0.0, 0.0),
    ])
    def test_in_gamut_roundtrip(self, lab):
        recovered = srgb_to_lab(lab_to_srgb(lab))
        np.testing.assert_allclose(recovered, lab, atol=0.3)

    def test_out_of_gamut_clamps(self):
        rgb = lab_to_srgb([60.0, 120.0, -120.0])
        assert np.all(rgb >= 0.0) and np.all(rgb <= 1.0)

    def test_srgb_primary_red(self):
        L, a, b = srgb_to_lab([1.0, 0.0, 0.0])
        # Published D50 values for sRGB red are about (54.3, 80.8, 69.9)
        assert L == pytest.approx(54.3, abs=0.5)
        assert a == pytest.approx(80.8, abs=1.0)
        assert b == pytest.approx(69.9, abs=1.0)


class TestLabLightnessHeuristic:
    """0 < L <= 1.05 is read as a 0-1 lightness."""

    def test_unit_scale_rescaled(self):
        assert normalize_lab_lightness(0.5) == pytest.approx(50.0)

    def test_boundary(self):
        assert normalize_lab_lightness(1.05) == pytest.approx(105.0)
        assert normalize_lab_lightness(1.06) == pytest.approx(1.06)

    def test_zero_untouched(self):
        assert normalize_lab_lightness(0.0) == 0.0

    def test_dark_color_misread(self):
        """Known edge case: L = 1 on the 0-100 scale is taken as 100."""
        assert normalize_lab_lightness(1.0) == pytest.approx(100.0)

    def test_same_display_either_scale(self):
        np.testing.assert_allclose(
            lab_to_srgb([0.5, 10.0, -10.0]),
            lab_to_srgb([50.0, 10.0, -10.0]),
        )

    def test_vectorized(self):
        np.testing.assert_allclose(
            normalize_lab_lightness(np.array([0.5, 50.0, 0.0])), [50.0, 50.0, 0.0]
        )


class TestCMYK:

    def test_analytic_red(self):
        np.testing.assert_allclose(cmyk_to_srgb([0.0, 1.0, 1.0, 0.0]), [1.0, 0.0, 0.0])

    def test_analytic_black_ink(self):
        np.testing.assert_allclose(cmyk_to_srgb([0.0, 0.0, 0.0, 0.5]), [0.5, 0.5, 0.5])

    def test_rgb_to_cmyk_red(self):
        np.testing.assert_allclose(srgb_to_cmyk([1.0, 0.0, 0.0]), [0.0, 1.0, 1.0, 0.0])

    def test_black_collapses(self):
        np.testing.assert_allclose(srgb_to_cmyk([0.0, 0.0, 0.0]), [0.0, 0.0, 0.0, 1.0])

    def test_white_no_ink(self):
        np.testing.assert_allclose(srgb_to_cmyk([1.0, 1.0, 1.0]), [0.0, 0.0, 0.0, 0.0])

    def test_roundtrip(self):
        rgb = np.random.RandomState(7).random((200, 3))
        recovered = cmyk_to_srgb(srgb_to_cmyk(rgb))
        np.testing.assert_allclose(recovered, rgb, atol=1e-3)

    def test_full_black_any_cmy(self):
        np.testing.assert_allclose(cmyk_to_srgb([0.3, 0.6, 0.9, 1.0]), [0.0, 0.0, 0.0])


class TestGray:

    def test_rec601_weights(self):
        assert float(srgb_to_gray([1.0, 0.0, 0.0])[0]) == pytest.approx(0.299)
        assert float(srgb_to_gray([0.0, 1.0, 0.0])[0]) == pytest.approx(0.587)
        assert float(srgb_to_gray([0.0, 0.0, 1.0])[0]) == pytest.approx(0.114)

    def test_shape(self):
        assert srgb_to_gray(np.zeros((4, 3))).shape == (4, 1)


class TestHSL:

    @pytest.mark.parametrize("rgb, hsl", [
        ((1.0, 0.0, 0.0), (0.0, 1.0, 0.5)),
        ((0.0, 1.0, 0.0), (1 / 3, 1.0, 0.5)),
        ((0.0, 0.0, 1.0), (2 / 3, 1.0, 0.5)),
        ((1.0, 0.0, 1.0), (5 / 6, 1.0, 0.5)),
        ((0.5, 0.5, 0.5), (0.0, 0.0, 0.5)),
        ((1.0, 1.0, 1.0), (0.0, 0.0, 1.0)),
    ])
    def test_known_values(self, rgb, hsl):
        np.testing.assert_allclose(srgb_to_hsl(rgb), hsl, atol=1e-12)

    def test_light_saturation_branch(self):
        h, s, l = srgb_to_hsl([1.0, 0.6, 0.6])
        assert l == pytest.approx(0.8)
        assert s == pytest.approx(0.4 / (2.0 - 1.6))

    def test_batch(self):
        out = srgb_to_hsl(np.random.RandomState(1).random((10, 3)))
        assert out.shape == (10, 3)
        assert np.all((out >= 0.0) & (out <= 1.0))


class TestLuminance:

    def test_white_black(self):
        assert float(relative_luminance([1.0, 1.0, 1.0])) == pytest.approx(1.0)
        assert float(relative_luminance([0.0, 0.0, 0.0])) == pytest.approx(0.0)

    def test_contrast_black_white(self):
        assert contrast_ratio(1.0, 0.0) == pytest.approx(21.0)

    def test_contrast_symmetric(self):
        assert contrast_ratio(0.2, 0.7) == contrast_ratio(0.7, 0.2)


class TestHex:

    def test_to_hex(self):
        assert srgb_to_hex([1.0, 0.2, 0.2]) == "#FF3333"

    def test_to_hex_clips(self):
        assert srgb_to_hex([1.5, -0.1, 0.0]) == "#FF0000"

    def test_from_hex(self):
        np.testing.assert_allclose(hex_to_srgb("#ff3333"), [1.0, 0.2, 0.2])
        np.testing.assert_allclose(hex_to_srgb("0000FF"), [0.0, 0.0, 1.0])

    @pytest.mark.parametrize("bad", ["#FFF", "#GG0000", "", "#1234567"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            hex_to_srgb(bad)
