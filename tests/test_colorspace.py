"""Tests for RGB <-> HSL/HSV/HSI/YCbCr conversions."""

import numpy as np
import pytest

from colorbal.colorspace import (
    hsi_to_rgb,
    hsl_to_rgb,
    hsv_to_rgb,
    rgb_to_hsi,
    rgb_to_hsl,
    rgb_to_hsv,
    rgb_to_ycbcr,
    ycbcr_to_rgb,
)


@pytest.fixture
def rgb():
    """Random planar float image."""
    rng = np.random.default_rng(42)
    return rng.random((3, 4000)).astype(np.float32)


def planar(*pixels):
    return np.ascontiguousarray(np.array(pixels, dtype=np.float32).T)


class TestRoundTrip:
    """Forward then inverse conversion restores the image."""

    @pytest.mark.parametrize(
        "forward,inverse,atol",
        [
            (rgb_to_hsl, hsl_to_rgb, 1e-5),
            (rgb_to_hsv, hsv_to_rgb, 1e-5),
            (rgb_to_hsi, hsi_to_rgb, 1e-4),
            (rgb_to_ycbcr, ycbcr_to_rgb, 1e-5),
        ],
    )
    def test_round_trip(self, rgb, forward, inverse, atol):
        np.testing.assert_allclose(inverse(forward(rgb)), rgb, atol=atol)

    @pytest.mark.parametrize("forward", [rgb_to_hsl, rgb_to_hsv, rgb_to_hsi, rgb_to_ycbcr])
    def test_input_not_modified(self, rgb, forward):
        original = rgb.copy()
        out = forward(rgb)
        np.testing.assert_array_equal(rgb, original)
        assert out.shape == rgb.shape
        assert out.dtype == np.float32

    @pytest.mark.parametrize("forward", [rgb_to_hsl, rgb_to_hsv, rgb_to_hsi, rgb_to_ycbcr])
    def test_rejects_uint8(self, forward):
        with pytest.raises(ValueError, match="got uint8"):
            forward(np.full((3, 4), 128, dtype=np.uint8))

    @pytest.mark.parametrize("forward", [rgb_to_hsl, rgb_to_hsv, rgb_to_hsi])
    def test_hue_range(self, rgb, forward):
        """Hue lies in [0, 6], up to float32 rounding of the upper end."""
        hue = forward(rgb)[0]
        assert hue.min() >= 0.0
        assert hue.max() <= 6.0


class TestKnownValues:
    """Conversions of primary and achromatic colors."""

    def test_achromatic_canonical(self):
        """Gray and black pixels get H = 0 and S = 0."""
        gray = planar((0.5, 0.5, 0.5), (0.0, 0.0, 0.0))
        for forward in (rgb_to_hsl, rgb_to_hsv, rgb_to_hsi):
            out = forward(gray)
            np.testing.assert_allclose(out[0], 0.0)
            np.testing.assert_allclose(out[1], 0.0)
            np.testing.assert_allclose(out[2], [0.5, 0.0], atol=1e-7)

    def test_primaries_hsl(self):
        out = rgb_to_hsl(planar((1, 0, 0), (0, 1, 0), (0, 0, 1)))
        np.testing.assert_allclose(out[0], [0.0, 2.0, 4.0], atol=1e-6)
        np.testing.assert_allclose(out[1], 1.0)
        np.testing.assert_allclose(out[2], 0.5)

    def test_primaries_hsv(self):
        out = rgb_to_hsv(planar((1, 0, 0), (0, 1, 0), (0, 0, 1)))
        np.testing.assert_allclose(out[0], [0.0, 2.0, 4.0], atol=1e-6)
        np.testing.assert_allclose(out[1], 1.0)
        np.testing.assert_allclose(out[2], 1.0)

    def test_primaries_hsi(self):
        out = rgb_to_hsi(planar((1, 0, 0), (0, 1, 0), (0, 0, 1)))
        np.testing.assert_allclose(out[0], [0.0, 2.0, 4.0], atol=1e-5)
        np.testing.assert_allclose(out[1], 1.0, atol=1e-6)
        np.testing.assert_allclose(out[2], 1.0 / 3.0, atol=1e-6)

    def test_ycbcr_gray_has_neutral_chroma(self):
        """Gray pixels have Y equal to the gray level and Cb = Cr = 0.5."""
        out = rgb_to_ycbcr(planar((0.2, 0.2, 0.2), (1, 1, 1)))
        np.testing.assert_allclose(out[0], [0.2, 1.0], atol=1e-6)
        np.testing.assert_allclose(out[1], 0.5, atol=1e-6)
        np.testing.assert_allclose(out[2], 0.5, atol=1e-6)

    def test_ycbcr_red(self):
        """BT.601 full range coefficients."""
        out = rgb_to_ycbcr(planar((1, 0, 0)))
        np.testing.assert_allclose(out[:, 0], [0.299, 0.5 - 0.299 / 1.772, 1.0], atol=1e-6)

    def test_hue_six_wraps_to_red(self):
        """H = 6 is the same sector as H = 0."""
        out = hsv_to_rgb(planar((6.0, 1.0, 1.0), (0.0, 1.0, 1.0)))
        np.testing.assert_allclose(out[:, 0], out[:, 1])
        np.testing.assert_allclose(out[:, 0], [1.0, 0.0, 0.0], atol=1e-6)


class TestHsiOutsideCube:
    """HSI -> RGB is not bounded by the RGB cube."""

    def test_unbounded_output(self):
        """Saturated red with I = 0.6 needs R = 1.8."""
        out = hsi_to_rgb(planar((0.0, 1.0, 0.6)))
        np.testing.assert_allclose(out[:, 0], [1.8, 0.0, 0.0], atol=1e-5)
