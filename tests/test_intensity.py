"""Tests for the iterative intensity-preserving balance."""

import numpy as np
import pytest

from colorbal.balance import IntensityBalanceResult, balance_intensity, intensity_u8, reconstruct_u8
from colorbal.rescale import rescale_u8
from colorbal.verification import SaturationVerifier


@pytest.fixture
def rgb():
    """Random uint8 image with no channel at 0 or 255."""
    rng = np.random.default_rng(42)
    return rng.integers(20, 231, size=(3, 4096), dtype=np.uint8)


class TestIntensityU8:
    """Test integer intensity."""

    def test_rounded_to_nearest(self):
        rgb = np.array([[1, 1, 0, 255], [1, 2, 0, 255], [2, 2, 1, 254]], dtype=np.uint8)
        np.testing.assert_array_equal(intensity_u8(rgb), [1, 2, 0, 255])

    def test_no_overflow(self):
        rgb = np.full((3, 4), 255, dtype=np.uint8)
        np.testing.assert_array_equal(intensity_u8(rgb), 255)

    def test_float_rejected(self):
        with pytest.raises(ValueError, match="uint8"):
            intensity_u8(np.zeros((3, 4), dtype=np.float32))


class TestReconstruct:
    """Test ratio-preserving reconstruction."""

    def test_scaled_by_intensity_ratio(self):
        rgb = np.array([[40], [20], [60]], dtype=np.uint8)
        gray = intensity_u8(rgb)
        out = reconstruct_u8(rgb, gray, np.array([80], dtype=np.uint8))
        np.testing.assert_array_equal(out[:, 0], [80, 40, 120])

    def test_capped_by_max_channel(self):
        """A channel that would exceed 255 bounds the scale of the whole pixel.

        100 * 255 / 200 is exactly 127.5 and rounds up, even though
        255 / 200 has no exact binary representation.
        """
        rgb = np.array([[200, 100], [100, 200], [0, 0]], dtype=np.uint8)
        gray = intensity_u8(rgb)
        np.testing.assert_array_equal(gray, [100, 100])
        out = reconstruct_u8(rgb, gray, np.array([200, 200], dtype=np.uint8))
        np.testing.assert_array_equal(out[:, 0], [255, 128, 0])
        np.testing.assert_array_equal(out[:, 1], [128, 255, 0])

    def test_zero_intensity(self):
        rgb = np.zeros((3, 2), dtype=np.uint8)
        out = reconstruct_u8(rgb, intensity_u8(rgb), np.array([0, 100], dtype=np.uint8))
        assert np.all(out == 0)

    def test_length_mismatch(self):
        rgb = np.zeros((3, 4), dtype=np.uint8)
        with pytest.raises(ValueError, match="length mismatch"):
            reconstruct_u8(rgb, np.zeros(4, dtype=np.uint8), np.zeros(3, dtype=np.uint8))


class TestBalanceIntensity:
    """Test the monotone search of intensity bounds."""

    @pytest.mark.parametrize("nb_min,nb_max", [(0, 0), (10, 10), (40, 80), (400, 400)])
    def test_budget_respected(self, rgb, nb_min, nb_max):
        """No channel saturates more pixels than allowed."""
        result = balance_intensity(rgb, nb_min, nb_max)
        SaturationVerifier.assert_within_budget(result.rgb, nb_min, nb_max)

    def test_result_fields(self, rgb):
        result = balance_intensity(rgb, 40, 40)
        assert isinstance(result, IntensityBalanceResult)
        assert result.rgb.shape == rgb.shape
        assert result.rgb.dtype == np.uint8
        assert 0 <= result.ming < result.maxg <= 255
        assert 1 <= result.iterations_min <= 256
        assert 1 <= result.iterations_max <= 256

    def test_bounds_within_intensity_quantiles(self, rgb):
        """The search only widens the window found on the intensity."""
        from colorbal.histogram import quantiles_u8

        bounds = quantiles_u8(intensity_u8(rgb), 40, 40)
        result = balance_intensity(rgb, 40, 40)
        assert result.ming <= bounds.min
        assert result.maxg >= bounds.max

    def test_stretches_contrast(self, rgb):
        result = balance_intensity(rgb, 40, 40)
        gray_in = intensity_u8(rgb)
        gray_out = intensity_u8(result.rgb)
        assert np.ptp(gray_out.astype(np.int32)) > np.ptp(gray_in.astype(np.int32))

    def test_input_not_modified(self, rgb):
        original = rgb.copy()
        balance_intensity(rgb, 40, 40)
        np.testing.assert_array_equal(rgb, original)

    def test_gray_image(self):
        """On gray pixels the reconstruction is the intensity stretch itself.

        Samples equal to a bound saturate too, so the search moves each bound
        one level outward until exactly nb_min / nb_max pixels saturate.
        """
        levels = np.repeat(np.arange(30, 200, dtype=np.uint8), 5)
        rgb = np.ascontiguousarray(np.stack([levels, levels, levels]))
        result = balance_intensity(rgb, 10, 10)

        assert (result.ming, result.maxg) == (31, 198)
        expected = rescale_u8(levels, (31, 198))
        for c in range(3):
            np.testing.assert_array_equal(result.rgb[c], expected)
        assert np.count_nonzero(result.rgb[0] == 0) == 10
        assert np.count_nonzero(result.rgb[0] == 255) == 10

    def test_low_phase_skipped_when_already_saturated(self, rgb):
        """Too many original zeros leave ming at 0 without searching."""
        rgb = rgb.copy()
        rgb[0, :100] = 0
        result = balance_intensity(rgb, 10, 10)
        assert result.ming == 0
        assert result.iterations_min == 0

    def test_high_phase_skipped_when_already_saturated(self, rgb):
        """Too many original 255s leave maxg at 255 without searching."""
        rgb = rgb.copy()
        rgb[2, :100] = 255
        result = balance_intensity(rgb, 10, 10)
        assert result.maxg == 255
        assert result.iterations_max == 0

    def test_oversized_budget_clamped(self, caplog):
        rgb = np.array([[10, 50, 90, 130]] * 3, dtype=np.uint8)
        result = balance_intensity(rgb, 4, 4)
        assert result.rgb.shape == (3, 4)
        assert "too large" in caplog.text
