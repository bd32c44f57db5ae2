"""Tests for affine rescaling and channel balance."""

import numpy as np
import pytest

from colorbal.histogram import QuantileBounds
from colorbal.rescale import balance_f32, balance_u8, build_lut_u8, rescale_f32, rescale_u8

SCENARIO = np.array([10, 20, 30, 240], dtype=np.uint8)


class TestLookupTable:
    """Test the uint8 normalization table."""

    def test_full_window(self):
        """[10, 240] -> [0, 255] rounds each entry to nearest."""
        lut = build_lut_u8(10, 240)
        assert lut[10] == 0
        assert lut[20] == 11
        assert lut[30] == 22
        assert lut[240] == 255

    def test_saturated_ends(self):
        """Entries outside the window saturate."""
        lut = build_lut_u8(20, 30)
        assert np.all(lut[:21] == 0)
        assert np.all(lut[30:] == 255)

    def test_identity(self):
        """[0, 255] -> [0, 255] is the identity."""
        np.testing.assert_array_equal(build_lut_u8(0, 255), np.arange(256, dtype=np.uint8))

    def test_monotone(self):
        """Tables are non-decreasing for any window."""
        rng = np.random.default_rng(42)
        for _ in range(20):
            vmin, vmax = sorted(rng.choice(256, size=2, replace=False))
            lut = build_lut_u8(int(vmin), int(vmax))
            assert np.all(np.diff(lut.astype(np.int32)) >= 0)

    def test_custom_target(self):
        """A narrower target window is respected."""
        lut = build_lut_u8(0, 255, 16, 235)
        assert lut[0] == 16
        assert lut[255] == 235
        assert lut.min() == 16
        assert lut.max() == 235

    def test_degenerate_window(self):
        """max <= min gives the target midpoint everywhere."""
        assert np.all(build_lut_u8(50, 50) == 127)
        assert np.all(build_lut_u8(60, 40) == 127)


class TestRescaleU8:
    """Test uint8 rescaling."""

    def test_reference_scenario(self):
        """Plain min/max stretch of [10, 20, 30, 240]."""
        out = rescale_u8(SCENARIO, QuantileBounds(10, 240))
        np.testing.assert_array_equal(out, [0, 11, 22, 255])

    def test_constant_target(self):
        """Target min == target max gives that constant."""
        out = rescale_u8(SCENARIO, (10, 240), target=(7, 7))
        assert np.all(out == 7)

    def test_degenerate_bounds(self):
        """max <= min gives the target midpoint."""
        out = rescale_u8(SCENARIO, (50, 50))
        assert np.all(out == 127)

    def test_input_not_modified(self):
        original = SCENARIO.copy()
        rescale_u8(SCENARIO, (10, 240))
        np.testing.assert_array_equal(SCENARIO, original)


class TestRescaleF32:
    """Test float rescaling."""

    def test_linear_map(self):
        data = np.array([0.2, 0.4, 0.6], dtype=np.float32)
        out = rescale_f32(data, (0.2, 0.6))
        np.testing.assert_allclose(out, [0.0, 0.5, 1.0], atol=1e-6)
        assert out.dtype == np.float32

    def test_clamped(self):
        """Samples outside the window saturate to the target ends."""
        data = np.array([0.0, 0.1, 0.9, 1.0], dtype=np.float32)
        out = rescale_f32(data, (0.1, 0.9))
        np.testing.assert_allclose(out, [0.0, 0.0, 1.0, 1.0], atol=1e-6)

    def test_degenerate_bounds(self):
        data = np.array([0.3, 0.3, 0.3], dtype=np.float32)
        out = rescale_f32(data, (0.3, 0.3))
        np.testing.assert_allclose(out, 0.5)

    def test_custom_target(self):
        data = np.array([0.0, 0.5, 1.0], dtype=np.float32)
        out = rescale_f32(data, (0.0, 1.0), target=(0.25, 0.75))
        np.testing.assert_allclose(out, [0.25, 0.5, 0.75], atol=1e-6)


class TestBalance:
    """Test the saturating channel balance."""

    def test_u8_reference_scenario(self):
        """One pixel saturated on each side of [10, 20, 30, 240]."""
        np.testing.assert_array_equal(balance_u8(SCENARIO, 1, 1), [0, 0, 255, 255])

    def test_u8_zero_budget(self):
        np.testing.assert_array_equal(balance_u8(SCENARIO, 0, 0), [0, 11, 22, 255])

    def test_u8_full_range(self):
        """A balanced random channel spans [0, 255]."""
        rng = np.random.default_rng(42)
        data = rng.integers(40, 200, size=2000, dtype=np.uint8)
        out = balance_u8(data, 20, 20)
        assert out.min() == 0
        assert out.max() == 255

    def test_f32_saturation_counts(self):
        """With distinct samples, nb + 1 samples reach each end."""
        rng = np.random.default_rng(42)
        data = rng.permutation(2000).astype(np.float32) / 2000
        out = balance_f32(data, 25, 40)
        assert np.count_nonzero(out == 0.0) == 26
        assert np.count_nonzero(out == 1.0) == 41

    def test_f32_range(self):
        rng = np.random.default_rng(0)
        data = (0.3 + 0.2 * rng.random(500)).astype(np.float32)
        out = balance_f32(data, 0, 0)
        assert out.min() == pytest.approx(0.0)
        assert out.max() == pytest.approx(1.0)

    def test_constant_target(self):
        out = balance_f32(np.array([0.1, 0.2], dtype=np.float32), 0, 0, target=(0.4, 0.4))
        np.testing.assert_allclose(out, 0.4)
