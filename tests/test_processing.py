"""Tests for the unified ColorBalancer entry point."""

import numpy as np
import pytest

from colorbal import BalanceMode, BalanceValues, ColorBalancer, ImageData
from colorbal.processing import to_float32, to_uint8


@pytest.fixture
def balancer():
    return ColorBalancer()


@pytest.fixture
def rgb_u8():
    rng = np.random.default_rng(42)
    return rng.integers(30, 220, size=(3, 2048), dtype=np.uint8)


class TestConversion:
    """Test uint8 <-> float32 sample conversion."""

    def test_to_float32(self):
        rgb = np.array([[0, 51, 255]] * 3, dtype=np.uint8)
        out = to_float32(rgb)
        assert out.dtype == np.float32
        np.testing.assert_allclose(out[0], [0.0, 0.2, 1.0], atol=1e-7)

    def test_to_uint8_rounds_and_clips(self):
        rgb = np.array([[-0.5, 0.0, 0.5, 1.0, 1.5]] * 3, dtype=np.float32)
        np.testing.assert_array_equal(to_uint8(rgb)[0], [0, 0, 128, 255, 255])

    def test_round_trip_exact(self):
        levels = np.arange(256, dtype=np.uint8)
        rgb = np.stack([levels, levels, levels])
        np.testing.assert_array_equal(to_uint8(to_float32(rgb)), rgb)


class TestColorBalancer:
    """Test dispatch over every mode."""

    def test_all_modes_registered(self, balancer):
        assert set(balancer.modes) == set(BalanceMode)

    @pytest.mark.parametrize("mode", list(BalanceMode))
    def test_uint8_in_uint8_out(self, balancer, rgb_u8, mode):
        original = rgb_u8.copy()
        out = balancer.balance_array(rgb_u8, mode, 20, 20)
        assert out.dtype == np.uint8
        assert out.shape == rgb_u8.shape
        np.testing.assert_array_equal(rgb_u8, original)

    @pytest.mark.parametrize("mode", list(BalanceMode))
    def test_float_in_float_out(self, balancer, rgb_u8, mode):
        rgb = to_float32(rgb_u8)
        out = balancer.balance_array(rgb, mode, 20, 20)
        assert out.dtype == np.float32
        assert out.min() >= 0.0
        assert out.max() <= 1.0 + 1e-6

    def test_intensity_on_float_is_quantized(self, balancer, rgb_u8):
        out = balancer.balance_array(to_float32(rgb_u8), "intensity", 20, 20)
        np.testing.assert_allclose(out * 255, np.round(out * 255), atol=1e-3)

    def test_percentages(self, balancer):
        """25% of 4 pixels is one pixel on each side."""
        channel = np.array([10, 20, 30, 240], dtype=np.uint8)
        rgb = np.stack([channel, channel, channel])
        out = balancer.balance(rgb, BalanceValues("rgb", saturation_low=25.0, saturation_high=25.0))
        np.testing.assert_array_equal(out[0], [0, 0, 255, 255])

    def test_neutral_values_still_stretch(self, balancer):
        channel = np.array([10, 20, 30, 240], dtype=np.uint8)
        rgb = np.stack([channel, channel, channel])
        values = BalanceValues("rgb", saturation_low=0.0, saturation_high=0.0)
        assert values.is_neutral()
        np.testing.assert_array_equal(balancer.balance(rgb, values)[1], [0, 11, 22, 255])

    def test_unknown_mode(self, balancer, rgb_u8):
        with pytest.raises(ValueError, match="Unknown balance mode"):
            balancer.balance_array(rgb_u8, "lab", 0, 0)

    def test_malformed_image(self, balancer):
        with pytest.raises(ValueError):
            balancer.balance_array(np.zeros((2, 10), dtype=np.uint8), "rgb", 0, 0)

    def test_register_custom_strategy(self, balancer, rgb_u8):
        calls = []

        def invert(rgb, nb_min, nb_max):
            calls.append((rgb.dtype, nb_min, nb_max))
            return 1.0 - rgb

        balancer.register("hsv", invert)
        out = balancer.balance_array(rgb_u8, BalanceMode.HSV, 3, 4)

        assert calls == [(np.float32, 3, 4)]
        np.testing.assert_array_equal(out, 255 - rgb_u8)
        # Other instances keep the built-in strategy
        assert ColorBalancer()._strategies[BalanceMode.HSV][0] is not invert

    def test_register_rejects_non_callable(self, balancer):
        with pytest.raises(TypeError, match="callable"):
            balancer.register("rgb", 42)


class TestImageDispatch:
    """Test balancing ImageData through the balancer."""

    def test_inplace(self, balancer, rgb_u8):
        image = ImageData(rgb_u8.copy(), 64, 32)
        result = balancer.balance(image, BalanceValues("hsl"))
        assert result is image
        assert not np.array_equal(image.rgb, rgb_u8)

    def test_copy(self, balancer, rgb_u8):
        image = ImageData(rgb_u8.copy(), 64, 32)
        result = balancer.balance(image, BalanceValues("hsl"), inplace=False)
        assert result is not image
        np.testing.assert_array_equal(image.rgb, rgb_u8)
        assert result.rgb.dtype == np.uint8
