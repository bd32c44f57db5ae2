"""Saturation verification utilities.

Counts the pixels pushed to the ends of the range, so callers and tests
can check a balanced image against its saturation budget.

Example:
    >>> from colorbal.verification import SaturationVerifier
    >>>
    >>> out = balance_intensity(rgb, nb_min=100, nb_max=100).rgb
    >>> SaturationVerifier.assert_within_budget(out, 100, 100)
    >>>
    >>> # Quantile guarantee on one channel
    >>> low, high = SaturationVerifier.count_outside(channel, bounds)
"""

from __future__ import annotations

import logging

import numpy as np

from colorbal.histogram.apply import count_equal_rgb, ensure_channel, ensure_planar_rgb
from colorbal.histogram.result import QuantileBounds

logger = logging.getLogger(__name__)


class SaturationVerifier:
    """Utilities for checking saturation counts of balanced images."""

    @staticmethod
    def count_low(rgb: np.ndarray, value: int | float = 0) -> np.ndarray:
        """Per-channel count of pixels at or below ``value``.

        :param rgb: Planar image [3, N]
        :param value: Low end of the range (0 for uint8 and float)
        :return: Counts [3] (int64)
        """
        rgb = ensure_planar_rgb(rgb)
        if rgb.dtype == np.uint8 and value == 0:
            return count_equal_rgb(rgb, 0)
        return (rgb <= value).sum(axis=1).astype(np.int64)

    @staticmethod
    def count_high(rgb: np.ndarray, value: int | float | None = None) -> np.ndarray:
        """Per-channel count of pixels at or above ``value``.

        :param rgb: Planar image [3, N]
        :param value: High end of the range (default: 255 for uint8, 1.0 for float)
        :return: Counts [3] (int64)
        """
        rgb = ensure_planar_rgb(rgb)
        if value is None:
            value = 255 if rgb.dtype == np.uint8 else 1.0
        if rgb.dtype == np.uint8 and value == 255:
            return count_equal_rgb(rgb, 255)
        return (rgb >= value).sum(axis=1).astype(np.int64)

    @staticmethod
    def count_outside(channel: np.ndarray, bounds: QuantileBounds) -> tuple[int, int]:
        """Count samples strictly below ``bounds.min`` and strictly above ``bounds.max``.

        :param channel: Channel samples [N]
        :param bounds: Quantile bounds
        :return: (below, above)
        """
        channel = ensure_channel(channel)
        below = int(np.count_nonzero(channel < bounds.min))
        above = int(np.count_nonzero(channel > bounds.max))
        return below, above

    @staticmethod
    def assert_within_budget(
        rgb: np.ndarray,
        nb_min: int,
        nb_max: int,
        low: int | float = 0,
        high: int | float | None = None,
    ) -> None:
        """Assert no channel saturates more pixels than allowed.

        :param rgb: Planar image [3, N]
        :param nb_min: Pixels allowed at the low end, per channel
        :param nb_max: Pixels allowed at the high end, per channel
        :param low: Low end of the range
        :param high: High end of the range (default: 255 for uint8, 1.0 for float)
        :raises AssertionError: If a channel exceeds its budget

        Example:
            >>> SaturationVerifier.assert_within_budget(out, 100, 100)
        """
        n_low = SaturationVerifier.count_low(rgb, low)
        n_high = SaturationVerifier.count_high(rgb, high)
        logger.debug("[SaturationVerifier] low=%s high=%s", n_low.tolist(), n_high.tolist())
        if (n_low > nb_min).any():
            raise AssertionError(
                f"Low saturation exceeds budget: counts {n_low.tolist()} > {nb_min}"
            )
        if (n_high > nb_max).any():
            raise AssertionError(
                f"High saturation exceeds budget: counts {n_high.tolist()} > {nb_max}"
            )
