"""
Unified processing interface for color balance.

Dispatches a ``BalanceValues`` to the strategy registered for its mode and
converts between uint8 and float32 samples as that strategy requires. This
is the recommended high-level API for balancing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, overload

import numpy as np

from colorbal.balance import (
    balance_hsi,
    balance_hsl,
    balance_hsv,
    balance_intensity,
    balance_irgb_adjusted,
    balance_irgb_bounded,
    balance_irgb_projected,
    balance_rgb,
    balance_ycbcr,
)
from colorbal.config.balance import CONFIG
from colorbal.config.values import BalanceMode, BalanceValues
from colorbal.histogram.apply import ensure_planar_rgb
from colorbal.protocols import BalanceStrategy

if TYPE_CHECKING:
    from colorbal.image import ImageData

logger = logging.getLogger(__name__)


# ============================================================================
# Sample conversion
# ============================================================================


def to_float32(rgb: np.ndarray) -> np.ndarray:
    """Convert samples to float32 in [0, 1].

    uint8 samples are divided by 255; float samples are cast.

    :param rgb: Planar image [3, N]
    :returns: New float32 array
    """
    if rgb.dtype == np.uint8:
        return rgb.astype(np.float32) / np.float32(CONFIG.max_value)
    return rgb.astype(np.float32)


def to_uint8(rgb: np.ndarray) -> np.ndarray:
    """Convert samples to uint8 with floor(x * 255 + 0.5), clipped to [0, 255].

    :param rgb: Planar image [3, N], uint8 or float in [0, 1]
    :returns: New uint8 array
    """
    if rgb.dtype == np.uint8:
        return rgb.copy()
    scaled = np.floor(rgb.astype(np.float64) * CONFIG.max_value + 0.5)
    return np.clip(scaled, 0, CONFIG.max_value).astype(np.uint8)


def _intensity_strategy(rgb: np.ndarray, nb_min: int, nb_max: int) -> np.ndarray:
    return balance_intensity(rgb, nb_min, nb_max).rgb


# Strategy and the sample type it works on (None: uint8 or float)
_STRATEGIES: dict[BalanceMode, tuple[BalanceStrategy, type | None]] = {
    BalanceMode.RGB: (balance_rgb, None),
    BalanceMode.HSL: (balance_hsl, np.float32),
    BalanceMode.HSV: (balance_hsv, np.float32),
    BalanceMode.HSI: (balance_hsi, np.float32),
    BalanceMode.YCBCR: (balance_ycbcr, np.float32),
    BalanceMode.IRGB_BOUNDED: (balance_irgb_bounded, np.float32),
    BalanceMode.IRGB_PROJECTED: (balance_irgb_projected, np.float32),
    BalanceMode.IRGB_ADJUSTED: (balance_irgb_adjusted, np.float32),
    BalanceMode.INTENSITY: (_intensity_strategy, np.uint8),
}


class ColorBalancer:
    """Single entry point for every balance strategy.

    Example:
        >>> from colorbal import ColorBalancer, BalanceValues
        >>>
        >>> balancer = ColorBalancer()
        >>>
        >>> # Planar arrays [3, N]
        >>> out = balancer.balance(rgb, BalanceValues(mode="hsl", saturation_low=0.5))
        >>>
        >>> # Images
        >>> image = ImageData.from_file("photo.png")
        >>> image = balancer.balance(image, BalanceValues(mode="intensity"))
        >>>
        >>> # Pixel counts instead of percentages
        >>> out = balancer.balance_array(rgb, "irgb_adjusted", nb_min=50, nb_max=50)
    """

    def __init__(self):
        """Initialize the balancer with the built-in strategies."""
        self._strategies = dict(_STRATEGIES)

    @property
    def modes(self) -> list[BalanceMode]:
        """Modes with a registered strategy."""
        return list(self._strategies)

    def register(
        self, mode: BalanceMode | str, strategy: BalanceStrategy, dtype: type | None = np.float32
    ) -> ColorBalancer:
        """Register or replace the strategy of a mode.

        :param mode: Mode keyword or BalanceMode
        :param strategy: Callable (rgb, nb_min, nb_max) -> rgb
        :param dtype: Sample type the strategy works on (np.uint8, np.float32, or None for both)
        :returns: Self for chaining
        :raises TypeError: If strategy is not callable
        """
        if not isinstance(strategy, BalanceStrategy):
            raise TypeError(f"strategy must be callable, got {type(strategy).__name__}")
        self._strategies[BalanceMode.from_name(mode)] = (strategy, dtype)
        return self

    @overload
    def balance(self, data: np.ndarray, values: BalanceValues, inplace: bool = True) -> np.ndarray: ...

    @overload
    def balance(self, data: ImageData, values: BalanceValues, inplace: bool = True) -> ImageData: ...

    def balance(self, data, values: BalanceValues, inplace: bool = True):
        """Balance an image with the mode and percentages of ``values``.

        Percentages become pixel counts with floor(N * S / 100).

        :param data: Planar array [3, N] or ImageData
        :param values: Balance parameters
        :param inplace: For ImageData, replace its pixels; if False, work on a copy.
            Arrays are never modified.
        :returns: Balanced array or ImageData (same type and dtype as input)

        Example:
            >>> balancer = ColorBalancer()
            >>> out = balancer.balance(rgb, BalanceValues(mode="rgb", saturation_low=1.0))
        """
        if isinstance(data, np.ndarray):
            budget = values.budget(data.shape[-1])
            return self.balance_array(data, values.mode, budget.nb_min, budget.nb_max)

        if not inplace:
            data = data.clone()
        budget = values.budget(data.size)
        data.rgb = self.balance_array(data.rgb, values.mode, budget.nb_min, budget.nb_max)
        return data

    def balance_array(
        self, rgb: np.ndarray, mode: BalanceMode | str, nb_min: int, nb_max: int
    ) -> np.ndarray:
        """Balance a planar image with a budget in pixels.

        :param rgb: Planar image [3, N], uint8 or float in [0, 1]
        :param mode: Mode keyword or BalanceMode
        :param nb_min: Pixels allowed to saturate low
        :param nb_max: Pixels allowed to saturate high
        :returns: New balanced image, uint8 if the input is uint8, float otherwise
        :raises ValueError: If the image is malformed or the mode is unknown
        """
        rgb = ensure_planar_rgb(rgb)
        mode = BalanceMode.from_name(mode)
        strategy, dtype = self._strategies[mode]
        logger.debug(
            "[ColorBalancer] mode=%s N=%d nb_min=%d nb_max=%d",
            mode.value,
            rgb.shape[1],
            nb_min,
            nb_max,
        )

        if dtype is np.uint8:
            work = to_uint8(rgb)
        elif dtype is np.float32:
            work = to_float32(rgb)
        else:
            work = rgb
        out = strategy(work, nb_min, nb_max)

        if rgb.dtype == np.uint8:
            return to_uint8(out) if out.dtype != np.uint8 else out
        if out.dtype == np.uint8:
            out = to_float32(out)
        return out.astype(rgb.dtype, copy=False)
