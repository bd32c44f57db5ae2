"""
colorbal - Color Balance with Controlled Saturation

Numba-accelerated "simplest color balance" and its colorspace variants.

Features:
- Affine stretch of a channel so that a chosen percentage of pixels
  saturates to each end of the range
- O(N) histogram quantiles for uint8, selection quantiles for float32
- Strategies: per-channel RGB, HSL lightness, HSV value, HSI intensity,
  YCbCr luma, intensity with RGB ratio reconstruction (clipped, projected
  or globally adjusted)
- Iterative intensity balance bounding per-channel saturation of uint8
  images
- ImageData API with Pillow file I/O

Example - ImageData (Recommended):
    >>> from colorbal import ImageData, BalanceValues
    >>>
    >>> image = ImageData.from_file("photo.png")
    >>> image.balance(BalanceValues(mode="rgb", saturation_low=1.0, saturation_high=1.0))
    >>> image.to_file("balanced.png")

Example - Planar arrays:
    >>> from colorbal import ColorBalancer
    >>>
    >>> balancer = ColorBalancer()
    >>> out = balancer.balance_array(rgb, "irgb_adjusted", nb_min=100, nb_max=100)

Example - Low-level:
    >>> from colorbal.histogram import quantiles_u8
    >>> from colorbal.rescale import rescale_u8
    >>>
    >>> bounds = quantiles_u8(channel, nb_min=10, nb_max=10)
    >>> out = rescale_u8(channel, bounds)
"""

__version__ = "0.1.0"

# Strategies
from colorbal.balance import (
    IntensityBalanceResult,
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

# Configuration
from colorbal.config.presets import (
    BALANCE_PRESETS,
    CONTRAST_STRONG,
    GENTLE,
    INTENSITY_SAFE,
    LIGHTNESS,
    SIMPLEST,
    get_balance_preset,
)
from colorbal.config.values import BalanceMode, BalanceValues

# Quantiles and rescaling
from colorbal.histogram import HistogramResult, QuantileBounds, SaturationBudget, quantiles_f32, quantiles_u8

# Image container
from colorbal.image import ImageData

# Unified processing
from colorbal.processing import ColorBalancer
from colorbal.protocols import BalanceStrategy
from colorbal.rescale import balance_f32, balance_u8, rescale_f32, rescale_u8
from colorbal.verification import SaturationVerifier

__all__ = [
    # Version
    "__version__",
    # Unified processing
    "ColorBalancer",
    "ImageData",
    "BalanceStrategy",
    # Configuration
    "BalanceMode",
    "BalanceValues",
    "BALANCE_PRESETS",
    "SIMPLEST",
    "GENTLE",
    "LIGHTNESS",
    "INTENSITY_SAFE",
    "CONTRAST_STRONG",
    "get_balance_preset",
    # Quantiles
    "HistogramResult",
    "QuantileBounds",
    "SaturationBudget",
    "quantiles_u8",
    "quantiles_f32",
    # Rescaling
    "rescale_u8",
    "rescale_f32",
    "balance_u8",
    "balance_f32",
    # Strategies
    "balance_rgb",
    "balance_hsl",
    "balance_hsv",
    "balance_hsi",
    "balance_ycbcr",
    "balance_irgb_bounded",
    "balance_irgb_projected",
    "balance_irgb_adjusted",
    "balance_intensity",
    "IntensityBalanceResult",
    # Verification
    "SaturationVerifier",
]
