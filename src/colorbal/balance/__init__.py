"""Balance strategies module.

Direct strategies stretch one axis (per channel, lightness, value,
intensity or luma) with the quantile bounds of that axis. The iterative
intensity strategy searches the intensity bounds so that each channel of
the rebuilt uint8 image saturates at most the requested number of pixels.

Example:
    >>> from colorbal.balance import balance_hsl, balance_intensity
    >>> out = balance_hsl(rgb_f32, nb_min=100, nb_max=100)
    >>> result = balance_intensity(rgb_u8, nb_min=100, nb_max=100)
    >>> print(result.ming, result.maxg)
"""

from colorbal.balance.intensity import (
    IntensityBalanceResult,
    balance_intensity,
    intensity_u8,
    reconstruct_u8,
)
from colorbal.balance.strategies import (
    balance_hsi,
    balance_hsl,
    balance_hsv,
    balance_irgb_adjusted,
    balance_irgb_bounded,
    balance_irgb_projected,
    balance_rgb,
    balance_ycbcr,
    intensity,
)

__all__ = [
    "balance_rgb",
    "balance_hsl",
    "balance_hsv",
    "balance_hsi",
    "balance_ycbcr",
    "balance_irgb_bounded",
    "balance_irgb_projected",
    "balance_irgb_adjusted",
    "balance_intensity",
    "intensity",
    "intensity_u8",
    "reconstruct_u8",
    "IntensityBalanceResult",
]
