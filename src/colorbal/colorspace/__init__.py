"""Colorspace module - elementwise RGB <-> HSL/HSV/HSI/YCbCr conversions.

Example:
    >>> from colorbal.colorspace import rgb_to_hsl, hsl_to_rgb
    >>> hsl = rgb_to_hsl(rgb)
    >>> hsl[2] = new_lightness
    >>> rgb = hsl_to_rgb(hsl)
"""

from colorbal.colorspace.apply import (
    hsi_to_rgb,
    hsl_to_rgb,
    hsv_to_rgb,
    rgb_to_hsi,
    rgb_to_hsl,
    rgb_to_hsv,
    rgb_to_ycbcr,
    ycbcr_to_rgb,
)

__all__ = [
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hsi",
    "hsi_to_rgb",
    "rgb_to_ycbcr",
    "ycbcr_to_rgb",
]
