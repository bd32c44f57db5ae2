"""Planar colorspace conversions.

Every function takes a planar float image [3, N] and returns a new
float32 array [3, N]; the input is never modified.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from colorbal.colorspace.kernels import (
    hsi_to_rgb_numba,
    hsl_to_rgb_numba,
    hsv_to_rgb_numba,
    rgb_to_hsi_numba,
    rgb_to_hsl_numba,
    rgb_to_hsv_numba,
    rgb_to_ycbcr_numba,
    ycbcr_to_rgb_numba,
)
from colorbal.histogram.apply import ensure_planar_rgb


def _convert(kernel, src: np.ndarray) -> NDArray[np.float32]:
    src = ensure_planar_rgb(src, np.float32)
    dst = np.empty_like(src)
    kernel(src, dst)
    return dst


def rgb_to_hsl(rgb: np.ndarray) -> NDArray[np.float32]:
    """RGB -> HSL. Achromatic pixels get H = 0, S = 0.

    :param rgb: Planar RGB [3, N] in [0, 1]
    :returns: Planar HSL [3, N], H in [0, 6)
    """
    return _convert(rgb_to_hsl_numba, rgb)


def hsl_to_rgb(hsl: np.ndarray) -> NDArray[np.float32]:
    """HSL -> RGB.

    :param hsl: Planar HSL [3, N]
    :returns: Planar RGB [3, N]
    """
    return _convert(hsl_to_rgb_numba, hsl)


def rgb_to_hsv(rgb: np.ndarray) -> NDArray[np.float32]:
    """RGB -> HSV. Achromatic pixels get H = 0, S = 0.

    :param rgb: Planar RGB [3, N] in [0, 1]
    :returns: Planar HSV [3, N], H in [0, 6)
    """
    return _convert(rgb_to_hsv_numba, rgb)


def hsv_to_rgb(hsv: np.ndarray) -> NDArray[np.float32]:
    """HSV -> RGB.

    :param hsv: Planar HSV [3, N]
    :returns: Planar RGB [3, N]
    """
    return _convert(hsv_to_rgb_numba, hsv)


def rgb_to_hsi(rgb: np.ndarray) -> NDArray[np.float32]:
    """RGB -> HSI with I = (R + G + B) / 3.

    :param rgb: Planar RGB [3, N] in [0, 1]
    :returns: Planar HSI [3, N], H in [0, 6)
    """
    return _convert(rgb_to_hsi_numba, rgb)


def hsi_to_rgb(hsi: np.ndarray) -> NDArray[np.float32]:
    """HSI -> RGB.

    The HSI double cone is not mapped into the RGB cube, so after the
    intensity has been modified the result can leave [0, 1].

    :param hsi: Planar HSI [3, N]
    :returns: Planar RGB [3, N], not clipped
    """
    return _convert(hsi_to_rgb_numba, hsi)


def rgb_to_ycbcr(rgb: np.ndarray) -> NDArray[np.float32]:
    """RGB -> YCbCr (BT.601 full range, chroma offset by 0.5).

    :param rgb: Planar RGB [3, N] in [0, 1]
    :returns: Planar YCbCr [3, N] in [0, 1]
    """
    return _convert(rgb_to_ycbcr_numba, rgb)


def ycbcr_to_rgb(ycbcr: np.ndarray) -> NDArray[np.float32]:
    """YCbCr -> RGB.

    :param ycbcr: Planar YCbCr [3, N]
    :returns: Planar RGB [3, N], not clipped
    """
    return _convert(ycbcr_to_rgb_numba, ycbcr)
