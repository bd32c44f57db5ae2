"""Numba-optimized RGB <-> HSL/HSV/HSI/YCbCr conversion kernels.

All values are in [0, 1] except hue, which is in [0, 6) (one unit per
60 degree sector). Vector kernels take and fill planar [3, N] arrays.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

SQRT3_2 = 0.8660254037844386
PI_3 = math.pi / 3.0

# ITU-R BT.601 full range (JPEG)
KR = 0.299
KG = 0.587
KB = 0.114


# =============================================================================
# Scalar conversions
# =============================================================================


@njit(cache=True, nogil=True)
def hue_sector(r: float, g: float, b: float, vmax: float, c: float) -> float:
    """Hue in [0, 6) from the channel attaining the max; c must be > 0."""
    if vmax == r:
        h = (g - b) / c
        if g < b:
            h += 6.0
    elif vmax == g:
        h = 2.0 + (b - r) / c
    else:
        h = 4.0 + (r - g) / c
    return h


@njit(cache=True, nogil=True)
def sector_to_rgb(h: float, c: float, m: float) -> tuple[float, float, float]:
    """Rebuild RGB from hue, chroma and the chroma offset (min channel)."""
    x = c * (1.0 - abs(h - 2.0 * math.floor(h / 2.0) - 1.0))
    sector = int(h) % 6
    if sector == 0:
        return m + c, m + x, m
    elif sector == 1:
        return m + x, m + c, m
    elif sector == 2:
        return m, m + c, m + x
    elif sector == 3:
        return m, m + x, m + c
    elif sector == 4:
        return m + x, m, m + c
    return m + c, m, m + x


@njit(cache=True, nogil=True)
def rgb_to_hsl_scalar(r: float, g: float, b: float) -> tuple[float, float, float]:
    vmax = max(r, g, b)
    vmin = min(r, g, b)
    c = vmax - vmin
    lum = (vmax + vmin) / 2.0
    if c > 0.0:
        h = hue_sector(r, g, b, vmax, c)
        if lum <= 0.5:
            s = c / (2.0 * lum)
        else:
            s = c / (2.0 - 2.0 * lum)
    else:
        h = 0.0
        s = 0.0
    return h, s, lum


@njit(cache=True, nogil=True)
def hsl_to_rgb_scalar(h: float, s: float, lum: float) -> tuple[float, float, float]:
    if lum <= 0.5:
        c = 2.0 * lum * s
    else:
        c = (2.0 - 2.0 * lum) * s
    return sector_to_rgb(h, c, lum - 0.5 * c)


@njit(cache=True, nogil=True)
def rgb_to_hsv_scalar(r: float, g: float, b: float) -> tuple[float, float, float]:
    vmax = max(r, g, b)
    vmin = min(r, g, b)
    c = vmax - vmin
    if c > 0.0:
        h = hue_sector(r, g, b, vmax, c)
        s = c / vmax
    else:
        h = 0.0
        s = 0.0
    return h, s, vmax


@njit(cache=True, nogil=True)
def hsv_to_rgb_scalar(h: float, s: float, v: float) -> tuple[float, float, float]:
    c = s * v
    return sector_to_rgb(h, c, v - c)


@njit(cache=True, nogil=True)
def rgb_to_hsi_scalar(r: float, g: float, b: float) -> tuple[float, float, float]:
    alpha = r - 0.5 * (g + b)
    beta = SQRT3_2 * (g - b)
    i = (r + g + b) / 3.0
    if i > 0.0:
        s = 1.0 - min(r, g, b) / i
        h = math.atan2(beta, alpha) / PI_3
        if h < 0.0:
            h += 6.0
        if h >= 6.0:
            h -= 6.0
    else:
        h = 0.0
        s = 0.0
    return h, s, i


@njit(cache=True, nogil=True)
def hsi_to_rgb_scalar(h: float, s: float, i: float) -> tuple[float, float, float]:
    """HSI -> RGB. The result may leave the RGB cube; callers must bound it."""
    if h < 2.0:
        b = i * (1.0 - s)
        r = i * (1.0 + s * math.cos(h * PI_3) / math.cos((1.0 - h) * PI_3))
        g = 3.0 * i - r - b
    elif h < 4.0:
        h -= 2.0
        r = i * (1.0 - s)
        g = i * (1.0 + s * math.cos(h * PI_3) / math.cos((1.0 - h) * PI_3))
        b = 3.0 * i - r - g
    else:
        h -= 4.0
        g = i * (1.0 - s)
        b = i * (1.0 + s * math.cos(h * PI_3) / math.cos((1.0 - h) * PI_3))
        r = 3.0 * i - g - b
    return r, g, b


@njit(cache=True, nogil=True)
def rgb_to_ycbcr_scalar(r: float, g: float, b: float) -> tuple[float, float, float]:
    y = KR * r + KG * g + KB * b
    cb = (b - y) / (2.0 * (1.0 - KB)) + 0.5
    cr = (r - y) / (2.0 * (1.0 - KR)) + 0.5
    return y, cb, cr


@njit(cache=True, nogil=True)
def ycbcr_to_rgb_scalar(y: float, cb: float, cr: float) -> tuple[float, float, float]:
    pb = cb - 0.5
    pr = cr - 0.5
    r = y + 2.0 * (1.0 - KR) * pr
    b = y + 2.0 * (1.0 - KB) * pb
    g = (y - KR * r - KB * b) / KG
    return r, g, b


# =============================================================================
# Vector kernels (planar [3, N])
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def rgb_to_hsl_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = rgb_to_hsl_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


@njit(parallel=True, cache=True, nogil=True)
def hsl_to_rgb_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = hsl_to_rgb_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


@njit(parallel=True, cache=True, nogil=True)
def rgb_to_hsv_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = rgb_to_hsv_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


@njit(parallel=True, cache=True, nogil=True)
def hsv_to_rgb_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = hsv_to_rgb_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


@njit(parallel=True, cache=True, nogil=True)
def rgb_to_hsi_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = rgb_to_hsi_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


@njit(parallel=True, cache=True, nogil=True)
def hsi_to_rgb_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = hsi_to_rgb_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


@njit(parallel=True, cache=True, nogil=True)
def rgb_to_ycbcr_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = rgb_to_ycbcr_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


@njit(parallel=True, cache=True, nogil=True)
def ycbcr_to_rgb_numba(src: NDArray[np.float32], dst: NDArray[np.float32]) -> None:
    for n in prange(src.shape[1]):
        a, b, c = ycbcr_to_rgb_scalar(float(src[0, n]), float(src[1, n]), float(src[2, n]))
        dst[0, n] = a
        dst[1, n] = b
        dst[2, n] = c


def warmup_colorspace_kernels() -> None:
    """Warm up Numba JIT compilation for colorspace kernels."""
    src = np.random.rand(3, 64).astype(np.float32)
    tmp = np.empty_like(src)
    out = np.empty_like(src)

    for forward, inverse in (
        (rgb_to_hsl_numba, hsl_to_rgb_numba),
        (rgb_to_hsv_numba, hsv_to_rgb_numba),
        (rgb_to_hsi_numba, hsi_to_rgb_numba),
        (rgb_to_ycbcr_numba, ycbcr_to_rgb_numba),
    ):
        forward(src, tmp)
        inverse(tmp, out)

    logger.debug("Colorspace Numba kernels warmed up")


# Warmup on import
warmup_colorspace_kernels()
