"""Numba-optimized per-pixel kernels for intensity-based balancing.

Intensity is I = (R + G + B) / 3 everywhere in this package.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


# =============================================================================
# Float kernels ([3, N] in [0, 1])
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def intensity_f32_numba(rgb: NDArray[np.float32], out: NDArray[np.float32]) -> None:
    """I = (R + G + B) / 3 per pixel.

    :param rgb: Planar image [3, N]
    :param out: Output intensity [N]
    """
    for i in prange(rgb.shape[1]):
        out[i] = (float(rgb[0, i]) + float(rgb[1, i]) + float(rgb[2, i])) / 3.0


@njit(parallel=True, cache=True, nogil=True)
def max_rgb_f32_numba(rgb: NDArray[np.float32], out: NDArray[np.float32]) -> None:
    """max(R, G, B) per pixel.

    :param rgb: Planar image [3, N]
    :param out: Output max channel [N]
    """
    for i in prange(rgb.shape[1]):
        out[i] = max(rgb[0, i], rgb[1, i], rgb[2, i])


@njit(parallel=True, cache=True, nogil=True)
def scale_by_intensity_numba(
    rgb: NDArray[np.float32],
    i_in: NDArray[np.float32],
    i_out: NDArray[np.float32],
    projected: bool,
    out: NDArray[np.float32],
) -> None:
    """RGB' = RGB * I' / I, bounded to [0, 1].

    A pixel with I = 0 gets scale 0. With ``projected``, a scale that
    would push max(R, G, B) above 1 is replaced by 1 / max(R, G, B),
    keeping the channel ratios; otherwise each channel is clipped.

    :param rgb: Planar image [3, N]
    :param i_in: Original intensity [N]
    :param i_out: Rescaled intensity [N]
    :param projected: Scale down instead of clipping
    :param out: Output planar image [3, N]
    """
    for i in prange(rgb.shape[1]):
        r = float(rgb[0, i])
        g = float(rgb[1, i])
        b = float(rgb[2, i])
        if i_in[i] == 0.0:
            s = 0.0
        else:
            s = float(i_out[i]) / float(i_in[i])
        if projected:
            m = max(r, g, b)
            if m * s > 1.0:
                s = 1.0 / m
        r = min(max(r * s, 0.0), 1.0)
        g = min(max(g * s, 0.0), 1.0)
        b = min(max(b * s, 0.0), 1.0)
        out[0, i] = r
        out[1, i] = g
        out[2, i] = b


@njit(parallel=True, cache=True, nogil=True)
def scale_adjusted_numba(
    rgb: NDArray[np.float32],
    irgb: NDArray[np.float32],
    maxrgb: NDArray[np.float32],
    alpha: float,
    beta: float,
    out: NDArray[np.float32],
) -> None:
    """RGB' = RGB * clamp((alpha * I + beta) / I, 0, 1 / max(R, G, B)).

    A pixel with I = 0 gets scale 0.

    :param rgb: Planar image [3, N]
    :param irgb: Intensity [N]
    :param maxrgb: max(R, G, B) [N]
    :param alpha: Global slope
    :param beta: Global offset
    :param out: Output planar image [3, N]
    """
    for i in prange(rgb.shape[1]):
        v = float(irgb[i])
        if v == 0.0:
            s = 0.0
        else:
            s = (alpha * v + beta) / v
        if s < 0.0:
            s = 0.0
        m = float(maxrgb[i])
        if m > 0.0 and s > 1.0 / m:
            s = 1.0 / m
        out[0, i] = rgb[0, i] * s
        out[1, i] = rgb[1, i] * s
        out[2, i] = rgb[2, i] * s


# =============================================================================
# uint8 kernels ([3, N] in [0, 255])
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def intensity_u8_numba(rgb: NDArray[np.uint8], out: NDArray[np.uint8]) -> None:
    """I = (R + G + B) / 3 per pixel, rounded to nearest.

    :param rgb: Planar image [3, N]
    :param out: Output intensity [N]
    """
    for i in prange(rgb.shape[1]):
        total = int(rgb[0, i]) + int(rgb[1, i]) + int(rgb[2, i])
        out[i] = int(np.floor(total / 3.0 + 0.5))


@njit(parallel=True, cache=True, nogil=True)
def reconstruct_u8_numba(
    rgb: NDArray[np.uint8],
    gray_in: NDArray[np.uint8],
    gray_out: NDArray[np.uint8],
    max_value: float,
    out: NDArray[np.uint8],
) -> None:
    """Rebuild RGB from a modified intensity by channel ratios.

    scale = gray_out / gray_in (0 if gray_in = 0). If a scaled channel
    would exceed ``max_value``, scale = max_value / max(R, G, B) instead,
    so the rebuilt intensity is then below gray_out. Outputs are rounded
    to nearest, half up.

    :param rgb: Original planar image [3, N]
    :param gray_in: Original intensity [N]
    :param gray_out: Target intensity [N]
    :param max_value: Largest channel value
    :param out: Output planar image [3, N]
    """
    for i in prange(rgb.shape[1]):
        r = float(rgb[0, i])
        g = float(rgb[1, i])
        b = float(rgb[2, i])
        if gray_in[i] == 0:
            s = 0.0
        else:
            s = float(gray_out[i]) / float(gray_in[i])
        if r * s > max_value or g * s > max_value or b * s > max_value:
            # c * max / m, not c * (max / m): exact halves must round up
            m = max(r, g, b)
            out[0, i] = int(np.floor(r * max_value / m + 0.5))
            out[1, i] = int(np.floor(g * max_value / m + 0.5))
            out[2, i] = int(np.floor(b * max_value / m + 0.5))
        else:
            out[0, i] = int(np.floor(r * s + 0.5))
            out[1, i] = int(np.floor(g * s + 0.5))
            out[2, i] = int(np.floor(b * s + 0.5))


def warmup_balance_kernels() -> None:
    """Warm up Numba JIT compilation for balance kernels."""
    rgb = np.random.rand(3, 64).astype(np.float32)
    irgb = np.empty(64, dtype=np.float32)
    maxrgb = np.empty(64, dtype=np.float32)
    out = np.empty_like(rgb)

    intensity_f32_numba(rgb, irgb)
    max_rgb_f32_numba(rgb, maxrgb)
    scale_by_intensity_numba(rgb, irgb, irgb, False, out)
    scale_adjusted_numba(rgb, irgb, maxrgb, 1.0, 0.0, out)

    rgb_u8 = (rgb * 255).astype(np.uint8)
    gray = np.empty(64, dtype=np.uint8)
    out_u8 = np.empty_like(rgb_u8)
    intensity_u8_numba(rgb_u8, gray)
    reconstruct_u8_numba(rgb_u8, gray, gray, 255.0, out_u8)

    logger.debug("Balance Numba kernels warmed up")


# Warmup on import
warmup_balance_kernels()
