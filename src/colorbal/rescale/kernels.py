"""Numba-optimized affine rescaling kernels."""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


@njit(cache=True, nogil=True)
def build_lut_u8_numba(vmin: int, vmax: int, tmin: int, tmax: int, out: NDArray[np.uint8]) -> None:
    """Build a bounded affine normalization table.

    norm(v) = tmin for v <= vmin, tmax for v >= vmax, otherwise
    floor((v - vmin) * (tmax - tmin) / (vmax - vmin) + tmin + 0.5).
    Each entry is computed from the exact ratio; no rounded scale
    constant is shared between entries. Requires vmax > vmin.

    :param vmin: Source window min
    :param vmax: Source window max
    :param tmin: Target min
    :param tmax: Target max
    :param out: Output table [256]
    """
    span = float(vmax - vmin)
    tspan = float(tmax - tmin)
    for i in range(out.shape[0]):
        if i <= vmin:
            out[i] = tmin
        elif i >= vmax:
            out[i] = tmax
        else:
            out[i] = int(np.floor(float(i - vmin) * tspan / span + tmin + 0.5))


@njit(parallel=True, cache=True, nogil=True)
def apply_lut_u8_numba(data: NDArray[np.uint8], lut: NDArray[np.uint8], out: NDArray[np.uint8]) -> None:
    """Map every sample through a 256-entry table.

    :param data: Input samples [N]
    :param lut: Lookup table [256]
    :param out: Output samples [N]
    """
    for i in prange(data.shape[0]):
        out[i] = lut[data[i]]


@njit(parallel=True, cache=True, nogil=True)
def rescale_f32_numba(
    data: NDArray[np.float32],
    vmin: float,
    vmax: float,
    tmin: float,
    tmax: float,
    out: NDArray[np.float32],
) -> None:
    """Bounded affine map of float samples, clamped to [tmin, tmax].

    Requires vmax > vmin.

    :param data: Input samples [N]
    :param vmin: Source window min
    :param vmax: Source window max
    :param tmin: Target min
    :param tmax: Target max
    :param out: Output samples [N]
    """
    scale = (tmax - tmin) / (vmax - vmin)
    for i in prange(data.shape[0]):
        v = data[i]
        if v <= vmin:
            out[i] = tmin
        elif v >= vmax:
            out[i] = tmax
        else:
            x = tmin + (v - vmin) * scale
            if x < tmin:
                x = tmin
            elif x > tmax:
                x = tmax
            out[i] = x


def warmup_rescale_kernels() -> None:
    """Warm up Numba JIT compilation for rescale kernels."""
    lut = np.empty(256, dtype=np.uint8)
    data_u8 = np.arange(64, dtype=np.uint8)
    out_u8 = np.empty_like(data_u8)
    data_f32 = np.linspace(0.0, 1.0, 64).astype(np.float32)
    out_f32 = np.empty_like(data_f32)

    build_lut_u8_numba(10, 200, 0, 255, lut)
    apply_lut_u8_numba(data_u8, lut, out_u8)
    rescale_f32_numba(data_f32, 0.1, 0.9, 0.0, 1.0, out_f32)

    logger.debug("Rescale Numba kernels warmed up")


# Warmup on import
warmup_rescale_kernels()
