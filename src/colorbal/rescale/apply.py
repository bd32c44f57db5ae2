"""Affine rescaling of channels and the saturating channel balance."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from colorbal.histogram.apply import ensure_channel, quantiles_f32, quantiles_u8
from colorbal.histogram.result import QuantileBounds
from colorbal.rescale.kernels import apply_lut_u8_numba, build_lut_u8_numba, rescale_f32_numba

logger = logging.getLogger(__name__)


def build_lut_u8(vmin: int, vmax: int, tmin: int = 0, tmax: int = 255) -> NDArray[np.uint8]:
    """Build the 256-entry table of the bounded affine map [vmin, vmax] -> [tmin, tmax].

    :param vmin: Source window min
    :param vmax: Source window max
    :param tmin: Target min
    :param tmax: Target max
    :return: Lookup table [256]
    """
    lut = np.empty(256, dtype=np.uint8)
    if tmax == tmin:
        lut[:] = tmin
    elif vmax <= vmin:
        lut[:] = (tmin + tmax) // 2
    else:
        build_lut_u8_numba(int(vmin), int(vmax), int(tmin), int(tmax), lut)
    return lut


def rescale_u8(
    data: NDArray[np.uint8],
    bounds: QuantileBounds | tuple[int, int],
    target: tuple[int, int] = (0, 255),
) -> NDArray[np.uint8]:
    """Rescale a uint8 channel by a bounded affine map.

    - target min == target max: constant target min
    - max <= min: constant target midpoint
    - otherwise: lookup table, rounded to nearest

    :param data: Channel samples [N]
    :param bounds: Source window (min, max)
    :param target: Target window (min, max)
    :return: New rescaled channel [N]
    """
    data = ensure_channel(data, np.uint8)
    vmin, vmax = int(bounds[0]), int(bounds[1])
    tmin, tmax = int(target[0]), int(target[1])

    if tmax == tmin:
        return np.full_like(data, tmin)
    if vmax <= vmin:
        return np.full_like(data, (tmin + tmax) // 2)

    lut = build_lut_u8(vmin, vmax, tmin, tmax)
    out = np.empty_like(data)
    apply_lut_u8_numba(data, lut, out)
    return out


def rescale_f32(
    data: NDArray[np.float32],
    bounds: QuantileBounds | tuple[float, float],
    target: tuple[float, float] = (0.0, 1.0),
) -> NDArray[np.float32]:
    """Rescale a float channel by a bounded affine map, clamped to target.

    :param data: Channel samples [N]
    :param bounds: Source window (min, max)
    :param target: Target window (min, max)
    :return: New rescaled channel [N] (float32)
    """
    data = ensure_channel(data, np.float32)
    vmin, vmax = float(bounds[0]), float(bounds[1])
    tmin, tmax = float(target[0]), float(target[1])

    if tmax == tmin:
        return np.full_like(data, tmin)
    if vmax <= vmin:
        return np.full_like(data, (tmin + tmax) / 2)

    out = np.empty_like(data)
    rescale_f32_numba(data, vmin, vmax, tmin, tmax, out)
    return out


def balance_u8(
    data: NDArray[np.uint8],
    nb_min: int,
    nb_max: int,
    target: tuple[int, int] = (0, 255),
) -> NDArray[np.uint8]:
    """Stretch a uint8 channel, saturating at most nb_min / nb_max samples.

    :param data: Channel samples [N]
    :param nb_min: Samples allowed to saturate to target min
    :param nb_max: Samples allowed to saturate to target max
    :param target: Target window (min, max)
    :return: New balanced channel [N]

    Example:
        >>> balance_u8(np.array([10, 20, 30, 240], dtype=np.uint8), 1, 1)
        array([  0,   0, 255, 255], dtype=uint8)
    """
    data = ensure_channel(data, np.uint8)
    if target[0] == target[1]:
        return np.full_like(data, target[0])

    bounds = quantiles_u8(data, nb_min, nb_max)
    logger.debug("balance_u8: window [%d, %d] -> [%d, %d]", bounds.min, bounds.max, *target)
    return rescale_u8(data, bounds, target)


def balance_f32(
    data: NDArray[np.float32],
    nb_min: int,
    nb_max: int,
    target: tuple[float, float] = (0.0, 1.0),
) -> NDArray[np.float32]:
    """Stretch a float channel, saturating at most nb_min / nb_max samples.

    :param data: Channel samples [N]
    :param nb_min: Samples allowed to saturate to target min
    :param nb_max: Samples allowed to saturate to target max
    :param target: Target window (min, max)
    :return: New balanced channel [N] (float32)
    """
    data = ensure_channel(data, np.float32)
    if target[0] == target[1]:
        return np.full_like(data, target[0])

    bounds = quantiles_f32(data, nb_min, nb_max)
    logger.debug("balance_f32: window [%g, %g] -> [%g, %g]", bounds.min, bounds.max, *target)
    return rescale_f32(data, bounds, target)
