"""Quantile extraction for uint8 (histogram) and float (selection) channels."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from colorbal.histogram.kernels import (
    N_LEVELS,
    count_equal_rgb_numba,
    cumulate_numba,
    histogram_u8_numba,
    minmax_u8_numba,
    quantiles_cumulative_numba,
)
from colorbal.histogram.result import HistogramResult, QuantileBounds, SaturationBudget

logger = logging.getLogger(__name__)


def ensure_channel(data: np.ndarray | None, dtype: type | None = None) -> np.ndarray:
    """Validate a channel array and return it as a contiguous 1-D array.

    :param data: Channel samples [N]
    :param dtype: Required dtype (np.uint8 or np.float32), or None to keep
    :return: Contiguous 1-D array
    :raises ValueError: If data is None, empty, not 1-D or has the wrong dtype.
        uint8 data is never cast to float.
    """
    if data is None:
        raise ValueError("channel buffer is None")
    data = np.asarray(data)
    if data.ndim != 1:
        raise ValueError(f"channel must be 1-D, got shape {data.shape}")
    if data.shape[0] == 0:
        raise ValueError("channel buffer is empty")
    if dtype is not None and data.dtype != dtype:
        if dtype is np.uint8:
            raise ValueError(f"expected uint8 channel, got {data.dtype}")
        if data.dtype == np.uint8:
            raise ValueError("expected float channel in [0, 1], got uint8")
        data = data.astype(dtype)
    if not data.flags["C_CONTIGUOUS"]:
        data = np.ascontiguousarray(data)
    return data


def ensure_planar_rgb(rgb: np.ndarray | None, dtype: type | None = None) -> np.ndarray:
    """Validate a planar RGB image and return it as a contiguous [3, N] array.

    :param rgb: Planar image [3, N]
    :param dtype: Required dtype (np.uint8 or np.float32), or None to keep
    :return: Contiguous [3, N] array
    :raises ValueError: If rgb is None, empty or not shaped [3, N], or if
        a float image is required and rgb is uint8 (no implicit / 255)
    """
    if rgb is None:
        raise ValueError("image buffer is None")
    rgb = np.asarray(rgb)
    if rgb.ndim != 2 or rgb.shape[0] != 3:
        raise ValueError(f"image must be planar [3, N], got shape {rgb.shape}")
    if rgb.shape[1] == 0:
        raise ValueError("image buffer is empty")
    if dtype is not None and rgb.dtype != dtype:
        if dtype is np.uint8:
            raise ValueError(f"expected uint8 image, got {rgb.dtype}")
        if rgb.dtype == np.uint8:
            raise ValueError("expected float image in [0, 1], got uint8")
        rgb = rgb.astype(dtype)
    if not rgb.flags["C_CONTIGUOUS"]:
        rgb = np.ascontiguousarray(rgb)
    return rgb


def compute_histogram_u8(data: NDArray[np.uint8]) -> HistogramResult:
    """Compute the 256-bin histogram of a uint8 channel.

    :param data: Channel samples [N]
    :return: HistogramResult with counts
    """
    data = ensure_channel(data, np.uint8)
    counts = np.zeros(N_LEVELS, dtype=np.int64)
    histogram_u8_numba(data, counts)
    return HistogramResult(counts=counts, n_samples=data.shape[0])


def merge_histograms(parts: list[HistogramResult]) -> HistogramResult:
    """Merge histograms computed over disjoint pixel ranges.

    Integer addition is associative, so the merge order does not affect
    the result.

    :param parts: Partial histograms
    :return: Merged HistogramResult
    """
    if not parts:
        return HistogramResult.empty(N_LEVELS)
    merged = parts[0]
    for part in parts[1:]:
        merged = merged + part
    return merged


def minmax_u8(data: NDArray[np.uint8]) -> QuantileBounds:
    """Get the min/max of a uint8 channel.

    :param data: Channel samples [N]
    :return: QuantileBounds(min, max)
    """
    data = ensure_channel(data, np.uint8)
    vmin, vmax = minmax_u8_numba(data)
    return QuantileBounds(int(vmin), int(vmax))


def quantiles_u8(data: NDArray[np.uint8], nb_min: int, nb_max: int) -> QuantileBounds:
    """Get quantiles of a uint8 channel from its cumulative histogram.

    Computes min (resp. max) such that the number of samples < min
    (resp. > max) is at most nb_min (resp. nb_max), choosing the tightest
    such bounds. When both counts are 0 this is a plain min/max scan.

    :param data: Channel samples [N]
    :param nb_min: Samples allowed below min
    :param nb_max: Samples allowed above max
    :return: QuantileBounds(min, max)

    Example:
        >>> quantiles_u8(np.array([10, 20, 30, 240], dtype=np.uint8), 1, 1)
        QuantileBounds(min=20, max=30)
    """
    data = ensure_channel(data, np.uint8)
    N = data.shape[0]
    budget = SaturationBudget.for_size(N, nb_min, nb_max)

    if budget.is_zero:
        return minmax_u8(data)

    histo = np.zeros(N_LEVELS, dtype=np.int64)
    histogram_u8_numba(data, histo)
    cumulate_numba(histo)
    vmin, vmax = quantiles_cumulative_numba(histo, N, budget.nb_min, budget.nb_max)
    return QuantileBounds(int(vmin), int(vmax))


def quantiles_f32(data: NDArray[np.float32], nb_min: int, nb_max: int) -> QuantileBounds:
    """Get quantiles of a float channel by order-statistic selection.

    Returns ``sorted[nb_min]`` and ``sorted[N - 1 - nb_max]``. Uses
    ``np.partition`` rather than a full sort; the two order statistics
    are the same.

    :param data: Channel samples [N]
    :param nb_min: Samples allowed below min
    :param nb_max: Samples allowed above max
    :return: QuantileBounds(min, max)
    :raises ValueError: If data contains NaN
    """
    data = ensure_channel(data, np.float32)
    N = data.shape[0]
    budget = SaturationBudget.for_size(N, nb_min, nb_max)

    if np.isnan(data).any():
        raise ValueError("NaN samples are not supported")

    lo = budget.nb_min
    hi = N - 1 - budget.nb_max
    selected = np.partition(data, (lo, hi) if lo != hi else lo)
    return QuantileBounds(float(selected[lo]), float(selected[hi]))


def count_equal_rgb(rgb: NDArray[np.uint8], value: int) -> np.ndarray:
    """Count samples equal to ``value`` in each channel.

    :param rgb: Planar uint8 image [3, N]
    :param value: Sample value to count
    :return: Counts [3] (int64)
    """
    rgb = ensure_planar_rgb(rgb, np.uint8)
    counts = np.zeros(3, dtype=np.int64)
    count_equal_rgb_numba(rgb, int(value), counts)
    return counts
