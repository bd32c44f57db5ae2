"""Numba-optimized histogram and quantile kernels for 8-bit channels."""

from __future__ import annotations

import logging

import numpy as np
from numba import njit
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# Number of distinct uint8 sample values
N_LEVELS = 256


# Note: Not using parallel=True because histogram accumulation has race conditions
@njit(cache=True, nogil=True)
def histogram_u8_numba(data: NDArray[np.uint8], out: NDArray[np.int64]) -> None:
    """Accumulate a 256-bin histogram of uint8 samples.

    Counts are added to ``out``, so partial histograms over disjoint
    ranges can be accumulated into the same buffer.

    :param data: Input samples [N]
    :param out: Output histogram [256], accumulated in place
    """
    for i in range(data.shape[0]):
        out[data[i]] += 1


@njit(cache=True, nogil=True)
def cumulate_numba(histo: NDArray[np.int64]) -> None:
    """Convert a histogram to a cumulative histogram in place.

    :param histo: Histogram [n_bins]
    """
    for i in range(1, histo.shape[0]):
        histo[i] += histo[i - 1]


@njit(cache=True, nogil=True)
def minmax_u8_numba(data: NDArray[np.uint8]) -> tuple[int, int]:
    """Plain min/max scan of a uint8 array.

    :param data: Input samples [N], N >= 1
    :returns: Tuple of (min, max)
    """
    vmin = int(data[0])
    vmax = int(data[0])
    for i in range(1, data.shape[0]):
        v = int(data[i])
        if v < vmin:
            vmin = v
        if v > vmax:
            vmax = v
    return vmin, vmax


@njit(cache=True, nogil=True)
def quantiles_cumulative_numba(
    cumulative: NDArray[np.int64],
    n_samples: int,
    nb_min: int,
    nb_max: int,
) -> tuple[int, int]:
    """Read the saturation quantiles off a cumulative histogram.

    min is the first cell holding more than ``nb_min`` samples. max is
    found by a backward scan for the last cell holding at most
    ``n_samples - nb_max`` samples, then stepped one cell toward the end
    unless that cell already holds all of them.

    :param cumulative: Cumulative histogram [n_bins]
    :param n_samples: Total number of samples
    :param nb_min: Samples allowed below min
    :param nb_max: Samples allowed above max
    :returns: Tuple of (min, max) bin indices
    """
    n_bins = cumulative.shape[0]

    # forward traversal: first value > nb_min
    i = 0
    while i < n_bins - 1 and cumulative[i] <= nb_min:
        i += 1
    vmin = i

    # backward traversal: last value < n_samples - nb_max
    upper = n_samples - nb_max
    j = n_bins - 1
    while j >= 0 and cumulative[j] >= upper:
        j -= 1
    # the next cell is the first one reaching n_samples - nb_max
    vmax = j + 1
    if vmax > n_bins - 1:
        vmax = n_bins - 1
    return vmin, vmax


@njit(cache=True, nogil=True)
def count_equal_rgb_numba(rgb: NDArray[np.uint8], value: int, out: NDArray[np.int64]) -> None:
    """Count samples equal to ``value`` in each channel of a planar image.

    :param rgb: Planar image [3, N]
    :param value: Sample value to count
    :param out: Output counts [3]
    """
    for c in range(3):
        count = 0
        for i in range(rgb.shape[1]):
            if rgb[c, i] == value:
                count += 1
        out[c] = count


def warmup_histogram_kernels() -> None:
    """Warm up Numba JIT compilation for histogram kernels.

    Called on module import to avoid first-call overhead.
    """
    data = np.arange(64, dtype=np.uint8)
    rgb = np.zeros((3, 16), dtype=np.uint8)

    histo = np.zeros(N_LEVELS, dtype=np.int64)
    counts = np.zeros(3, dtype=np.int64)

    histogram_u8_numba(data, histo)
    cumulate_numba(histo)
    quantiles_cumulative_numba(histo, data.shape[0], 1, 1)
    minmax_u8_numba(data)
    count_equal_rgb_numba(rgb, 0, counts)

    logger.debug("Histogram Numba kernels warmed up")


# Warmup on import
warmup_histogram_kernels()
