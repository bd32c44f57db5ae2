"""Histogram, saturation budget and quantile bound containers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


class QuantileBounds(NamedTuple):
    """Extraction window (min, max) of a channel.

    ``max <= min`` is the degenerate case, rescaled to a constant.
    """

    min: float
    max: float


@dataclass(frozen=True)
class SaturationBudget:
    """Number of samples allowed to saturate at each end of a channel.

    Invariant: ``nb_min + nb_max < n_samples``. Use :meth:`for_size` to
    build a budget; it replaces an oversized request by
    ``(n_samples - 1) // 2`` on both ends and flags it as ``clamped``.

    Attributes:
        nb_min: Samples allowed strictly below the computed min
        nb_max: Samples allowed strictly above the computed max
        n_samples: Channel length N
        clamped: True if the requested budget was too large and got replaced

    Example:
        >>> budget = SaturationBudget.from_percent(10000, 1.0, 0.5)
        >>> budget.nb_min, budget.nb_max
        (100, 50)
    """

    nb_min: int
    nb_max: int
    n_samples: int
    clamped: bool = False

    @classmethod
    def for_size(cls, n_samples: int, nb_min: int, nb_max: int) -> SaturationBudget:
        """Build a budget for a channel of ``n_samples`` samples.

        :param n_samples: Channel length N (>= 1)
        :param nb_min: Requested low saturation count
        :param nb_max: Requested high saturation count
        :returns: SaturationBudget satisfying nb_min + nb_max < N
        :raises ValueError: If N < 1 or a count is negative
        """
        if n_samples < 1:
            raise ValueError(f"channel length must be >= 1, got {n_samples}")
        if nb_min < 0 or nb_max < 0:
            raise ValueError(f"saturation counts must be >= 0, got ({nb_min}, {nb_max})")

        if nb_min + nb_max >= n_samples:
            half = (n_samples - 1) // 2
            logger.warning(
                "the number of pixels to flatten is too large (%d + %d >= %d), using %d",
                nb_min,
                nb_max,
                n_samples,
                half,
            )
            return cls(nb_min=half, nb_max=half, n_samples=n_samples, clamped=True)

        return cls(nb_min=int(nb_min), nb_max=int(nb_max), n_samples=int(n_samples))

    @classmethod
    def from_percent(cls, n_samples: int, smin: float, smax: float) -> SaturationBudget:
        """Convert saturation percentages to pixel counts: nb = floor(N * S / 100).

        :param n_samples: Channel length N
        :param smin: Percentage saturated to the low end, in [0, 100)
        :param smax: Percentage saturated to the high end, in [0, 100)
        :returns: SaturationBudget
        """
        nb_min = int(np.floor(n_samples * (smin / 100.0)))
        nb_max = int(np.floor(n_samples * (smax / 100.0)))
        return cls.for_size(n_samples, nb_min, nb_max)

    @property
    def is_zero(self) -> bool:
        """True when no sample may saturate (plain min/max extraction)."""
        return self.nb_min == 0 and self.nb_max == 0


@dataclass
class HistogramResult:
    """256-bin histogram of a uint8 channel.

    Attributes:
        counts: Bin counts, shape [256]
        n_samples: Total number of samples

    Example:
        >>> result = compute_histogram_u8(channel)
        >>> bounds = result.quantiles(nb_min=10, nb_max=10)
    """

    counts: np.ndarray
    n_samples: int

    @property
    def n_bins(self) -> int:
        """Get number of bins.

        :return: Number of histogram bins
        """
        return len(self.counts)

    @property
    def cumulative(self) -> np.ndarray:
        """Prefix-summed counts: cumulative[i] = number of samples <= i.

        :return: Cumulative histogram, shape [n_bins]
        """
        return np.cumsum(self.counts)

    def __add__(self, other: HistogramResult) -> HistogramResult:
        """Merge histograms of disjoint sample ranges."""
        if not isinstance(other, HistogramResult):
            return NotImplemented
        if self.n_bins != other.n_bins:
            raise ValueError(f"cannot merge histograms with {self.n_bins} and {other.n_bins} bins")
        return HistogramResult(
            counts=self.counts + other.counts,
            n_samples=self.n_samples + other.n_samples,
        )

    def quantiles(self, nb_min: int, nb_max: int) -> QuantileBounds:
        """Tightest bounds leaving at most nb_min / nb_max samples outside.

        :param nb_min: Samples allowed below min
        :param nb_max: Samples allowed above max
        :return: QuantileBounds of bin indices
        """
        from colorbal.histogram.kernels import quantiles_cumulative_numba

        budget = SaturationBudget.for_size(self.n_samples, nb_min, nb_max)
        cumulative = np.ascontiguousarray(self.cumulative, dtype=np.int64)
        vmin, vmax = quantiles_cumulative_numba(
            cumulative, self.n_samples, budget.nb_min, budget.nb_max
        )
        return QuantileBounds(int(vmin), int(vmax))

    @classmethod
    def empty(cls, n_bins: int = 256) -> HistogramResult:
        """Create an empty histogram.

        :param n_bins: Number of bins
        :return: HistogramResult with zero counts
        """
        return cls(counts=np.zeros(n_bins, dtype=np.int64), n_samples=0)
