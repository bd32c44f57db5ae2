"""Histogram and quantile computation module.

Quantile bounds of a channel such that at most a given number of samples
fall outside them.

Example:
    >>> from colorbal.histogram import quantiles_u8, SaturationBudget
    >>>
    >>> budget = SaturationBudget.from_percent(channel.size, 1.0, 1.0)
    >>> bounds = quantiles_u8(channel, budget.nb_min, budget.nb_max)
    >>> print(f"window: [{bounds.min}, {bounds.max}]")
"""

from colorbal.histogram.apply import (
    compute_histogram_u8,
    count_equal_rgb,
    ensure_channel,
    ensure_planar_rgb,
    merge_histograms,
    minmax_u8,
    quantiles_f32,
    quantiles_u8,
)
from colorbal.histogram.result import HistogramResult, QuantileBounds, SaturationBudget

__all__ = [
    "compute_histogram_u8",
    "merge_histograms",
    "minmax_u8",
    "quantiles_u8",
    "quantiles_f32",
    "count_equal_rgb",
    "ensure_channel",
    "ensure_planar_rgb",
    "HistogramResult",
    "QuantileBounds",
    "SaturationBudget",
]
