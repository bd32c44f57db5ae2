"""Intensity-preserving balance with per-channel saturation control.

The intensity I = (R + G + B) / 3 of a uint8 image is stretched by a
bounded affine map [ming, maxg] -> [0, 255] and the colors are rebuilt
by channel ratios (see :func:`reconstruct_u8`). Because the rebuild
bounds the scale of a pixel by its largest channel, the number of pixels
saturated in R, G or B is not what a quantile of I alone predicts. The
bounds are therefore tightened by direct feedback: ming is lowered (and
then maxg raised) one step at a time until every channel of the rebuilt
image saturates at most nb_min pixels to 0 and nb_max pixels to 255.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from colorbal.balance.kernels import intensity_u8_numba, reconstruct_u8_numba
from colorbal.config.balance import CONFIG
from colorbal.histogram.apply import count_equal_rgb, ensure_channel, ensure_planar_rgb, quantiles_u8
from colorbal.histogram.result import SaturationBudget
from colorbal.rescale.apply import rescale_u8

logger = logging.getLogger(__name__)


@dataclass
class IntensityBalanceResult:
    """Result of the intensity-preserving balance.

    Attributes:
        rgb: Balanced planar image [3, N] (uint8)
        ming: Converged intensity mapped to 0
        maxg: Converged intensity mapped to 255
        iterations_min: Rebuilds run while searching ming
        iterations_max: Rebuilds run while searching maxg
    """

    rgb: np.ndarray
    ming: int
    maxg: int
    iterations_min: int = 0
    iterations_max: int = 0


def intensity_u8(rgb: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Per-pixel intensity (R + G + B) / 3, rounded to nearest.

    :param rgb: Planar uint8 image [3, N]
    :returns: Intensity [N] (uint8)
    """
    rgb = ensure_planar_rgb(rgb, np.uint8)
    out = np.empty(rgb.shape[1], dtype=np.uint8)
    intensity_u8_numba(rgb, out)
    return out


def reconstruct_u8(
    rgb: NDArray[np.uint8],
    gray_in: NDArray[np.uint8],
    gray_out: NDArray[np.uint8],
) -> NDArray[np.uint8]:
    """Rebuild an image whose channels are proportional to the input's.

    Each pixel is scaled by gray_out / gray_in (0 when gray_in = 0). If
    that pushes a channel above 255, the pixel is scaled by
    255 / max(R, G, B) instead, and its intensity ends up below gray_out.

    :param rgb: Original planar image [3, N] (uint8)
    :param gray_in: Original intensity [N]
    :param gray_out: Target intensity [N]
    :returns: Rebuilt planar image [3, N] (uint8)
    """
    rgb = ensure_planar_rgb(rgb, np.uint8)
    gray_in = ensure_channel(gray_in, np.uint8)
    gray_out = ensure_channel(gray_out, np.uint8)
    if gray_in.shape[0] != rgb.shape[1] or gray_out.shape[0] != rgb.shape[1]:
        raise ValueError(
            f"intensity length mismatch: image has {rgb.shape[1]} pixels, "
            f"got {gray_in.shape[0]} and {gray_out.shape[0]}"
        )

    out = np.empty_like(rgb)
    reconstruct_u8_numba(rgb, gray_in, gray_out, float(CONFIG.max_value), out)
    return out


def _rebuild(rgb, gray, ming: int, maxg: int) -> np.ndarray:
    gray_out = rescale_u8(gray, (ming, maxg), (0, CONFIG.max_value))
    return reconstruct_u8(rgb, gray, gray_out)


def balance_intensity(rgb: NDArray[np.uint8], nb_min: int, nb_max: int) -> IntensityBalanceResult:
    """Stretch the intensity so at most nb_min / nb_max pixels saturate per channel.

    Phase 1 searches ming (maxg = 255), phase 2 searches maxg with the
    ming of phase 1. Each phase is skipped, with its bound left at the
    end of the range, when the original image already saturates more
    pixels than allowed in some channel. Both searches are monotone and
    bounded by 256 rebuilds.

    :param rgb: Planar uint8 image [3, N]
    :param nb_min: Pixels allowed at 0 in each channel
    :param nb_max: Pixels allowed at 255 in each channel
    :returns: IntensityBalanceResult with the balanced image and bounds
    """
    rgb = ensure_planar_rgb(rgb, np.uint8)
    N = rgb.shape[1]
    budget = SaturationBudget.for_size(N, nb_min, nb_max)
    top = CONFIG.max_value

    gray = intensity_u8(rgb)
    bounds = quantiles_u8(gray, budget.nb_min, budget.nb_max)

    # Phase 1: lower bound
    ming = 0
    maxg = top
    iterations_min = 0
    if (count_equal_rgb(rgb, 0) > budget.nb_min).any():
        logger.debug("balance_intensity: original already saturates to 0, ming=0")
    else:
        ming = int(bounds.min)
        while True:
            iterations_min += 1
            out = _rebuild(rgb, gray, ming, maxg)
            if ming == 0 or not (count_equal_rgb(out, 0) > budget.nb_min).any():
                break
            ming -= 1

    # Phase 2: upper bound
    iterations_max = 0
    if (count_equal_rgb(rgb, top) > budget.nb_max).any():
        logger.debug("balance_intensity: original already saturates to %d, maxg=%d", top, top)
    else:
        maxg = int(bounds.max)
        while True:
            iterations_max += 1
            out = _rebuild(rgb, gray, ming, maxg)
            if maxg == top or not (count_equal_rgb(out, top) > budget.nb_max).any():
                break
            maxg += 1

    logger.debug(
        "balance_intensity: ming=%d maxg=%d after %d + %d rebuilds",
        ming,
        maxg,
        iterations_min,
        iterations_max,
    )
    return IntensityBalanceResult(
        rgb=_rebuild(rgb, gray, ming, maxg),
        ming=ming,
        maxg=maxg,
        iterations_min=iterations_min,
        iterations_max=iterations_max,
    )
