"""Direct balance strategies on planar RGB images.

Each strategy takes a planar image [3, N] and a saturation budget
(nb_min, nb_max) and returns a new balanced image of the same shape.
``balance_rgb`` accepts uint8 or float input; every other strategy works
on float32 samples in [0, 1].
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from colorbal.balance.kernels import (
    intensity_f32_numba,
    max_rgb_f32_numba,
    scale_adjusted_numba,
    scale_by_intensity_numba,
)
from colorbal.colorspace import (
    hsi_to_rgb,
    hsl_to_rgb,
    hsv_to_rgb,
    rgb_to_hsi,
    rgb_to_hsl,
    rgb_to_hsv,
    rgb_to_ycbcr,
    ycbcr_to_rgb,
)
from colorbal.histogram.apply import ensure_planar_rgb
from colorbal.histogram.result import SaturationBudget
from colorbal.rescale.apply import balance_f32, balance_u8

logger = logging.getLogger(__name__)


def intensity(rgb: np.ndarray) -> NDArray[np.float32]:
    """Per-pixel intensity I = (R + G + B) / 3.

    :param rgb: Planar float image [3, N]
    :returns: Intensity [N] (float32)
    """
    rgb = ensure_planar_rgb(rgb, np.float32)
    out = np.empty(rgb.shape[1], dtype=np.float32)
    intensity_f32_numba(rgb, out)
    return out


def balance_rgb(rgb: np.ndarray, nb_min: int, nb_max: int) -> np.ndarray:
    """Stretch R, G and B independently.

    uint8 images use the histogram quantiles, float images the sorted
    quantiles. Channels are decorrelated, so the hue can shift.

    :param rgb: Planar image [3, N], uint8 or float
    :param nb_min: Pixels allowed to saturate low, per channel
    :param nb_max: Pixels allowed to saturate high, per channel
    :returns: New balanced image, same dtype as input (float becomes float32)
    """
    rgb = ensure_planar_rgb(rgb)
    if rgb.dtype == np.uint8:
        return np.stack([balance_u8(rgb[c], nb_min, nb_max) for c in range(3)])

    rgb = ensure_planar_rgb(rgb, np.float32)
    return np.stack([balance_f32(rgb[c], nb_min, nb_max) for c in range(3)])


def _balance_axis(rgb: np.ndarray, nb_min: int, nb_max: int, forward, inverse, axis: int = 2):
    rgb = ensure_planar_rgb(rgb, np.float32)
    converted = forward(rgb)
    converted[axis] = balance_f32(converted[axis], nb_min, nb_max)
    return inverse(converted)


def balance_hsl(rgb: np.ndarray, nb_min: int, nb_max: int) -> NDArray[np.float32]:
    """Stretch the L axis of HSL; hue and saturation are kept.

    :param rgb: Planar float image [3, N] in [0, 1]
    :param nb_min: Pixels allowed to saturate to L = 0
    :param nb_max: Pixels allowed to saturate to L = 1
    :returns: New balanced image (float32)
    """
    out = _balance_axis(rgb, nb_min, nb_max, rgb_to_hsl, hsl_to_rgb)
    # float rounding only; the HSL cylinder maps into the cube
    return np.clip(out, 0.0, 1.0, out=out)


def balance_hsv(rgb: np.ndarray, nb_min: int, nb_max: int) -> NDArray[np.float32]:
    """Stretch the V axis of HSV; hue and saturation are kept.

    :param rgb: Planar float image [3, N] in [0, 1]
    :param nb_min: Pixels allowed to saturate to V = 0
    :param nb_max: Pixels allowed to saturate to V = 1
    :returns: New balanced image (float32)
    """
    out = _balance_axis(rgb, nb_min, nb_max, rgb_to_hsv, hsv_to_rgb)
    return np.clip(out, 0.0, 1.0, out=out)


def balance_hsi(rgb: np.ndarray, nb_min: int, nb_max: int) -> NDArray[np.float32]:
    """Stretch the I axis of HSI, then clip each channel to [0, 1].

    The HSI cone is not stable by this operation, so clipping happens
    when the result leaves the RGB cube, with some color distortion.

    :param rgb: Planar float image [3, N] in [0, 1]
    :param nb_min: Pixels allowed to saturate to I = 0
    :param nb_max: Pixels allowed to saturate to I = 1
    :returns: New balanced image (float32)
    """
    out = _balance_axis(rgb, nb_min, nb_max, rgb_to_hsi, hsi_to_rgb)
    return np.clip(out, 0.0, 1.0, out=out)


def balance_ycbcr(rgb: np.ndarray, nb_min: int, nb_max: int) -> NDArray[np.float32]:
    """Stretch the Y (luma) axis of YCbCr, then clip each channel to [0, 1].

    :param rgb: Planar float image [3, N] in [0, 1]
    :param nb_min: Pixels allowed to saturate to Y = 0
    :param nb_max: Pixels allowed to saturate to Y = 1
    :returns: New balanced image (float32)
    """
    out = _balance_axis(rgb, nb_min, nb_max, rgb_to_ycbcr, ycbcr_to_rgb, axis=0)
    return np.clip(out, 0.0, 1.0, out=out)


def balance_irgb_bounded(
    rgb: np.ndarray, nb_min: int, nb_max: int, projected: bool = False
) -> NDArray[np.float32]:
    """Stretch the intensity and apply it to R, G and B by ratio.

    RGB' = RGB * I' / I with I' the stretched intensity. Out-of-cube
    results are clipped per channel, or with ``projected`` scaled back by
    1 / max(R, G, B) so the channel ratios are kept (that pixel is then
    stretched less).

    :param rgb: Planar float image [3, N] in [0, 1]
    :param nb_min: Pixels allowed to saturate to I = 0
    :param nb_max: Pixels allowed to saturate to I = 1
    :param projected: Scale down instead of clipping
    :returns: New balanced image (float32)
    """
    rgb = ensure_planar_rgb(rgb, np.float32)
    i_in = intensity(rgb)
    i_out = balance_f32(i_in, nb_min, nb_max)

    out = np.empty_like(rgb)
    scale_by_intensity_numba(rgb, i_in, i_out, projected, out)
    return out


def balance_irgb_projected(rgb: np.ndarray, nb_min: int, nb_max: int) -> NDArray[np.float32]:
    """``balance_irgb_bounded`` with projection instead of clipping."""
    return balance_irgb_bounded(rgb, nb_min, nb_max, projected=True)


def balance_irgb_adjusted(rgb: np.ndarray, nb_min: int, nb_max: int) -> NDArray[np.float32]:
    """Stretch the intensity by one global affine map that keeps RGB in the cube.

    I_min is the nb_min-th smallest intensity, mapped to 0. The slope
    alpha is the nb_max-th smallest value of I / (max(R,G,B) * (I - I_min))
    over the pixels above I_min, so at most nb_max pixels need their
    scale bounded by 1 / max(R, G, B). Each pixel is scaled by
    clamp((alpha * I - alpha * I_min) / I, 0, 1 / max(R, G, B)).

    :param rgb: Planar float image [3, N] in [0, 1]
    :param nb_min: Pixels allowed to saturate to black
    :param nb_max: Pixels allowed to reach the cube surface
    :returns: New balanced image (float32)
    """
    rgb = ensure_planar_rgb(rgb, np.float32)
    N = rgb.shape[1]
    budget = SaturationBudget.for_size(N, nb_min, nb_max)

    irgb = intensity(rgb)
    maxrgb = np.empty(N, dtype=np.float32)
    max_rgb_f32_numba(rgb, maxrgb)

    # I_min: the nb_min-th I value, mapped to 0
    imin = float(np.partition(irgb, budget.nb_min)[budget.nb_min])

    above = (irgb > imin) & (maxrgb > 0)
    if not above.any():
        logger.debug("balance_irgb_adjusted: constant intensity, image unchanged")
        return rgb.copy()

    i_above = irgb[above].astype(np.float64)
    ratios = i_above / (maxrgb[above].astype(np.float64) * (i_above - imin))
    k = min(budget.nb_max, ratios.shape[0] - 1)
    alpha = float(np.partition(ratios, k)[k])
    beta = -alpha * imin
    logger.debug("balance_irgb_adjusted: imin=%g alpha=%g beta=%g", imin, alpha, beta)

    out = np.empty_like(rgb)
    scale_adjusted_numba(rgb, irgb, maxrgb, alpha, beta, out)
    return out
