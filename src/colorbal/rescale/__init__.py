"""Affine rescaling module.

Bounded linear maps from an observed [min, max] window to a target
window, for uint8 (lookup table) and float32 (direct) channels.

Example:
    >>> from colorbal.rescale import balance_u8
    >>> out = balance_u8(channel, nb_min=100, nb_max=100)
"""

from colorbal.rescale.apply import (
    balance_f32,
    balance_u8,
    build_lut_u8,
    rescale_f32,
    rescale_u8,
)

__all__ = [
    "build_lut_u8",
    "rescale_u8",
    "rescale_f32",
    "balance_u8",
    "balance_f32",
]
