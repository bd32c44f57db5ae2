"""
Protocol definitions for colorbal strategy interfaces.

Defines the callable shape shared by every balance strategy so that
``ColorBalancer`` can dispatch to built-in and user-registered strategies
alike.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class BalanceStrategy(Protocol):
    """
    Protocol for balance strategies.

    A strategy takes a planar image [3, N] and a saturation budget in
    pixels, and returns a new balanced image of the same shape. It must
    not modify its input.
    """

    def __call__(self, rgb: np.ndarray, nb_min: int, nb_max: int) -> np.ndarray:
        """
        Balance an image.

        :param rgb: Planar image [3, N]
        :param nb_min: Pixels allowed to saturate low
        :param nb_max: Pixels allowed to saturate high
        :returns: New balanced image [3, N]
        """
        ...
