"""Planar RGB image container with a Pillow-backed codec.

Pixels are stored as one [3, N] array (row-major pixel order), uint8 in
[0, 255] or float32 in [0, 1]. Alpha and grayscale inputs are converted to
RGB on read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Self

import numpy as np
from PIL import Image

from colorbal.histogram.apply import ensure_planar_rgb
from colorbal.processing import ColorBalancer, to_float32, to_uint8

if TYPE_CHECKING:
    from colorbal.config.values import BalanceValues

logger = logging.getLogger(__name__)


class ImageData:
    """Planar RGB image with balance methods.

    Methods modify data inplace by default and return self for chaining.
    Use inplace=False to get a copy.

    Example:
        >>> image = ImageData.from_file("photo.jpg")
        >>> image.balance(BalanceValues(mode="irgb_adjusted", saturation_low=0.5))
        >>> image.to_file("balanced.png")
    """

    def __init__(self, rgb: np.ndarray, width: int, height: int):
        """Wrap a planar image.

        :param rgb: Planar image [3, width * height], uint8 or float32
        :param width: Image width in pixels
        :param height: Image height in pixels
        :raises ValueError: If rgb does not hold width * height pixels
        """
        rgb = ensure_planar_rgb(rgb)
        if rgb.shape[1] != width * height:
            raise ValueError(
                f"image holds {rgb.shape[1]} pixels, expected {width}x{height}={width * height}"
            )
        self.rgb = rgb
        self.width = int(width)
        self.height = int(height)

    def __repr__(self) -> str:
        return f"ImageData({self.width}x{self.height}, dtype={self.rgb.dtype})"

    @property
    def size(self) -> int:
        """Number of pixels N."""
        return self.width * self.height

    @property
    def dtype(self) -> np.dtype:
        return self.rgb.dtype

    # ========================================================================
    # Construction / export
    # ========================================================================

    @classmethod
    def from_array(cls, array: np.ndarray) -> ImageData:
        """Create from an interleaved [H, W, 3] array.

        :param array: Pixels [H, W, 3], uint8 or float in [0, 1]
        :returns: New ImageData (the pixels are copied)
        :raises ValueError: If array is not shaped [H, W, 3]
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"expected an [H, W, 3] array, got shape {array.shape}")
        height, width = array.shape[:2]
        rgb = np.ascontiguousarray(array.reshape(-1, 3).T)
        if rgb.dtype != np.uint8:
            rgb = rgb.astype(np.float32)
        return cls(rgb, width, height)

    @classmethod
    def rgb_palette(cls, levels: int = 16) -> ImageData:
        """Create a synthetic image holding every RGB color of a palette once.

        Each channel takes ``levels`` values spaced by 256 / levels. R runs
        along x and G along y inside square tiles; B changes from tile to
        tile. The image is ``levels * sqrt(levels)`` pixels square, so 16
        levels give 64x64, 64 give 512x512 and 256 give 4096x4096.

        :param levels: Values per channel, one of 1, 4, 16, 64, 256
        :returns: New uint8 ImageData
        :raises ValueError: If levels is not a square dividing 256
        """
        tiles = int(round(levels**0.5))
        if levels < 1 or tiles * tiles != levels or 256 % levels:
            raise ValueError(f"levels must be one of 1, 4, 16, 64, 256, got {levels}")
        step = 256 // levels
        side = levels * tiles

        y, x = np.divmod(np.arange(side * side), side)
        rgb = np.empty((3, side * side), dtype=np.uint8)
        rgb[0] = (x % levels) * step
        rgb[1] = (y % levels) * step
        rgb[2] = (x // levels + tiles * (y // levels)) * step
        return cls(rgb, side, side)

    def to_array(self) -> np.ndarray:
        """Export as an interleaved [H, W, 3] array of the same dtype."""
        return np.ascontiguousarray(self.rgb.T).reshape(self.height, self.width, 3)

    @classmethod
    def from_file(cls, path: str | Path) -> ImageData:
        """Read an image with Pillow as uint8 RGB.

        :param path: Image file path
        :returns: New ImageData (uint8)
        :raises OSError: If the file cannot be read or decoded
        """
        with Image.open(path) as im:
            pixels = np.asarray(im.convert("RGB"), dtype=np.uint8)
        logger.debug("Read %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
        return cls.from_array(pixels)

    def to_file(self, path: str | Path) -> None:
        """Write the image with Pillow; the format follows the file extension.

        Float pixels are quantized with floor(x * 255 + 0.5).

        :param path: Output file path
        """
        pixels = to_uint8(self.rgb)
        array = np.ascontiguousarray(pixels.T).reshape(self.height, self.width, 3)
        Image.fromarray(array).save(path)
        logger.debug("Wrote %s (%dx%d)", path, self.width, self.height)

    def clone(self) -> ImageData:
        """Deep copy."""
        return ImageData(self.rgb.copy(), self.width, self.height)

    # ========================================================================
    # Processing
    # ========================================================================

    def balance(self, values: BalanceValues, inplace: bool = True) -> Self:
        """Balance colors.

        :param values: Balance parameters
        :param inplace: If True, modify self; if False, return modified copy
        :returns: Self (modified) or copy with modifications

        Example:
            >>> image.balance(BalanceValues(mode="hsl", saturation_low=1.0, saturation_high=1.0))
        """
        return ColorBalancer().balance(self, values, inplace=inplace)

    def to_float(self, inplace: bool = True) -> Self:
        """Convert pixels to float32 in [0, 1]."""
        data = self if inplace else self.clone()
        if data.rgb.dtype != np.float32:
            data.rgb = to_float32(data.rgb)
        return data

    def to_uint8(self, inplace: bool = True) -> Self:
        """Convert pixels to uint8 with floor(x * 255 + 0.5)."""
        data = self if inplace else self.clone()
        if data.rgb.dtype != np.uint8:
            data.rgb = to_uint8(data.rgb)
        return data
