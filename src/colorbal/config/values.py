"""Balance mode and parameter values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from colorbal.config.balance import CONFIG
from colorbal.histogram.result import SaturationBudget


class BalanceMode(str, Enum):
    """Balance strategy.

    - RGB: stretch each of R, G, B independently
    - HSL / HSV: stretch the L / V axis, hue and saturation kept
    - HSI: stretch the I axis, then clip each channel to [0, 1]
    - YCBCR: stretch the Y (luma) axis, then clip each channel
    - IRGB_BOUNDED: stretch I = (R+G+B)/3, scale RGB by I'/I, clip
    - IRGB_PROJECTED: as IRGB_BOUNDED, but scale down by 1/max(R,G,B)
      instead of clipping, so the hue is kept
    - IRGB_ADJUSTED: one global affine map on I, per-pixel scale bounded
      so no channel leaves the cube
    - INTENSITY: iterative search of intensity bounds so the rebuilt
      uint8 image saturates at most the requested pixels per channel
    """

    RGB = "rgb"
    HSL = "hsl"
    HSV = "hsv"
    HSI = "hsi"
    YCBCR = "ycbcr"
    IRGB_BOUNDED = "irgb_bounded"
    IRGB_PROJECTED = "irgb_projected"
    IRGB_ADJUSTED = "irgb_adjusted"
    INTENSITY = "intensity"

    @classmethod
    def from_name(cls, name: str | BalanceMode) -> BalanceMode:
        """Look up a mode by keyword (case-insensitive).

        ``irgb`` and ``hsi_bounded`` are accepted as aliases of ``irgb_bounded``.

        :param name: Mode keyword or BalanceMode
        :returns: BalanceMode
        :raises ValueError: If the keyword is unknown
        """
        if isinstance(name, BalanceMode):
            return name
        key = name.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            available = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown balance mode '{name}'. Available: {available}") from None

    @property
    def is_integer(self) -> bool:
        """True if the strategy works on uint8 samples."""
        return self is BalanceMode.INTENSITY


_ALIASES = {
    "irgb": "irgb_bounded",
    "hsi_bounded": "irgb_bounded",
    "intensity_iterative": "intensity",
    "intensity-iterative": "intensity",
}


@dataclass
class BalanceValues:
    """Balance parameters: mode and saturation percentages.

    Percentages must lie in [0, 100); they are converted to pixel counts
    per image with nb = floor(N * S / 100).

    Example:
        >>> values = BalanceValues(mode="hsl", saturation_low=1.0, saturation_high=2.0)
        >>> values.budget(1000)
        SaturationBudget(nb_min=10, nb_max=20, n_samples=1000, clamped=False)
    """

    mode: BalanceMode | str = BalanceMode.RGB
    saturation_low: float = CONFIG.saturation_low.default
    saturation_high: float = CONFIG.saturation_high.default

    def __post_init__(self):
        self.mode = BalanceMode.from_name(self.mode)
        self.saturation_low = CONFIG.saturation_low.check(self.saturation_low)
        self.saturation_high = CONFIG.saturation_high.check(self.saturation_high)

    def budget(self, n_samples: int) -> SaturationBudget:
        """Saturation budget for an image of ``n_samples`` pixels.

        :param n_samples: Number of pixels N
        :returns: SaturationBudget
        """
        return SaturationBudget.from_percent(n_samples, self.saturation_low, self.saturation_high)

    def is_neutral(self) -> bool:
        """Check if no pixel may saturate.

        The image is still stretched to the full range in this case.

        :returns: True if both percentages are neutral
        """
        return CONFIG.saturation_low.is_neutral(
            self.saturation_low
        ) and CONFIG.saturation_high.is_neutral(self.saturation_high)

    def to_dict(self) -> dict:
        """Convert to a JSON-compatible dictionary."""
        return {
            "mode": self.mode.value,
            "saturation_low": self.saturation_low,
            "saturation_high": self.saturation_high,
        }
