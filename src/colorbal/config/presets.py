"""Named balance presets and JSON loading."""

from __future__ import annotations

import json
from pathlib import Path

from colorbal.config.values import BalanceMode, BalanceValues

# ============================================================================
# Balance Presets
# ============================================================================

SIMPLEST = BalanceValues(BalanceMode.RGB, saturation_low=1.0, saturation_high=1.0)

GENTLE = BalanceValues(BalanceMode.RGB, saturation_low=0.5, saturation_high=0.5)

LIGHTNESS = BalanceValues(BalanceMode.HSL, saturation_low=1.0, saturation_high=1.0)

INTENSITY_SAFE = BalanceValues(BalanceMode.INTENSITY, saturation_low=1.0, saturation_high=1.0)

CONTRAST_STRONG = BalanceValues(BalanceMode.IRGB_ADJUSTED, saturation_low=3.0, saturation_high=3.0)

BALANCE_PRESETS: dict[str, BalanceValues] = {
    "simplest": SIMPLEST,
    "gentle": GENTLE,
    "lightness": LIGHTNESS,
    "intensity_safe": INTENSITY_SAFE,
    "contrast_strong": CONTRAST_STRONG,
}


def get_balance_preset(name: str) -> BalanceValues:
    """Get balance preset by name.

    :param name: Preset name (case-insensitive)
    :returns: BalanceValues preset (a copy, safe to modify)
    :raises KeyError: If preset not found
    """
    name_lower = name.lower()
    if name_lower not in BALANCE_PRESETS:
        available = ", ".join(BALANCE_PRESETS.keys())
        raise KeyError(f"Unknown balance preset '{name}'. Available: {available}")
    preset = BALANCE_PRESETS[name_lower]
    return BalanceValues(preset.mode, preset.saturation_low, preset.saturation_high)


def balance_from_dict(d: dict) -> BalanceValues:
    """Create BalanceValues from dictionary.

    Unknown keys are ignored.

    :param d: Dictionary with balance parameters
    :returns: BalanceValues instance

    Example:
        >>> values = balance_from_dict({"mode": "hsv", "saturation_low": 0.5})
    """
    valid_fields = {"mode", "saturation_low", "saturation_high"}
    kwargs = {k: v for k, v in d.items() if k in valid_fields}
    return BalanceValues(**kwargs)


def load_balance_json(path: str | Path) -> BalanceValues:
    """Load BalanceValues from JSON file.

    :param path: Path to JSON file
    :returns: BalanceValues instance
    """
    with open(path) as f:
        d = json.load(f)
    return balance_from_dict(d)
