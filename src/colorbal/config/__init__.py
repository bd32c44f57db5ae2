"""Configuration module for colorbal.

Usage:
    from colorbal.config import CONFIG, BalanceValues
    CONFIG.saturation_low.default  # 1.0
    values = BalanceValues(mode="hsl", saturation_low=0.5, saturation_high=0.5)
"""

from colorbal.config.balance import CONFIG, BalanceConfig
from colorbal.config.operations import OperationSpec
from colorbal.config.presets import (
    BALANCE_PRESETS,
    CONTRAST_STRONG,
    GENTLE,
    INTENSITY_SAFE,
    LIGHTNESS,
    SIMPLEST,
    balance_from_dict,
    get_balance_preset,
    load_balance_json,
)
from colorbal.config.values import BalanceMode, BalanceValues

__all__ = [
    "CONFIG",
    "BalanceConfig",
    "OperationSpec",
    "BalanceMode",
    "BalanceValues",
    "BALANCE_PRESETS",
    "SIMPLEST",
    "GENTLE",
    "LIGHTNESS",
    "INTENSITY_SAFE",
    "CONTRAST_STRONG",
    "get_balance_preset",
    "balance_from_dict",
    "load_balance_json",
]
