"""Operation specifications for balance parameters.

This module defines the OperationSpec dataclass that specifies parameter
ranges, defaults, and neutral values for balance operations.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OperationSpec:
    """Specification for a balance parameter.

    The valid range is half-open: [min_value, max_value).

    Attributes:
        name: Parameter name (e.g., "saturation_low")
        min_value: Minimum allowed value (inclusive)
        max_value: Upper limit (exclusive)
        default: Default value when not specified
        neutral: Value that causes no saturation
        description: Human-readable description
    """

    name: str
    min_value: float
    max_value: float
    default: float
    neutral: float
    description: str = ""

    def check(self, value: float) -> float:
        """Reject values outside [min_value, max_value).

        :param value: Value to check
        :returns: Value as float
        :raises ValueError: If value is not a number or is out of range
        """
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ValueError(f"{self.name}: expected number, got {type(value).__name__}")
        if not (self.min_value <= value < self.max_value):
            raise ValueError(
                f"{self.name}={value} is outside valid range "
                f"[{self.min_value}, {self.max_value})"
            )
        return float(value)

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check if value is effectively neutral (no saturation).

        :param value: Value to check
        :param tolerance: Tolerance for floating point comparison
        :returns: True if value is within tolerance of neutral
        """
        return abs(value - self.neutral) < tolerance

    def __repr__(self) -> str:
        return (
            f"OperationSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}), "
            f"default={self.default}, neutral={self.neutral})"
        )
