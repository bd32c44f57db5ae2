"""Balance operation configuration.

This module defines the standardized parameter specifications for the
saturation percentages shared by every balance mode.
"""

from __future__ import annotations

from dataclasses import dataclass

from colorbal.config.operations import OperationSpec


@dataclass(frozen=True)
class BalanceConfig:
    """Configuration for all balance parameters.

    Attributes:
        saturation_low: Percentage of pixels saturated to the low end
        saturation_high: Percentage of pixels saturated to the high end
        max_value: Largest uint8 channel value
    """

    saturation_low: OperationSpec = OperationSpec(
        name="saturation_low",
        min_value=0.0,
        max_value=100.0,
        default=1.0,
        neutral=0.0,
        description="Percentage of pixels saturated to black, in [0, 100)",
    )

    saturation_high: OperationSpec = OperationSpec(
        name="saturation_high",
        min_value=0.0,
        max_value=100.0,
        default=1.0,
        neutral=0.0,
        description="Percentage of pixels saturated to white, in [0, 100)",
    )

    max_value: int = 255

    def get_all_specs(self) -> dict[str, OperationSpec]:
        """Get all parameter specs.

        :return: Dictionary mapping parameter names to specs
        """
        return {
            "saturation_low": self.saturation_low,
            "saturation_high": self.saturation_high,
        }


# Main singleton instance
CONFIG = BalanceConfig()
