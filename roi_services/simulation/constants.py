from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class CalculationConstants:
    automated_cost_per_invoice: float = 0.20
    error_rate_auto: float = 0.1        # percent
    min_roi_boost_factor: float = 1.1   # flat multiplier on monthly savings


DEFAULT_CONSTANTS = CalculationConstants()

# Reported instead of a number when there is no implementation cost to recover.
ROI_INFINITE = "Infinite"
