"""
Abstract base class for the packaging calculators.

Input: ProductData (plus CalculationResults for the projections)
Output: CalculationResults or a plain dict for the projections
"""

import math
from abc import ABC, abstractmethod


class BaseCalculator(ABC):
    """All packaging calculators inherit from this."""

    DEFAULT_PALLET_MAX_HEIGHT = 1800.0  # mm

    @abstractmethod
    def calculate(self, data, *args, **kwargs):
        pass

    # --- Arithmetic helpers ---
    # Division follows IEEE float semantics: x/0 is +-inf, 0/0 is nan.
    # floor/ceil pass non-finite values through instead of raising.

    def divide(self, numerator: float, denominator: float) -> float:
        if denominator == 0:
            if numerator == 0 or math.isnan(numerator):
                return math.nan
            return math.copysign(math.inf, numerator)
        return numerator / denominator

    def floor(self, value):
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return math.floor(value)

    def ceil(self, value):
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return math.ceil(value)

    def fit_count(self, space: float, item: float):
        """Whole items that fit along one axis — no rotation, leftover is waste."""
        return self.floor(self.divide(space, item))

    def percentage(self, part: float, whole: float) -> float:
        """Raw percentage, never clamped to [0, 100]."""
        return self.divide(part, whole) * 100

    def volume(self, width: float, length: float, height: float) -> float:
        return width * length * height
