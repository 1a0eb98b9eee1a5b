"""Result models — calculation output contracts."""

from clinic_cost.models.results import (
    BreakEvenPoint,
    CalculationResult,
    PricePoint,
)

__all__ = [
    "BreakEvenPoint",
    "CalculationResult",
    "PricePoint",
]
