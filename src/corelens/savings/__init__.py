"""Savings Module — ROI projections and consolidation plans."""

from corelens.savings.calculator import (
    ConsolidationItem,
    ConsolidationPlan,
    DetailedSavings,
    SavingsBreakdown,
    SavingsCalculator,
    SavingsProjection,
)

__all__ = [
    "ConsolidationItem",
    "ConsolidationPlan",
    "DetailedSavings",
    "SavingsBreakdown",
    "SavingsCalculator",
    "SavingsProjection",
]
