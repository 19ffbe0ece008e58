"""Recommendations Module — Fit-to-standard suggestions with savings estimates."""

from corelens.recommendations.generator import (
    FitToStandardGenerator,
    Recommendation,
    StandardSavings,
    Status,
)

__all__ = ["FitToStandardGenerator", "Recommendation", "StandardSavings", "Status"]
