"""Savings Calculator — Cost, effort and ROI projections for consolidation.

Given the redundancy pairs of a corpus and its total size, the calculator
projects:

    - LOC before/after consolidation and the percentage reduction
    - Consolidation effort (per-pair hours: Low 2, Medium 4, High 8)
    - Maintenance hours saved per year and the break-even point
    - Consolidation cost, annual savings and three-year ROI
    - A complexity score before and after: log10(LOC + 1) × 100 + pairs × 10

It also ranks pairs (priority score, quick wins) and builds a bounded
consolidation plan. All rates and thresholds come from SavingsConfig.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from corelens.config import SavingsConfig, SimilarityBands
from corelens.effort import Effort
from corelens.recommendations.generator import Recommendation, Status
from corelens.redundancy.detector import RedundancyPair

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SavingsProjection:
    current_loc: int
    after_consolidation_loc: int
    loc_savings: int
    percentage_reduction: float
    consolidation_hours: float
    maintenance_hours_saved_per_year: float
    break_even_months: float  # inf when nothing is saved but effort is spent
    consolidation_cost: float
    annual_maintenance_savings: float
    three_year_roi: float  # percent
    current_complexity: int
    reduced_complexity: int
    complexity_reduction: float  # percent
    standard_loc_savings: int = 0  # from fit-to-standard recommendations
    # Pair savings summed past current_loc; after/percentage are clamped
    overlapping_savings: bool = False

    def to_dict(self) -> dict:
        return {
            "lines_of_code": {
                "current": self.current_loc,
                "after_consolidation": self.after_consolidation_loc,
                "savings": self.loc_savings,
                "percentage_reduction": round(self.percentage_reduction, 2),
                "standard_savings": self.standard_loc_savings,
                "overlapping_savings": self.overlapping_savings,
            },
            "effort": {
                "consolidation_hours": self.consolidation_hours,
                "maintenance_hours_saved_per_year": self.maintenance_hours_saved_per_year,
                "break_even_months": (
                    None if math.isinf(self.break_even_months)
                    else round(self.break_even_months, 2)
                ),
            },
            "cost": {
                "consolidation_cost": self.consolidation_cost,
                "annual_maintenance_savings": self.annual_maintenance_savings,
                "three_year_roi": round(self.three_year_roi, 2),
            },
            "complexity": {
                "current": self.current_complexity,
                "reduced": self.reduced_complexity,
                "reduction": round(self.complexity_reduction, 2),
            },
        }


@dataclass(frozen=True)
class ConsolidationItem:
    names: tuple[str, str]
    similarity: float
    effort: str
    savings: int
    action: str


@dataclass(frozen=True)
class ConsolidationPlan:
    priority: str  # high / medium / low
    items: tuple[ConsolidationItem, ...]
    total_savings: int
    estimated_effort_hours: float

    @property
    def estimated_effort(self) -> str:
        return f"{math.ceil(self.estimated_effort_hours)} hours"

    def to_dict(self) -> dict:
        return {
            "priority": self.priority,
            "items": [
                {
                    "names": list(item.names),
                    "similarity": round(item.similarity, 4),
                    "effort": item.effort,
                    "savings": item.savings,
                    "action": item.action,
                }
                for item in self.items
            ],
            "total_savings": self.total_savings,
            "estimated_effort": self.estimated_effort,
        }


@dataclass(frozen=True)
class SavingsBreakdown:
    redundancies: int = 0
    loc_savings: int = 0
    effort_hours: float = 0


@dataclass(frozen=True)
class DetailedSavings:
    by_module: dict  # module -> SavingsBreakdown
    by_type: dict    # object type -> SavingsBreakdown
    by_similarity: dict  # band -> SavingsBreakdown


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------

class SavingsCalculator:
    """Aggregate projections over redundancy pairs."""

    def __init__(
        self,
        config: Optional[SavingsConfig] = None,
        bands: Optional[SimilarityBands] = None,
    ):
        self.config = config or SavingsConfig()
        self.bands = bands or SimilarityBands()

    def effort_hours(self, pair: RedundancyPair) -> float:
        return self.config.effort_hours[pair.savings.effort.value]

    def consolidation_hours(self, pairs: Sequence[RedundancyPair]) -> float:
        return sum(self.effort_hours(p) for p in pairs)

    @staticmethod
    def complexity_score(loc: int, redundancy_count: int) -> int:
        return round(math.log10(max(loc, 0) + 1) * 100 + redundancy_count * 10)

    def calculate_projection(
        self,
        pairs: Sequence[RedundancyPair],
        total_loc: int,
        recommendations: Optional[Sequence[Recommendation]] = None,
    ) -> SavingsProjection:
        """
        Project the payoff of consolidating every redundancy pair.

        Args:
            pairs: Redundancy detector output
            total_loc: Lines of code across the whole corpus
            recommendations: Optional fit-to-standard output; the LOC of
                             non-rejected recommendations is reported separately

        Returns:
            SavingsProjection

        Raises:
            ValueError: If total_loc is negative
        """
        if total_loc < 0:
            raise ValueError("total_loc must be >= 0")
        cfg = self.config

        loc_savings = sum(p.savings.loc_reduction for p in pairs)
        # Overlapping pairs can claim more than the corpus holds
        overlapping = loc_savings > total_loc
        if overlapping:
            logger.warning(
                "Pair savings (%d LOC) exceed the corpus (%d LOC); "
                "clamping remaining LOC to 0 and reduction to 100%%",
                loc_savings, total_loc,
            )
        after = max(total_loc - loc_savings, 0)
        percentage = min(loc_savings / total_loc * 100, 100.0) if total_loc else 0.0

        hours = self.consolidation_hours(pairs)
        maintenance_hours = loc_savings * cfg.maintenance_hours_per_loc
        if maintenance_hours > 0:
            break_even = hours / maintenance_hours * 12
        else:
            break_even = math.inf if hours > 0 else 0.0

        cost = hours * cfg.hourly_rate
        annual = maintenance_hours * cfg.hourly_rate
        roi = (annual * 3 - cost) / cost * 100 if cost > 0 else 0.0

        current_complexity = self.complexity_score(total_loc, len(pairs))
        reduced_complexity = self.complexity_score(after, 0)
        if current_complexity > 0:
            complexity_reduction = (current_complexity - reduced_complexity) / current_complexity * 100
        else:
            complexity_reduction = 0.0

        standard_savings = sum(
            r.savings.loc_reduction
            for r in recommendations or ()
            if r.status is not Status.REJECTED
        )

        return SavingsProjection(
            current_loc=total_loc,
            after_consolidation_loc=after,
            loc_savings=loc_savings,
            percentage_reduction=percentage,
            consolidation_hours=hours,
            maintenance_hours_saved_per_year=maintenance_hours,
            break_even_months=break_even,
            consolidation_cost=cost,
            annual_maintenance_savings=annual,
            three_year_roi=roi,
            current_complexity=current_complexity,
            reduced_complexity=reduced_complexity,
            complexity_reduction=complexity_reduction,
            standard_loc_savings=standard_savings,
            overlapping_savings=overlapping,
        )

    def calculate_detailed_savings(self, pairs: Sequence[RedundancyPair]) -> DetailedSavings:
        """Break savings down by module, object type and similarity band."""
        by_module: dict[str, SavingsBreakdown] = {}
        by_type: dict[str, SavingsBreakdown] = {}
        by_similarity = {band: SavingsBreakdown() for band in ("very_high", "high", "medium")}

        def add(bucket: dict, key: str, pair: RedundancyPair) -> None:
            current = bucket.get(key, SavingsBreakdown())
            bucket[key] = SavingsBreakdown(
                redundancies=current.redundancies + 1,
                loc_savings=current.loc_savings + pair.savings.loc_reduction,
                effort_hours=current.effort_hours + self.effort_hours(pair),
            )

        for pair in pairs:
            add(by_module, pair.first.module.value, pair)
            add(by_type, pair.first.type, pair)
            band = self.bands.band_for(pair.similarity)
            if band is not None:
                add(by_similarity, band, pair)

        return DetailedSavings(by_module=by_module, by_type=by_type, by_similarity=by_similarity)

    # ── Ranking ────────────────────────────────────────────────

    def priority_score(self, pair: RedundancyPair) -> float:
        """Savings + similarity × 100 − effort hours × 10. Higher is more urgent."""
        return pair.savings.loc_reduction + pair.similarity * 100 - self.effort_hours(pair) * 10

    def rank_by_priority(self, pairs: Sequence[RedundancyPair]) -> list[RedundancyPair]:
        return sorted(pairs, key=self.priority_score, reverse=True)

    def identify_quick_wins(self, pairs: Sequence[RedundancyPair]) -> list[RedundancyPair]:
        """Low-effort pairs saving at least 50 LOC, biggest savings first (top 5)."""
        cfg = self.config
        wins = [
            p for p in pairs
            if p.savings.effort is Effort.LOW and p.savings.loc_reduction >= cfg.quick_win_min_loc
        ]
        wins.sort(key=lambda p: p.savings.loc_reduction, reverse=True)
        return wins[: cfg.quick_win_limit]

    def generate_consolidation_plan(self, pairs: Sequence[RedundancyPair]) -> ConsolidationPlan:
        """Top pairs by LOC savings with an overall priority and effort estimate."""
        cfg = self.config
        ordered = sorted(pairs, key=lambda p: p.savings.loc_reduction, reverse=True)
        items = tuple(
            ConsolidationItem(
                names=p.names,
                similarity=p.similarity,
                effort=p.savings.effort.value,
                savings=p.savings.loc_reduction,
                action=p.recommendation,
            )
            for p in ordered[: cfg.plan_size]
        )

        total = sum(p.savings.loc_reduction for p in pairs)
        if total > cfg.plan_high_priority_loc:
            priority = "high"
        elif total > cfg.plan_medium_priority_loc:
            priority = "medium"
        else:
            priority = "low"

        return ConsolidationPlan(
            priority=priority,
            items=items,
            total_savings=total,
            estimated_effort_hours=self.consolidation_hours(pairs),
        )

    def generate_summary(self, projection: SavingsProjection) -> str:
        """Plain-text summary of a projection."""
        p = projection
        if math.isinf(p.break_even_months):
            break_even = "never (no maintenance savings)"
        else:
            break_even = f"{p.break_even_months:.1f} months"

        lines = [
            f"Consolidating redundant code will save {p.loc_savings:,} lines of code "
            f"({p.percentage_reduction:.1f}% reduction).",
            "",
            f"This requires {p.consolidation_hours:.0f} hours of effort "
            f"(${p.consolidation_cost:,.2f}) but will save "
            f"{p.maintenance_hours_saved_per_year:.0f} hours per year in maintenance.",
            "",
            f"Break-even point: {break_even}",
            f"3-year ROI: {p.three_year_roi:.0f}%",
            f"Annual savings: ${p.annual_maintenance_savings:,.2f}",
        ]
        if p.overlapping_savings:
            lines.append(
                "Note: redundancy pairs overlap, so the raw savings exceed the corpus size; "
                "the reduction is capped at 100%."
            )
        if p.standard_loc_savings:
            lines.append(
                f"Adopting standard alternatives removes another {p.standard_loc_savings:,} lines."
            )
        return "\n".join(lines)
