"""Fit-to-Standard Generator — Turns pattern matches into recommendations.

For every match above the confidence threshold the generator derives:

    - A description (from the match reasoning)
    - Benefits (from the entry's compliance flag and use cases)
    - Savings: LOC reduction proportional to object size × confidence,
      maintenance and complexity reduction scaled by confidence
    - Effort from the LOC reduction (>150 High, 50-150 Medium, <50 Low)
    - A markdown implementation guide from the entry's template

Status starts as Recommended; callers move it on after user action.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from corelens.catalog.entries import CatalogEntry
from corelens.catalog.guides import format_guide_as_markdown, get_implementation_guide
from corelens.catalog.repository import StandardsCatalog
from corelens.config import FitToStandardConfig
from corelens.corpus.base import CodeObject, ObjectAnalysis
from corelens.effort import Effort
from corelens.matching.matcher import PatternMatch, PatternMatcher


class Status(str, Enum):
    RECOMMENDED = "Recommended"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    IMPLEMENTED = "Implemented"


@dataclass(frozen=True)
class StandardSavings:
    loc_reduction: int
    maintenance_reduction_pct: float
    complexity_reduction_pct: float


@dataclass(frozen=True)
class Recommendation:
    """A suggestion to replace a custom object with a standard alternative.

    Only ``status`` changes after creation, and only through the transition
    methods.
    """

    id: str
    code_object: CodeObject
    entry: CatalogEntry
    confidence: float
    description: str
    benefits: tuple[str, ...]
    effort: Effort
    savings: StandardSavings
    implementation_guide: str
    status: Status = field(default=Status.RECOMMENDED, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "benefits", tuple(self.benefits))
        object.__setattr__(self, "status", Status(self.status))

    def accept(self) -> None:
        self._transition(Status.ACCEPTED, {Status.RECOMMENDED, Status.REJECTED})

    def reject(self) -> None:
        self._transition(Status.REJECTED, {Status.RECOMMENDED, Status.ACCEPTED})

    def mark_implemented(self) -> None:
        self._transition(Status.IMPLEMENTED, {Status.ACCEPTED})

    def _transition(self, target: Status, allowed_from: set[Status]) -> None:
        if self.status not in allowed_from:
            raise ValueError(
                f"Cannot move recommendation {self.id} from {self.status.value} to {target.value}"
            )
        object.__setattr__(self, "status", target)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "object_id": self.code_object.id,
            "object_name": self.code_object.name,
            "standard_id": self.entry.id,
            "standard_name": self.entry.name,
            "standard_kind": self.entry.kind.value,
            "confidence": round(self.confidence, 4),
            "description": self.description,
            "benefits": list(self.benefits),
            "effort": self.effort.value,
            "savings": {
                "loc_reduction": self.savings.loc_reduction,
                "maintenance_reduction_pct": self.savings.maintenance_reduction_pct,
                "complexity_reduction_pct": self.savings.complexity_reduction_pct,
            },
            "implementation_guide": self.implementation_guide,
            "status": self.status.value,
        }


class FitToStandardGenerator:
    """Build ranked recommendations from pattern matches."""

    def __init__(
        self,
        catalog: StandardsCatalog,
        config: Optional[FitToStandardConfig] = None,
    ):
        self.catalog = catalog
        self.config = config or FitToStandardConfig()
        self.matcher = PatternMatcher(catalog)

    def recommend(
        self,
        analysis: ObjectAnalysis,
        min_confidence: Optional[float] = None,
        max_recommendations: Optional[int] = None,
    ) -> list[Recommendation]:
        """Match one analyzed object and turn the matches into recommendations."""
        matches = self.matcher.find_standard_alternatives(analysis)
        return self.generate_recommendations(matches, min_confidence, max_recommendations)

    def generate_recommendations(
        self,
        matches: list[PatternMatch],
        min_confidence: Optional[float] = None,
        max_recommendations: Optional[int] = None,
    ) -> list[Recommendation]:
        """
        Convert matches into recommendations.

        Args:
            matches: Output of the pattern matcher
            min_confidence: Keep matches with confidence >= this (default 0.5)
            max_recommendations: Truncate to this many (default unbounded)

        Returns:
            Recommendations sorted by confidence descending
        """
        if min_confidence is None:
            min_confidence = self.config.min_confidence
        if max_recommendations is None:
            max_recommendations = self.config.max_recommendations
        if max_recommendations is not None and max_recommendations < 0:
            raise ValueError("max_recommendations must be >= 0")

        kept = sorted(
            (m for m in matches if m.confidence >= min_confidence),
            key=lambda m: m.confidence,
            reverse=True,
        )
        if max_recommendations is not None:
            kept = kept[:max_recommendations]

        return [self.build_recommendation(match) for match in kept]

    def build_recommendation(self, match: PatternMatch) -> Recommendation:
        savings = self.estimate_savings(match)
        guide = get_implementation_guide(match.entry)
        obj = match.code_object

        return Recommendation(
            id=f"{obj.id}:{match.entry.id}",
            code_object=obj,
            entry=match.entry,
            confidence=match.confidence,
            description=(
                f"Replace custom {obj.type.lower()} {obj.name} with "
                f"{match.entry.kind.value.lower()} {match.entry.name}. {match.reasoning}"
            ),
            benefits=self._benefits(match.entry, savings),
            effort=self.classify_effort(savings.loc_reduction),
            savings=savings,
            implementation_guide=format_guide_as_markdown(guide),
        )

    # ── Estimates ──────────────────────────────────────────────

    def estimate_savings(self, match: PatternMatch) -> StandardSavings:
        cfg = self.config
        loc = match.code_object.line_count
        return StandardSavings(
            loc_reduction=int(round(loc * match.confidence * cfg.loc_reduction_factor)),
            maintenance_reduction_pct=round(cfg.maintenance_reduction_pct * match.confidence, 1),
            complexity_reduction_pct=round(cfg.complexity_reduction_pct * match.confidence, 1),
        )

    def classify_effort(self, loc_reduction: int) -> Effort:
        if loc_reduction > self.config.high_effort_loc:
            return Effort.HIGH
        if loc_reduction >= self.config.medium_effort_loc:
            return Effort.MEDIUM
        return Effort.LOW

    @staticmethod
    def _benefits(entry: CatalogEntry, savings: StandardSavings) -> tuple[str, ...]:
        benefits = []
        if entry.clean_core_compliant:
            benefits.append("Clean Core compliant and upgrade-safe")
            benefits.append("Maintained and supported as standard functionality")
        else:
            benefits.append("Standard functionality; review Clean Core impact before adopting")
        if entry.use_cases:
            benefits.append(f"Covers: {', '.join(entry.use_cases[:2])}")
        if savings.loc_reduction > 0:
            benefits.append(f"Removes about {savings.loc_reduction} lines of custom code")
        return tuple(benefits)
