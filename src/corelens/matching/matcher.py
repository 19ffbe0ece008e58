"""Pattern Matcher — Scores a code object against the standards catalog.

Three independent strategies run, one per catalog entry kind:

1. **Interface:**   0.4 × table overlap + 0.3 × use-case overlap + 0.3 × name similarity
2. **Transaction:** 0.5 × table overlap + 0.5 × use-case overlap
3. **Pattern:**     fixed confidence from a rule-based detector

Matches at or below 0.3 are discarded; the rest are returned sorted by
confidence, highest first. Scoring is deterministic: the same analysis and
catalog always produce the same ranked list.
"""

import logging
from dataclasses import dataclass

from corelens.catalog.entries import CatalogEntry, EntryKind
from corelens.catalog.repository import StandardsCatalog
from corelens.corpus.base import CodeObject, ObjectAnalysis
from corelens.matching.detectors import DETECTORS
from corelens.matching.similarity import name_similarity, table_overlap, use_case_overlap

logger = logging.getLogger(__name__)

# Matches at or below this confidence are noise
MATCH_FLOOR = 0.3


@dataclass(frozen=True)
class PatternMatch:
    """A scored pairing of a code object with a catalog entry."""

    code_object: CodeObject
    entry: CatalogEntry
    confidence: float  # 0-1
    matched_features: tuple[str, ...]
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "object_id": self.code_object.id,
            "entry_id": self.entry.id,
            "kind": self.entry.kind.value,
            "confidence": round(self.confidence, 4),
            "matched_features": list(self.matched_features),
            "reasoning": self.reasoning,
        }


def _reasoning(reasons: list[str], fallback: str) -> str:
    return ". ".join(reasons) + "." if reasons else fallback


class PatternMatcher:
    """Find standard alternatives for a single analyzed code object."""

    def __init__(self, catalog: StandardsCatalog):
        self.catalog = catalog
        self._strategies = {
            EntryKind.INTERFACE: self.score_interface,
            EntryKind.TRANSACTION: self.score_transaction,
            EntryKind.PATTERN: self.score_pattern,
        }

    def find_standard_alternatives(self, analysis: ObjectAnalysis) -> list[PatternMatch]:
        """
        Score every catalog entry for the object's module.

        Args:
            analysis: Extracted features of one code object

        Returns:
            Matches above the noise floor, sorted by confidence descending
        """
        matches = []
        for entry in self.catalog.get_by_module(analysis.module):
            strategy = self._strategies.get(entry.kind)
            if strategy is None:
                raise ValueError(f"No matching strategy for entry kind {entry.kind!r}")
            match = strategy(analysis, entry)
            if match.confidence > MATCH_FLOOR:
                matches.append(match)

        matches.sort(key=lambda m: m.confidence, reverse=True)
        logger.debug(
            "%s: %d match(es) above %.1f", analysis.code_object.id, len(matches), MATCH_FLOOR
        )
        return matches

    # ── Strategies ─────────────────────────────────────────────

    def score_interface(self, analysis: ObjectAnalysis, entry: CatalogEntry) -> PatternMatch:
        features = []
        reasons = []

        tables = table_overlap(analysis.tables, entry.related_resources)
        if tables > 0:
            features.append(f"Uses {tables:.0%} of related tables")
            reasons.append(f"Custom code uses tables: {', '.join(analysis.tables)}")

        use_cases = use_case_overlap(analysis.operations, entry.use_cases)
        if use_cases > 0:
            features.append(f"Matches {use_cases:.0%} of use cases")
            reasons.append(f"Operations align with: {', '.join(entry.use_cases[:2])}")

        names = name_similarity(analysis.name or "", entry.name)
        if names > 0.5:
            features.append(f"Name similarity: {names:.0%}")
            reasons.append(f"Name '{analysis.name}' similar to '{entry.name}'")

        confidence = min(0.4 * tables + 0.3 * use_cases + 0.3 * names, 1.0)
        return PatternMatch(
            code_object=analysis.code_object,
            entry=entry,
            confidence=confidence,
            matched_features=tuple(features),
            reasoning=_reasoning(reasons, "No strong match found."),
        )

    def score_transaction(self, analysis: ObjectAnalysis, entry: CatalogEntry) -> PatternMatch:
        features = []
        reasons = []

        tables = table_overlap(analysis.tables, entry.related_resources)
        if tables > 0:
            features.append(f"Uses {tables:.0%} of related tables")
            reasons.append(f"Accesses same tables as {entry.name}")

        use_cases = use_case_overlap(analysis.operations, entry.use_cases)
        if use_cases > 0:
            features.append(f"Matches {use_cases:.0%} of use cases")
            reasons.append(f"Functionality aligns with {entry.name}")

        confidence = min(0.5 * tables + 0.5 * use_cases, 1.0)
        return PatternMatch(
            code_object=analysis.code_object,
            entry=entry,
            confidence=confidence,
            matched_features=tuple(features),
            reasoning=_reasoning(reasons, "Limited match with transaction."),
        )

    def score_pattern(self, analysis: ObjectAnalysis, entry: CatalogEntry) -> PatternMatch:
        detector = DETECTORS.get(entry.id)
        if detector is not None and detector.detect(analysis):
            return PatternMatch(
                code_object=analysis.code_object,
                entry=entry,
                confidence=detector.confidence,
                matched_features=(detector.feature,),
                reasoning=detector.reasoning + ".",
            )
        return PatternMatch(
            code_object=analysis.code_object,
            entry=entry,
            confidence=0.0,
            matched_features=(),
            reasoning="Pattern not detected in code.",
        )
