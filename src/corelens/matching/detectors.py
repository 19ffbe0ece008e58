"""Pattern detectors — rule-based triggers for Pattern-kind catalog entries.

Each detector inspects the raw text and operation labels of an analysis and
returns True when its pattern is present. A triggered detector contributes a
fixed confidence for the entry it is registered against.
"""

from dataclasses import dataclass
from typing import Callable

from corelens.catalog.standards import (
    AUTHORIZATION_OBJECT,
    BATCH_INPUT,
    NUMBER_RANGE,
    PRICING_PROCEDURE,
)
from corelens.corpus.base import ObjectAnalysis


PRICING_KEYWORDS = ("price", "pricing", "discount", "condition", "konv", "konh")
PRICING_TABLES = {"KONV", "KONH", "A304", "A305"}
AUTH_KEYWORDS = ("authority-check", "authorization", "auth", "actvt")
NUMBER_KEYWORDS = ("number_get_next", "number range", "nriv", "tnro")
BATCH_KEYWORDS = ("loop at", "batch", "mass", "bulk")


def _operations_mention(analysis: ObjectAnalysis, keywords: tuple[str, ...]) -> bool:
    return any(
        keyword in operation.lower()
        for operation in analysis.operations
        for keyword in keywords
    )


def detects_pricing_logic(analysis: ObjectAnalysis) -> bool:
    has_tables = any(table.upper() in PRICING_TABLES for table in analysis.tables)
    return has_tables or _operations_mention(analysis, PRICING_KEYWORDS)


def detects_authorization_checks(analysis: ObjectAnalysis) -> bool:
    return (
        "authority-check" in analysis.code.lower()
        or _operations_mention(analysis, AUTH_KEYWORDS)
    )


def detects_number_generation(analysis: ObjectAnalysis) -> bool:
    return (
        "number_get_next" in analysis.code.lower()
        or _operations_mention(analysis, NUMBER_KEYWORDS)
    )


def detects_batch_processing(analysis: ObjectAnalysis) -> bool:
    return (
        "loop at" in analysis.code.lower()
        or _operations_mention(analysis, BATCH_KEYWORDS)
    )


@dataclass(frozen=True)
class PatternDetector:
    detect: Callable[[ObjectAnalysis], bool]
    confidence: float
    feature: str
    reasoning: str


DETECTORS: dict[str, PatternDetector] = {
    PRICING_PROCEDURE: PatternDetector(
        detects_pricing_logic, 0.8,
        "Pricing calculations detected",
        "Custom pricing logic can be replaced with the standard pricing procedure",
    ),
    AUTHORIZATION_OBJECT: PatternDetector(
        detects_authorization_checks, 0.7,
        "Authorization checks detected",
        "Custom authorization can use standard authorization objects",
    ),
    NUMBER_RANGE: PatternDetector(
        detects_number_generation, 0.75,
        "Number generation detected",
        "Custom numbering can use standard number range objects",
    ),
    BATCH_INPUT: PatternDetector(
        detects_batch_processing, 0.6,
        "Batch processing detected",
        "Custom batch logic can use the standard batch input framework",
    ),
}
