"""Matching Module — Scores code objects against catalog entries.

Usage:
    from corelens.catalog import default_catalog
    from corelens.corpus import analyze
    from corelens.matching import PatternMatcher

    matcher = PatternMatcher(default_catalog())
    matches = matcher.find_standard_alternatives(analyze(code_object))
"""

from corelens.matching.matcher import MATCH_FLOOR, PatternMatch, PatternMatcher
from corelens.matching.similarity import (
    levenshtein_distance,
    name_similarity,
    table_overlap,
    use_case_overlap,
)

__all__ = [
    "MATCH_FLOOR",
    "PatternMatch",
    "PatternMatcher",
    "levenshtein_distance",
    "name_similarity",
    "table_overlap",
    "use_case_overlap",
]
