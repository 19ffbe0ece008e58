"""Similarity primitives used by interface and transaction matching.

Every function here is pure and returns a value in [0, 1].
"""

from typing import Iterable

CRUD_KEYWORDS = ("create", "change", "display", "delete", "get", "post", "update")

# Use-case words must be longer than this to count as shared vocabulary
MIN_WORD_LENGTH = 3


def table_overlap(object_tables: Iterable[str], related_resources: Iterable[str]) -> float:
    """
    Fraction of the object's tables that the catalog entry also relates to.

    Comparison is case-insensitive and duplicates are ignored on both sides.

    Example:
        >>> table_overlap(["VBAK", "VBAP"], ["VBAK", "VBAP", "VBEP"])
        1.0
    """
    ours = {t.strip().upper() for t in object_tables if t and t.strip()}
    theirs = {r.strip().upper() for r in related_resources if r and r.strip()}
    if not ours or not theirs:
        return 0.0
    return len(ours & theirs) / len(ours)


def _significant_words(text: str) -> set[str]:
    return {word for word in text.lower().split() if len(word) > MIN_WORD_LENGTH}


def use_case_overlap(operations: Iterable[str], use_cases: Iterable[str]) -> float:
    """
    Fraction of operation labels that share a significant word with some use case.

    A word is significant when it is longer than three characters.

    Example:
        >>> use_case_overlap(["pricing calculation", "read data"], ["Modify pricing"])
        0.5
    """
    operations = [op for op in operations if op]
    use_case_words = [_significant_words(uc) for uc in use_cases if uc]
    if not operations or not use_case_words:
        return 0.0

    matched = 0
    for operation in operations:
        words = _significant_words(operation)
        if any(words & uc_words for uc_words in use_case_words):
            matched += 1

    return matched / len(operations)


def levenshtein_distance(s1: str, s2: str) -> int:
    """Minimum number of single-character edits turning s1 into s2."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            cost = 0 if c1 == c2 else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current

    return previous[-1]


def levenshtein_similarity(s1: str, s2: str) -> float:
    """1 - distance / longest length; two empty strings are identical."""
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(s1, s2) / longest


def name_similarity(name1: str, name2: str) -> float:
    """
    Heuristic similarity between a custom object name and a standard name.

    Tiers:
        0.8  one name contains the other (case-insensitive)
        0.6  both names contain the same CRUD keyword
        else normalized Levenshtein similarity
    """
    s1 = (name1 or "").lower()
    s2 = (name2 or "").lower()
    if not s1 or not s2:
        return 0.0

    if s1 in s2 or s2 in s1:
        return 0.8

    for keyword in CRUD_KEYWORDS:
        if keyword in s1 and keyword in s2:
            return 0.6

    return levenshtein_similarity(s1, s2)
