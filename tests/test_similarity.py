"""Tests for the similarity primitives."""

import pytest

from corelens.matching import levenshtein_distance, name_similarity, table_overlap, use_case_overlap
from corelens.matching.similarity import levenshtein_similarity


class TestTableOverlap:
    """Tests for table overlap."""

    def test_full_overlap(self):
        assert table_overlap(["VBAK", "VBAP"], ["VBAK", "VBAP", "VBEP"]) == 1.0

    def test_partial_overlap(self):
        assert table_overlap(["VBAK", "MARA"], ["VBAK", "VBAP"]) == 0.5

    def test_case_insensitive_and_deduplicated(self):
        """Table names compare case-insensitively, once each."""
        assert table_overlap(["vbak", "VBAK", "Vbap"], ["VBAK", "vbap"]) == 1.0

    def test_empty_sides(self):
        """An empty side gives zero overlap."""
        assert table_overlap([], ["VBAK"]) == 0.0
        assert table_overlap(["VBAK"], []) == 0.0

    def test_in_unit_range(self):
        value = table_overlap(["A", "B", "C"], ["A", "X"])
        assert 0.0 <= value <= 1.0


class TestUseCaseOverlap:
    """Tests for use-case overlap."""

    def test_docstring_example(self):
        assert use_case_overlap(["pricing calculation", "read data"], ["Modify pricing"]) == 0.5

    def test_short_words_ignored(self):
        """Words of three letters or fewer never match."""
        # "get" and "the" are too short to count
        assert use_case_overlap(["get the"], ["get the order"]) == 0.0

    def test_all_matched(self):
        ops = ["create record", "update record"]
        use_cases = ["Create sales orders", "Update order quantities"]
        assert use_case_overlap(ops, use_cases) == 1.0

    def test_empty(self):
        assert use_case_overlap([], ["Anything here"]) == 0.0
        assert use_case_overlap(["read data"], []) == 0.0


class TestLevenshtein:
    """Tests for edit distance."""

    @pytest.mark.parametrize("s1,s2,expected", [
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("same", "same", 0),
        ("flaw", "lawn", 2),
    ])
    def test_distance(self, s1, s2, expected):
        assert levenshtein_distance(s1, s2) == expected

    def test_symmetric(self):
        assert levenshtein_distance("order", "border") == levenshtein_distance("border", "order")

    def test_similarity(self):
        """Similarity is one minus normalized distance."""
        assert levenshtein_similarity("", "") == 1.0
        assert levenshtein_similarity("abcd", "abcd") == 1.0
        assert levenshtein_similarity("abcd", "wxyz") == 0.0


class TestNameSimilarity:
    """Tests for the tiered name heuristic."""

    def test_substring(self):
        """A name contained in the other scores high."""
        assert name_similarity("SALESORDER_CHANGE", "BAPI_SALESORDER_CHANGE") == 0.8

    def test_shared_crud_keyword(self):
        """Shared CRUD verbs lift the score."""
        assert name_similarity("Z_CREATE_ORDER", "BAPI_PO_CREATE1") == 0.6

    def test_levenshtein_fallback(self):
        value = name_similarity("ZABC", "ZABD")
        assert value == pytest.approx(0.75)

    def test_empty_name(self):
        assert name_similarity("", "VA01") == 0.0
        assert name_similarity(None, "VA01") == 0.0
