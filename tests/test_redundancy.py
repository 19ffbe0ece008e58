"""Tests for the redundancy detector (fake providers, no model download)."""

import asyncio
import math
from unittest.mock import AsyncMock, patch

import pytest

from corelens.config import RedundancyConfig
from corelens.corpus import CodeObject
from corelens.effort import Effort
from corelens.errors import AnalysisCancelled, ComputationError, ProviderError
from corelens.redundancy import RedundancyDetector, estimate_pair_savings
from corelens.redundancy.detector import classify_pair_effort, fallback_recommendation

FAST = RedundancyConfig(batch_pause_seconds=0)


class FakeEmbedder:
    """Maps object content to a fixed vector."""

    def __init__(self, vectors):
        self.vectors = vectors
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        return self.vectors[text]


class FakeGenerator:
    def __init__(self, reply="Merge both into a shared function module."):
        self.reply = reply
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return self.reply


class FailingGenerator:
    def generate(self, prompt):
        raise ProviderError("fake-llm", "rate limited")


def _obj(id, content, loc=100, module="SD", type="FUNCTION"):
    return CodeObject(id=id, name=f"Z_{id.upper()}", content=content, type=type, module=module, line_count=loc)


def _run(coro):
    return asyncio.run(coro)


class TestFindRedundancies:
    """Tests for pair detection."""

    def test_identical_content(self):
        """Test that identical objects pair with full similarity."""
        a = _obj("a", "SELECT * FROM vbak.", loc=100)
        b = _obj("b", "SELECT * FROM vbak.", loc=100)
        detector = RedundancyDetector(FakeEmbedder({"SELECT * FROM vbak.": [0.2, 0.5, 0.1]}), config=FAST)

        pairs = _run(detector.find_redundancies([a, b]))

        assert len(pairs) == 1
        pair = pairs[0]
        assert pair.similarity == pytest.approx(1.0)
        assert pair.savings.loc_reduction == 60
        assert pair.savings.effort is Effort.LOW
        assert pair.names == ("Z_A", "Z_B")
        assert pair.recommendation == fallback_recommendation(pair.similarity)

    def test_single_object(self):
        """Fewer than two objects skip embedding entirely."""
        embedder = FakeEmbedder({})
        detector = RedundancyDetector(embedder, config=FAST)
        assert _run(detector.find_redundancies([_obj("a", "x")])) == []
        assert _run(detector.find_redundancies([])) == []
        assert embedder.calls == []

    def test_threshold_and_sorting(self):
        """Pairs respect the threshold and sort by similarity."""
        angle = math.radians(30)
        vectors = {
            "a": [1.0, 0.0],
            "b": [1.0, 0.0],
            "c": [math.cos(angle), math.sin(angle)],
            "d": [0.0, 1.0],
        }
        objects = [_obj(k, k) for k in "abcd"]
        detector = RedundancyDetector(FakeEmbedder(vectors), config=FAST)

        pairs = _run(detector.find_redundancies(objects))
        assert len(pairs) == 3
        sims = [p.similarity for p in pairs]
        assert sims == sorted(sims, reverse=True)
        assert all(s >= 0.85 for s in sims)

        strict = _run(detector.find_redundancies(objects, threshold=0.99))
        assert [(p.first.id, p.second.id) for p in strict] == [("a", "b")]

    def test_every_object_embedded_once_and_truncated(self):
        """Each object is embedded once, cut to 8000 characters."""
        long_text = "x" * 10_000
        embedder = FakeEmbedder({long_text[:8000]: [1.0], "y": [1.0]})
        detector = RedundancyDetector(embedder, config=FAST)

        _run(detector.find_redundancies([_obj("a", long_text), _obj("b", "y")]))
        assert sorted(len(t) for t in embedder.calls) == [1, 8000]

    def test_savings_invariant(self):
        """Pair savings never exceed 60% of the smaller object."""
        objects = [_obj("a", "v", loc=333), _obj("b", "v", loc=57), _obj("c", "v", loc=1201)]
        detector = RedundancyDetector(FakeEmbedder({"v": [1.0, 1.0]}), config=FAST)

        for pair in _run(detector.find_redundancies(objects)):
            smaller = min(pair.first.line_count, pair.second.line_count)
            assert 0 <= pair.savings.loc_reduction <= 0.6 * smaller


class TestProviderFailures:
    """Tests for error propagation and degradation."""

    def test_generator_used(self):
        """Generated text becomes the pair recommendation."""
        generator = FakeGenerator()
        detector = RedundancyDetector(FakeEmbedder({"v": [1.0]}), generator, config=FAST)

        [pair] = _run(detector.find_redundancies([_obj("a", "v"), _obj("b", "v")]))
        assert pair.recommendation == "Merge both into a shared function module."
        assert "Z_A" in generator.prompts[0]

    def test_generator_failure_falls_back(self):
        """A failing generator yields the template text."""
        detector = RedundancyDetector(FakeEmbedder({"v": [1.0]}), FailingGenerator(), config=FAST)

        [pair] = _run(detector.find_redundancies([_obj("a", "v"), _obj("b", "v")]))
        assert pair.recommendation == fallback_recommendation(pair.similarity)
        assert "100.0% similar" in pair.recommendation

    def test_blank_generation_falls_back(self):
        detector = RedundancyDetector(FakeEmbedder({"v": [1.0]}), FakeGenerator("   "), config=FAST)
        [pair] = _run(detector.find_redundancies([_obj("a", "v"), _obj("b", "v")]))
        assert pair.recommendation == fallback_recommendation(pair.similarity)

    def test_embedding_failure_aborts(self):
        """Embedding failures propagate to the caller."""
        class BrokenEmbedder:
            def embed(self, text):
                raise ProviderError("fake-embed", "connection refused")

        detector = RedundancyDetector(BrokenEmbedder(), config=FAST)
        with pytest.raises(ProviderError, match="connection refused"):
            _run(detector.find_redundancies([_obj("a", "v"), _obj("b", "w")]))

    def test_inconsistent_dimensions(self):
        """Vectors of different lengths raise ComputationError."""
        detector = RedundancyDetector(FakeEmbedder({"v": [1.0], "w": [1.0, 0.0]}), config=FAST)
        with pytest.raises(ComputationError):
            _run(detector.find_redundancies([_obj("a", "v"), _obj("b", "w")]))

    def test_cancellation(self):
        cancel = asyncio.Event()
        cancel.set()
        detector = RedundancyDetector(FakeEmbedder({"v": [1.0]}), config=FAST)
        with pytest.raises(AnalysisCancelled):
            _run(detector.find_redundancies([_obj("a", "v"), _obj("b", "v")], cancel=cancel))


class TestEmbeddingBatches:
    """Tests for paced embedding requests."""

    def test_default_batches_of_ten(self):
        """25 objects are embedded as 10, 10 and 5 with a pause between batches."""
        events = []

        class RecordingEmbedder:
            def embed(self, text):
                events.append(text)
                return [1.0, float(len(text))]

        async def record_pause(seconds):
            events.append(None)

        objects = [_obj(f"o{i}", f"body {i}") for i in range(25)]
        detector = RedundancyDetector(RecordingEmbedder())

        with patch(
            "corelens.providers.batching.asyncio.sleep",
            new_callable=AsyncMock,
            side_effect=record_pause,
        ) as sleep:
            _run(detector.embed_corpus(objects))

        batches = [[]]
        for event in events:
            if event is None:
                batches.append([])
            else:
                batches[-1].append(event)

        assert [len(b) for b in batches] == [10, 10, 5]
        assert sleep.await_count == 2
        sleep.assert_awaited_with(detector.config.batch_pause_seconds)


class TestEstimates:
    """Tests for per-pair savings and effort."""

    @pytest.mark.parametrize("loc1,loc2,expected", [
        (100, 100, Effort.LOW),
        (150, 51, Effort.MEDIUM),
        (250, 250, Effort.MEDIUM),
        (300, 201, Effort.HIGH),
    ])
    def test_effort(self, loc1, loc2, expected):
        """Test effort classes at their LOC boundaries."""
        assert classify_pair_effort(loc1, loc2) is expected

    def test_savings_floor(self):
        """Savings round down and use the smaller object."""
        savings = estimate_pair_savings(_obj("a", "x", loc=7), _obj("b", "y", loc=500))
        # floor(0.6 * 7) = 4
        assert savings.loc_reduction == 4
        assert savings.effort is Effort.HIGH


class TestStatistics:
    """Tests for band counts and breakdowns."""

    def test_statistics(self):
        """Test band counts and breakdowns over three pairs."""
        vectors = {
            "a": [1.0, 0.0],
            "b": [1.0, 0.0],
            "c": [math.cos(math.radians(20)), math.sin(math.radians(20))],
        }
        objects = [
            _obj("a", "a", loc=100),
            _obj("b", "b", loc=100, module="MM", type="REPORT"),
            _obj("c", "c", loc=100),
        ]
        detector = RedundancyDetector(FakeEmbedder(vectors), config=FAST)
        pairs = _run(detector.find_redundancies(objects))
        stats = detector.get_statistics(pairs)

        # cos(20°) ≈ 0.94 sits in the high band
        assert stats.total_redundancies == 3
        assert stats.very_high_similarity == 1
        assert stats.high_similarity == 2
        assert stats.medium_similarity == 0
        assert stats.total_potential_savings == 180
        assert stats.by_module == {"SD": 2, "MM": 1}
        assert stats.to_dict()["by_type"] == {"FUNCTION": 2, "REPORT": 1}

    def test_empty(self):
        detector = RedundancyDetector(FakeEmbedder({}), config=FAST)
        stats = detector.get_statistics([])
        assert stats.total_redundancies == 0
        assert stats.total_potential_savings == 0


class TestFindClusters:
    """Tests for the detector's clustering entry point."""

    def test_chain_forms_one_cluster(self):
        """A similarity chain collapses into one cluster."""
        a30, a60 = math.radians(30), math.radians(60)
        vectors = {
            "a": [1.0, 0.0],
            "b": [math.cos(a30), math.sin(a30)],
            "c": [math.cos(a60), math.sin(a60)],
        }
        objects = [_obj(k, k) for k in "abc"]
        detector = RedundancyDetector(FakeEmbedder(vectors), config=FAST)

        clusters = _run(detector.find_clusters(objects))

        assert len(clusters) == 1
        assert {m.id for m in clusters[0].members} == {"a", "b", "c"}
        assert clusters[0].average_similarity == pytest.approx(math.cos(a30))
