"""Redundancy Detector — Finds near-duplicate code objects via embeddings.

The run has two stages:

1. **Provider stage (async):** one embedding per object, requested in paced
   batches of ten, each text cut to 8,000 characters. Any embedding failure
   aborts the run.
2. **Scoring stage (pure):** cosine similarity for all n(n-1)/2 unordered
   pairs; pairs at or above the threshold are kept, priced and sorted.

Each kept pair then gets a short consolidation recommendation from the text
generator. A failed generation is logged and replaced with a fixed template;
it never fails the pair.
"""

import asyncio
import math
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from corelens.config import RedundancyConfig, SimilarityBands
from corelens.corpus.base import CodeObject
from corelens.effort import Effort
from corelens.providers.base import EmbeddingProvider, TextGenerator
from corelens.providers.batching import run_in_batches
from corelens.redundancy.vectors import score_pairs

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RedundancySavings:
    loc_reduction: int
    effort: Effort


@dataclass(frozen=True)
class RedundancyPair:
    """Two code objects judged near-duplicates."""

    first: CodeObject
    second: CodeObject
    similarity: float
    recommendation: str
    savings: RedundancySavings

    @property
    def names(self) -> tuple[str, str]:
        return (self.first.name, self.second.name)

    def to_dict(self) -> dict:
        return {
            "first": self.first.id,
            "second": self.second.id,
            "names": list(self.names),
            "similarity": round(self.similarity, 4),
            "recommendation": self.recommendation,
            "savings": {
                "loc_reduction": self.savings.loc_reduction,
                "effort": self.savings.effort.value,
            },
        }


@dataclass(frozen=True)
class RedundancyStatistics:
    total_redundancies: int
    very_high_similarity: int
    high_similarity: int
    medium_similarity: int
    total_potential_savings: int
    by_module: dict
    by_type: dict

    def to_dict(self) -> dict:
        return {
            "total_redundancies": self.total_redundancies,
            "very_high_similarity": self.very_high_similarity,
            "high_similarity": self.high_similarity,
            "medium_similarity": self.medium_similarity,
            "total_potential_savings": self.total_potential_savings,
            "by_module": dict(self.by_module),
            "by_type": dict(self.by_type),
        }


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def classify_pair_effort(
    loc1: int,
    loc2: int,
    config: RedundancyConfig = RedundancyConfig(),
) -> Effort:
    """Effort from combined size: >500 High, >200 Medium, else Low."""
    total = loc1 + loc2
    if total > config.high_effort_loc:
        return Effort.HIGH
    if total > config.medium_effort_loc:
        return Effort.MEDIUM
    return Effort.LOW


def estimate_pair_savings(
    first: CodeObject,
    second: CodeObject,
    config: RedundancyConfig = RedundancyConfig(),
) -> RedundancySavings:
    """Consolidation removes ~60% of the smaller object."""
    smaller = min(first.line_count, second.line_count)
    return RedundancySavings(
        loc_reduction=math.floor(round(smaller * config.savings_ratio, 9)),
        effort=classify_pair_effort(first.line_count, second.line_count, config),
    )


def fallback_recommendation(similarity: float) -> str:
    return (
        f"These objects are {similarity * 100:.1f}% similar. "
        f"Consider consolidating them to reduce duplication."
    )


def build_recommendation_prompt(
    first: CodeObject,
    second: CodeObject,
    similarity: float,
    snippet_chars: int = 500,
) -> str:
    return f"""These two ABAP objects are {similarity * 100:.1f}% similar:

Object 1: {first.name} ({first.type}, {first.line_count} LOC, Module: {first.module.value})
{first.content[:snippet_chars]}...

Object 2: {second.name} ({second.type}, {second.line_count} LOC, Module: {second.module.value})
{second.content[:snippet_chars]}...

Give a brief, actionable recommendation on how to consolidate them. Cover:
1. What functionality is duplicated
2. How to merge them (common function module, shared class, inheritance)
3. Estimated effort (Low/Medium/High)

Keep it under 100 words and specific to SAP/ABAP."""


# ---------------------------------------------------------------------------
# Detector
# ---------------------------------------------------------------------------

class RedundancyDetector:
    """Detect redundant code objects in a corpus."""

    def __init__(
        self,
        embedder: EmbeddingProvider,
        text_generator: Optional[TextGenerator] = None,
        config: Optional[RedundancyConfig] = None,
        bands: Optional[SimilarityBands] = None,
    ):
        self.embedder = embedder
        self.text_generator = text_generator
        self.config = config or RedundancyConfig()
        self.bands = bands or SimilarityBands()

    async def embed_corpus(
        self,
        objects: Sequence[CodeObject],
        cancel: Optional[asyncio.Event] = None,
    ) -> list[list[float]]:
        """Request one embedding per object; failures propagate."""
        cfg = self.config
        texts = [obj.content[: cfg.max_embedding_chars] for obj in objects]
        return await run_in_batches(
            texts,
            self.embedder.embed,
            batch_size=cfg.batch_size,
            pause_seconds=cfg.batch_pause_seconds,
            timeout=cfg.provider_timeout_seconds,
            cancel=cancel,
            provider="embedding",
        )

    async def find_redundancies(
        self,
        objects: Sequence[CodeObject],
        threshold: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> list[RedundancyPair]:
        """
        Find all pairs of objects at or above the similarity threshold.

        Args:
            objects: The corpus
            threshold: Minimum cosine similarity (default 0.85)
            cancel: Optional event; setting it stops the run between batches

        Returns:
            Redundancy pairs sorted by similarity descending; empty when the
            corpus has fewer than two objects

        Raises:
            ProviderError: If any embedding request fails
            ComputationError: If embeddings come back with different lengths
            AnalysisCancelled: If ``cancel`` is set mid-run
        """
        if threshold is None:
            threshold = self.config.similarity_threshold

        logger.info("Analyzing %d objects for redundancies", len(objects))
        if len(objects) < 2:
            logger.info("Need at least 2 objects to detect redundancies")
            return []

        vectors = await self.embed_corpus(objects, cancel)
        scored = score_pairs(vectors, threshold)

        recommendations = await self._recommendations(objects, scored, cancel)

        pairs = [
            RedundancyPair(
                first=objects[i],
                second=objects[j],
                similarity=similarity,
                recommendation=text,
                savings=estimate_pair_savings(objects[i], objects[j], self.config),
            )
            for (i, j, similarity), text in zip(scored, recommendations)
        ]

        logger.info("Found %d redundancies", len(pairs))
        return pairs

    async def _recommendations(
        self,
        objects: Sequence[CodeObject],
        scored: list[tuple[int, int, float]],
        cancel: Optional[asyncio.Event],
    ) -> list[str]:
        if self.text_generator is None:
            return [fallback_recommendation(similarity) for _, _, similarity in scored]

        cfg = self.config
        prompts = [
            (build_recommendation_prompt(objects[i], objects[j], sim, cfg.snippet_chars), sim)
            for i, j, sim in scored
        ]

        def on_error(item: tuple[str, float], error: Exception) -> str:
            logger.warning("Recommendation generation failed, using fallback: %s", error)
            return fallback_recommendation(item[1])

        def generate(item: tuple[str, float]) -> str:
            return self.text_generator.generate(item[0]).strip() or fallback_recommendation(item[1])

        return await run_in_batches(
            prompts,
            generate,
            batch_size=cfg.batch_size,
            pause_seconds=cfg.batch_pause_seconds,
            timeout=cfg.provider_timeout_seconds,
            cancel=cancel,
            provider="text-generation",
            on_error=on_error,
        )

    async def find_clusters(
        self,
        objects: Sequence[CodeObject],
        strategy: str = "connected",
        threshold: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ):
        """Run redundancy detection and group the pairs into clusters."""
        from corelens.redundancy.clusters import build_clusters

        pairs = await self.find_redundancies(objects, threshold, cancel)
        return build_clusters(pairs, strategy=strategy)

    def get_statistics(self, pairs: Sequence[RedundancyPair]) -> RedundancyStatistics:
        """Band counts, total savings and per-module / per-type breakdowns."""
        bands = Counter(self.bands.band_for(p.similarity) for p in pairs)
        return RedundancyStatistics(
            total_redundancies=len(pairs),
            very_high_similarity=bands["very_high"],
            high_similarity=bands["high"],
            medium_similarity=bands["medium"],
            total_potential_savings=sum(p.savings.loc_reduction for p in pairs),
            by_module=dict(Counter(p.first.module.value for p in pairs)),
            by_type=dict(Counter(p.first.type for p in pairs)),
        )
