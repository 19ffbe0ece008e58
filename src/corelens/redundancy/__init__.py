"""Redundancy Module — Near-duplicate detection over a corpus.

Usage:
    import asyncio
    from corelens.providers.embeddings import CodeBERTEmbedder
    from corelens.redundancy import RedundancyDetector

    detector = RedundancyDetector(CodeBERTEmbedder())
    pairs = asyncio.run(detector.find_redundancies(objects))
    stats = detector.get_statistics(pairs)
"""

from corelens.redundancy.clusters import (
    RedundancyCluster,
    build_clusters,
    connected_clusters,
    greedy_clusters,
)
from corelens.redundancy.detector import (
    RedundancyDetector,
    RedundancyPair,
    RedundancySavings,
    RedundancyStatistics,
    estimate_pair_savings,
)
from corelens.redundancy.vectors import cosine_similarity, score_pairs, unordered_pairs

__all__ = [
    "RedundancyCluster",
    "RedundancyDetector",
    "RedundancyPair",
    "RedundancySavings",
    "RedundancyStatistics",
    "build_clusters",
    "connected_clusters",
    "cosine_similarity",
    "estimate_pair_savings",
    "greedy_clusters",
    "score_pairs",
    "unordered_pairs",
]
