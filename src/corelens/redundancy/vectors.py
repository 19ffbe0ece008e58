"""Vector math for redundancy scoring. Pure functions, no I/O."""

from itertools import combinations
from typing import Iterator, Sequence

import numpy as np

from corelens.errors import ComputationError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors.

    Args:
        a: First vector
        b: Second vector, same length as ``a``

    Returns:
        Similarity in [-1, 1]; 0.0 when either vector has zero magnitude

    Raises:
        ComputationError: If the vectors differ in length
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise ComputationError(
            f"Vectors must have the same length (got {va.size} and {vb.size})"
        )

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = float(np.dot(va, vb)) / (norm_a * norm_b)
    # Rounding can push identical vectors a hair past 1
    return max(-1.0, min(1.0, similarity))


def unordered_pairs(count: int) -> Iterator[tuple[int, int]]:
    """Every (i, j) with i < j: n(n-1)/2 pairs, no self-pairs, no repeats."""
    return combinations(range(count), 2)


def score_pairs(
    vectors: Sequence[Sequence[float]],
    threshold: float,
) -> list[tuple[int, int, float]]:
    """
    Compare every unordered pair of vectors and keep the similar ones.

    Args:
        vectors: One embedding per corpus object
        threshold: Minimum similarity to keep (inclusive)

    Returns:
        (i, j, similarity) triples sorted by similarity descending
    """
    kept = []
    for i, j in unordered_pairs(len(vectors)):
        similarity = cosine_similarity(vectors[i], vectors[j])
        if similarity >= threshold:
            kept.append((i, j, similarity))

    kept.sort(key=lambda triple: triple[2], reverse=True)
    return kept
