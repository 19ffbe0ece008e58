"""Redundancy clustering — groups of objects linked by redundancy pairs.

Two strategies:

    connected  Full transitive closure over the similarity graph (union-find).
               Objects linked by any chain of redundant pairs share a cluster.
    greedy     Walk pairs from most to least similar; an unclaimed pair seeds
               a cluster, then one pass over all pairs absorbs unclaimed
               objects paired with a member. Clusters are locally, not
               globally, transitive.

Both guarantee that every member forms a pair with another member.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from corelens.config import SavingsConfig
from corelens.corpus.base import CodeObject
from corelens.redundancy.detector import RedundancyPair

STRATEGIES = ("connected", "greedy")


@dataclass(frozen=True)
class RedundancyCluster:
    members: tuple[CodeObject, ...]
    average_similarity: float
    total_savings: int
    recommendation: str

    @property
    def size(self) -> int:
        return len(self.members)

    def to_dict(self) -> dict:
        return {
            "members": [m.id for m in self.members],
            "names": [m.name for m in self.members],
            "average_similarity": round(self.average_similarity, 4),
            "total_savings": self.total_savings,
            "recommendation": self.recommendation,
        }


class _UnionFind:
    def __init__(self):
        self.parent: dict[str, str] = {}

    def find(self, key: str) -> str:
        self.parent.setdefault(key, key)
        root = key
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[key] != root:
            self.parent[key], key = root, self.parent[key]
        return root

    def union(self, a: str, b: str) -> None:
        root_a, root_b = self.find(a), self.find(b)
        if root_a != root_b:
            self.parent[root_b] = root_a


def _make_cluster(
    members: list[CodeObject],
    pairs: Sequence[RedundancyPair],
    savings_ratio: float,
) -> RedundancyCluster:
    ids = {m.id for m in members}
    internal = [p.similarity for p in pairs if p.first.id in ids and p.second.id in ids]
    average = sum(internal) / len(internal) if internal else 0.0
    total_savings = sum(math.floor(round(m.line_count * savings_ratio, 9)) for m in members)

    return RedundancyCluster(
        members=tuple(members),
        average_similarity=average,
        total_savings=total_savings,
        recommendation=(
            f"Consider consolidating these {len(members)} similar objects into a single "
            f"reusable component. This could save approximately {total_savings} lines of code."
        ),
    )


def connected_clusters(
    pairs: Sequence[RedundancyPair],
    savings_ratio: float = SavingsConfig().cluster_savings_ratio,
) -> list[RedundancyCluster]:
    """Connected components of the redundancy graph, ordered by strongest seed pair."""
    uf = _UnionFind()
    objects: dict[str, CodeObject] = {}

    ordered = sorted(pairs, key=lambda p: p.similarity, reverse=True)
    for pair in ordered:
        objects.setdefault(pair.first.id, pair.first)
        objects.setdefault(pair.second.id, pair.second)
        uf.union(pair.first.id, pair.second.id)

    # Members in order of first appearance, so the strongest pair leads
    groups: dict[str, list[CodeObject]] = {}
    for object_id, obj in objects.items():
        groups.setdefault(uf.find(object_id), []).append(obj)

    return [_make_cluster(members, ordered, savings_ratio) for members in groups.values()]


def greedy_clusters(
    pairs: Sequence[RedundancyPair],
    savings_ratio: float = SavingsConfig().cluster_savings_ratio,
) -> list[RedundancyCluster]:
    """Seed-and-absorb clustering over similarity-sorted pairs."""
    ordered = sorted(pairs, key=lambda p: p.similarity, reverse=True)
    claimed: set[str] = set()
    clusters = []

    for seed in ordered:
        if seed.first.id in claimed or seed.second.id in claimed:
            continue

        members = [seed.first, seed.second]
        member_ids = {seed.first.id, seed.second.id}
        claimed |= member_ids

        for other in ordered:
            if other.first.id in member_ids and other.second.id not in claimed:
                newcomer = other.second
            elif other.second.id in member_ids and other.first.id not in claimed:
                newcomer = other.first
            else:
                continue
            members.append(newcomer)
            member_ids.add(newcomer.id)
            claimed.add(newcomer.id)

        clusters.append(_make_cluster(members, ordered, savings_ratio))

    return clusters


def build_clusters(
    pairs: Sequence[RedundancyPair],
    strategy: str = "connected",
    savings_ratio: float = SavingsConfig().cluster_savings_ratio,
) -> list[RedundancyCluster]:
    """Cluster redundancy pairs with the named strategy."""
    if strategy == "connected":
        return connected_clusters(pairs, savings_ratio)
    if strategy == "greedy":
        return greedy_clusters(pairs, savings_ratio)
    raise ValueError(f"Unknown clustering strategy {strategy!r} (expected one of {STRATEGIES})")
