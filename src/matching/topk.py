"""Ranking of scored matches."""
from enum import Enum
from typing import Iterable, Optional

from src.matching.scorer import Match


class RankingStrategy(Enum):
    """How scored matches are ordered."""

    FULL_SORT = "full_sort"
    TOP_K = "top_k"


def full_sort(matches: Iterable[Match]) -> list[Match]:
    """All matches by score descending, ties by ascending document ID."""
    return sorted(matches, key=lambda m: m.rank_key)


def bounded_top_k(matches: Iterable[Match], k: int) -> list[Match]:
    """The k best matches via repeated selection, O(k * n).

    Avoids sorting the tail when k is much smaller than n. When k covers
    every match this falls back to a full sort so the result stays ordered.
    """
    pool = list(matches)
    n = len(pool)
    if k <= 0:
        return []
    if k >= n:
        return full_sort(pool)

    for i in range(k):
        best = i
        for j in range(i + 1, n):
            if pool[j].rank_key < pool[best].rank_key:
                best = j
        if best != i:
            pool[i], pool[best] = pool[best], pool[i]
    return pool[:k]


def select_top_k(
    matches: Iterable[Match],
    k: Optional[int] = None,
    strategy: RankingStrategy = RankingStrategy.TOP_K,
) -> list[Match]:
    """Rank ``matches`` and keep at most ``k`` (all when k is None).

    Both strategies produce the same first k entries.
    """
    if strategy is RankingStrategy.FULL_SORT or k is None:
        ranked = full_sort(matches)
        return ranked if k is None else ranked[:max(k, 0)]
    return bounded_top_k(matches, k)
