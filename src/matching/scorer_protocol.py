"""Scorer protocol for pluggable candidate scoring.

Defines the interface the search engine expects from a scorer.
SkillQueryScorer and TitleQueryScorer are the heuristic implementations;
callers may inject their own.
"""
from typing import Protocol, runtime_checkable

from src.records.models import Record


@runtime_checkable
class CandidateScorer(Protocol):
    """Protocol for candidate scoring engines.

    Scores are non-negative integers; a score of 0 removes the candidate
    from the results.
    """

    def score(self, query: str, record: Record) -> int:
        """Score a single record against a query."""
        ...
