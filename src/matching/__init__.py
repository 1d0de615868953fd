"""Keyword search, scoring and ranking."""
from .cross_matcher import CandidateMatch, CrossMatcher, JobMatchReport
from .engine import RetrievalStrategy, SearchEngine
from .inverted_index import IndexField, InvertedIndex
from .query import QueryEvaluator
from .scorer import Match
from .topk import RankingStrategy, select_top_k

__all__ = [
    "CandidateMatch",
    "CrossMatcher",
    "IndexField",
    "InvertedIndex",
    "JobMatchReport",
    "Match",
    "QueryEvaluator",
    "RankingStrategy",
    "RetrievalStrategy",
    "SearchEngine",
    "select_top_k",
]
