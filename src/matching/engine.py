"""Keyword search engine over a document store."""
import logging
from enum import Enum
from typing import Generic, Iterable, Optional, TypeVar

from src.matching.inverted_index import InvertedIndex
from src.matching.query import QueryEvaluator
from src.matching.scorer import Match, SkillQueryScorer, TitleQueryScorer
from src.matching.scorer_protocol import CandidateScorer
from src.matching.topk import RankingStrategy, select_top_k
from src.records.models import Record
from src.store.document_store import DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)


class RetrievalStrategy(Enum):
    """How candidates are found before scoring."""

    INDEXED = "indexed"  # boolean search over the inverted index
    SCAN = "scan"  # score every document in the store


class SearchEngine(Generic[T]):
    """Search a DocumentStore by skills or title.

    Pipeline: candidate retrieval -> per-candidate scoring -> ranking.
    Candidates scoring 0 are dropped even if retrieval returned them.
    """

    def __init__(
        self,
        store: Optional[DocumentStore[T]] = None,
        retrieval: RetrievalStrategy = RetrievalStrategy.INDEXED,
        ranking: RankingStrategy = RankingStrategy.TOP_K,
        skill_scorer: Optional[CandidateScorer] = None,
        title_scorer: Optional[CandidateScorer] = None,
    ):
        """
        Initialize search engine.

        Args:
            store: Records to search (a new empty store if omitted)
            retrieval: Candidate retrieval strategy
            ranking: Ranking strategy for the scored candidates
            skill_scorer: Scorer for skill queries
            title_scorer: Scorer for title queries
        """
        self.store: DocumentStore[T] = store if store is not None else DocumentStore()
        self.index = InvertedIndex()
        self.evaluator = QueryEvaluator(self.store, self.index)
        self.retrieval = RetrievalStrategy(retrieval)
        self.ranking = RankingStrategy(ranking)
        self.skill_scorer = skill_scorer or SkillQueryScorer()
        self.title_scorer = title_scorer or TitleQueryScorer()

    # === Store access ===

    def insert(self, record: T) -> int:
        return self.store.insert(record)

    def remove(self, doc_id: int) -> bool:
        """Remove a document; a successful removal invalidates the index."""
        removed = self.store.remove(doc_id)
        if removed:
            self.index.invalidate()
        return removed

    def get(self, doc_id: int) -> Optional[T]:
        return self.store.get(doc_id)

    def size(self) -> int:
        return self.store.size()

    def ensure_indexed(self) -> None:
        """Build the index now instead of on the first query."""
        if self.retrieval is RetrievalStrategy.INDEXED:
            self.evaluator.ensure_indexed()

    # === Retrieval ===

    def candidates(self, query: str) -> set[int]:
        """Candidate IDs for a skill query."""
        if self.retrieval is RetrievalStrategy.SCAN:
            return set(range(self.store.size()))
        return self.evaluator.boolean_search(query)

    def title_candidates(self, query: str) -> set[int]:
        """Candidate IDs for a title query."""
        if self.retrieval is RetrievalStrategy.SCAN:
            return set(range(self.store.size()))
        return self.evaluator.title_search(query)

    # === Search ===

    def search(self, query: str, max_results: Optional[int] = None) -> list[Match]:
        """Search by skills.

        Args:
            query: Skill query ("python", "python, sql", "python or java")
            max_results: Maximum matches to return (all when None)

        Returns:
            Matches ordered by score descending, then document ID
        """
        return self._rank(
            query, self.candidates(query), self.skill_scorer, max_results
        )

    def search_by_title(
        self, query: str, max_results: Optional[int] = None
    ) -> list[Match]:
        """Search by title words (every query word must appear in the title)."""
        return self._rank(
            query, self.title_candidates(query), self.title_scorer, max_results
        )

    def score_candidates(
        self,
        query: str,
        candidate_ids: Iterable[int],
        scorer: CandidateScorer,
    ) -> list[Match]:
        """Score candidates, dropping those that score 0."""
        matches = []
        for doc_id in candidate_ids:
            record = self.store.get(doc_id)
            if record is None:
                continue
            score = scorer.score(query, record)
            if score > 0:
                matches.append(Match(doc_id=doc_id, score=score))
        return matches

    def _rank(
        self,
        query: str,
        candidate_ids: set[int],
        scorer: CandidateScorer,
        max_results: Optional[int],
    ) -> list[Match]:
        matches = self.score_candidates(query, candidate_ids, scorer)
        ranked = select_top_k(matches, max_results, self.ranking)
        logger.debug(
            "Query %r: %d candidates, %d scored, %d returned",
            query, len(candidate_ids), len(matches), len(ranked),
        )
        return ranked
