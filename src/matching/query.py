"""Boolean query evaluation over the inverted index."""
import logging
import threading

from src.matching.inverted_index import IndexField, InvertedIndex
from src.matching.normalizer import normalize, split_skills
from src.store.document_store import DocumentStore

logger = logging.getLogger(__name__)

OR_OPERATOR = " or "


class QueryEvaluator:
    """Interpret skill queries as boolean OR over exact skill phrases.

    Query forms, first match wins:
      "python, docker"  -> any listed phrase (comma OR)
      "python or java"  -> either phrase (one binary OR)
      "machine learning" -> that exact phrase

    Only the first " or " splits the query: "a or b or c" looks up "a" and
    the phrase "b or c".
    """

    def __init__(self, store: DocumentStore, index: InvertedIndex):
        self.store = store
        self.index = index
        self._build_lock = threading.Lock()

    def ensure_indexed(self) -> None:
        """Build the index if it is missing or the store changed since."""
        if not self.index.is_stale(self.store):
            return
        with self._build_lock:
            if self.index.is_stale(self.store):
                self.index.invalidate()
                self.index.build_index(self.store)

    def boolean_search(self, query: str) -> set[int]:
        """Return the candidate IDs for a skill query."""
        self.ensure_indexed()

        # Commas must be checked before normalizing, which strips them
        if "," in query:
            result: set[int] = set()
            for phrase in split_skills(query):
                result |= self.index.lookup(phrase, IndexField.SKILLS)
            logger.debug("Comma query %r matched %d documents", query, len(result))
            return result

        norm_query = normalize(query)
        if OR_OPERATOR in norm_query:
            left, right = norm_query.split(OR_OPERATOR, 1)
            result = self.index.lookup(left, IndexField.SKILLS) | self.index.lookup(
                right, IndexField.SKILLS
            )
            logger.debug("OR query %r matched %d documents", query, len(result))
            return result

        return self.index.lookup(norm_query, IndexField.SKILLS)

    def title_search(self, query: str) -> set[int]:
        """Return IDs whose title contains every token of ``query``."""
        self.ensure_indexed()
        return self.index.lookup(query, IndexField.TITLE)
