"""Inverted index over skills, titles and descriptions."""
import logging
from collections import defaultdict
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from src.matching.normalizer import normalize, split_skills, tokenize
from src.records.models import Record
from src.store.document_store import DocumentStore

logger = logging.getLogger(__name__)

# Tokens this short are too noisy to index.
MIN_TOKEN_LENGTH = 2


class IndexField(Enum):
    """Which posting mapping to consult."""

    SKILLS = "skills"
    TITLE = "title"
    DESCRIPTION = "description"


class InvertedIndex:
    """Term -> document-ID-set mappings derived from a DocumentStore.

    Skill terms are whole normalized phrases ("machine learning" stays one
    term). Title and description terms are single tokens of at least
    MIN_TOKEN_LENGTH characters. The index is disposable: it can always be
    rebuilt from the store.
    """

    def __init__(self):
        self._postings: dict[IndexField, defaultdict[str, set[int]]] = {
            field: defaultdict(set) for field in IndexField
        }
        self._built = False
        self._built_version: Optional[int] = None

    @property
    def built(self) -> bool:
        return self._built

    def build_index(self, store: DocumentStore[Record]) -> None:
        """Build all three mappings from ``store``.

        No-op when already built; call ``invalidate()`` first to force a
        full rebuild.
        """
        if self._built:
            return

        for postings in self._postings.values():
            postings.clear()

        for doc_id, record in store.items():
            for skill in split_skills(record.skills):
                phrase = normalize(skill)
                if phrase:
                    self._postings[IndexField.SKILLS][phrase].add(doc_id)

            self._add_tokens(record.title, doc_id, IndexField.TITLE)
            self._add_tokens(record.text, doc_id, IndexField.DESCRIPTION)

        self._built = True
        self._built_version = store.version
        logger.info(
            "Inverted index built: %d documents, %d skills, %d title terms, %d description terms",
            store.size(),
            len(self._postings[IndexField.SKILLS]),
            len(self._postings[IndexField.TITLE]),
            len(self._postings[IndexField.DESCRIPTION]),
        )

    def _add_tokens(self, text: str, doc_id: int, field: IndexField) -> None:
        postings = self._postings[field]
        for token in tokenize(normalize(text)):
            if len(token) >= MIN_TOKEN_LENGTH:
                postings[token].add(doc_id)

    def invalidate(self) -> None:
        """Mark the index stale so the next build recomputes it."""
        if self._built:
            logger.debug("Inverted index invalidated")
        self._built = False

    def is_stale(self, store: DocumentStore) -> bool:
        """True when unbuilt or built from an older version of ``store``."""
        return not self._built or self._built_version != store.version

    def lookup(self, term: str, field: IndexField) -> set[int]:
        """Return the IDs of documents matching ``term`` in ``field``.

        Skills use exact phrase lookup. Title and description tokenize the
        normalized term and intersect the posting sets of every token; a
        single missing token yields an empty result.
        """
        postings = self._postings[field]
        norm_term = normalize(term)

        if field is IndexField.SKILLS:
            return set(postings.get(norm_term, ()))

        result: Optional[set[int]] = None
        for token in tokenize(norm_term):
            ids = postings.get(token)
            if not ids:
                return set()
            result = set(ids) if result is None else result & ids
        return result if result is not None else set()

    def terms(self, field: IndexField) -> frozenset[str]:
        return frozenset(self._postings[field])

    def postings(self, field: IndexField) -> Mapping[str, frozenset[int]]:
        """Read-only snapshot of one mapping."""
        return MappingProxyType(
            {term: frozenset(ids) for term, ids in self._postings[field].items()}
        )
