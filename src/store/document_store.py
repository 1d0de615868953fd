"""In-memory document store with dense ordinal IDs."""
import logging
from typing import Generic, Iterable, Iterator, Optional, TypeVar

from src.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentStore(Generic[T]):
    """Ordered, growable sequence of records.

    A record's position is its document ID. IDs are dense integers in
    ``[0, size)``; removing a record shifts every later ID down by one.
    The ``version`` counter moves on every mutation so derived structures
    (the inverted index) can tell when they were built from stale contents.
    """

    def __init__(self, records: Optional[Iterable[T]] = None):
        self._records: list[T] = []
        self._version = 0
        if records is not None:
            self.extend(records)

    @property
    def version(self) -> int:
        return self._version

    def insert(self, record: T) -> int:
        """Append a record and return its document ID."""
        self._records.append(record)
        self._version += 1
        return len(self._records) - 1

    def extend(self, records: Iterable[T]) -> int:
        """Append several records. Returns how many were added."""
        before = len(self._records)
        self._records.extend(records)
        added = len(self._records) - before
        if added:
            self._version += 1
        return added

    def remove(self, doc_id: int) -> bool:
        """Remove the record at ``doc_id``, shifting later IDs down.

        Returns:
            False when ``doc_id`` is out of range, True otherwise
        """
        if not self._valid(doc_id):
            logger.debug("Ignoring remove of invalid document ID %s", doc_id)
            return False
        del self._records[doc_id]
        self._version += 1
        return True

    def get(self, doc_id: int) -> Optional[T]:
        """Return the record at ``doc_id``, or None when out of range."""
        if not self._valid(doc_id):
            return None
        return self._records[doc_id]

    def size(self) -> int:
        return len(self._records)

    def items(self) -> Iterator[tuple[int, T]]:
        """Iterate (document ID, record) pairs in ID order."""
        return enumerate(self._records)

    def _valid(self, doc_id: int) -> bool:
        return isinstance(doc_id, int) and 0 <= doc_id < len(self._records)

    def __getitem__(self, doc_id: int) -> T:
        if not self._valid(doc_id):
            raise DocumentNotFoundError(doc_id, len(self._records))
        return self._records[doc_id]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} size={len(self._records)}>"
