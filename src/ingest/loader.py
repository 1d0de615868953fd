"""Load clean CSV files into document stores."""
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar

from src.store.document_store import DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

RowFactory = Callable[[Sequence[str]], T]

# Anything that can go wrong reading a CSV file from disk
READ_ERRORS = (OSError, UnicodeDecodeError, csv.Error)


@dataclass
class LoadResult:
    """Outcome of loading one CSV file."""

    path: Path
    ok: bool
    loaded: int = 0
    skipped: int = 0
    error: Optional[str] = None


def load_records(path: str | Path, factory: RowFactory) -> tuple[list[T], int]:
    """Parse every data row of a CSV file into records.

    The header row is skipped. Blank rows are skipped and counted;
    malformed rows are still turned into records by ``factory``.

    Returns:
        (records, skipped_row_count)

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
        csv.Error: If the CSV is malformed beyond recovery
    """
    records: list[T] = []
    skipped = 0
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)
        for row in reader:
            if not any(cell.strip() for cell in row):
                skipped += 1
                continue
            records.append(factory(row))
    return records, skipped


def load_into_store(
    path: str | Path,
    store: DocumentStore[T],
    factory: RowFactory,
) -> LoadResult:
    """Load a CSV file into ``store``.

    The whole file is parsed before anything is inserted, so a failed load
    leaves the store unchanged.
    """
    path = Path(path)
    try:
        records, skipped = load_records(path, factory)
    except READ_ERRORS as e:
        logger.error("Unable to read %s: %s", path, e)
        return LoadResult(path=path, ok=False, error=str(e))

    loaded = store.extend(records)
    logger.info("Loaded %d records from %s (%d blank rows skipped)", loaded, path, skipped)
    return LoadResult(path=path, ok=True, loaded=loaded, skipped=skipped)
