"""Rewrite raw job/résumé CSV into the clean format the loader reads.

Raw jobs are free text like "Data Scientist needed with experience in
Python, SQL, Tableau. ...". Raw résumés contain "... skilled in Python, SQL.
...". Only recognized technical skills survive cleaning.
"""
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from src.exceptions import DataSourceError
from src.records.models import UNKNOWN_POSITION
from src.records.skills import filter_technical_skills

logger = logging.getLogger(__name__)

JOB_HEADER = ["Job_ID", "Title", "Skills"]
RESUME_HEADER = ["Resume_ID", "Skills"]

PROGRESS_EVERY = 1000

_TITLE_QUOTES = "\"'"
_TITLE_TRAILING = ".,;:"


@dataclass
class CleaningStats:
    """Counts from one cleaning pass."""

    output_path: Path
    processed: int = 0
    skipped: int = 0


def normalize_title(raw: str) -> str:
    """Strip surrounding quotes and trailing sentence punctuation."""
    title = raw.strip().strip(_TITLE_QUOTES)
    title = title.rstrip(_TITLE_TRAILING)
    return title.strip()


def extract_segment(text: str, marker: str) -> str:
    """Text after ``marker`` up to the first period ("" if marker absent)."""
    start = text.find(marker)
    if start == -1:
        return ""
    segment = text[start + len(marker):]
    period = segment.find(".")
    if period != -1:
        segment = segment[:period]
    return segment.strip()


def _clean_job_row(
    job_id: int, text: str, vocabulary: Optional[frozenset[str]]
) -> list:
    needed = text.find(" needed")
    title = normalize_title(text[:needed]) if needed != -1 else UNKNOWN_POSITION
    skills = filter_technical_skills(extract_segment(text, "experience in"), vocabulary)
    return [job_id, title or UNKNOWN_POSITION, skills]


def _clean_resume_row(
    resume_id: int, text: str, vocabulary: Optional[frozenset[str]]
) -> list:
    skills = filter_technical_skills(extract_segment(text, "skilled in"), vocabulary)
    return [resume_id, skills]


def _clean_file(
    raw_path: str | Path,
    out_path: str | Path,
    header: list[str],
    clean_row: Callable[[int, str, Optional[frozenset[str]]], list],
    vocabulary: Optional[frozenset[str]],
    label: str,
) -> CleaningStats:
    raw_path = Path(raw_path)
    out_path = Path(out_path)
    stats = CleaningStats(output_path=out_path)

    try:
        raw_file = open(raw_path, newline="", encoding="utf-8")
    except OSError as e:
        raise DataSourceError(raw_path, str(e)) from e

    with raw_file:
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_file = open(out_path, "w", newline="", encoding="utf-8")
        except OSError as e:
            raise DataSourceError(out_path, str(e)) from e

        try:
            with out_file:
                reader = csv.reader(raw_file)
                writer = csv.writer(out_file)
                writer.writerow(header)
                next(reader, None)

                for row in reader:
                    # Raw rows are a single free-text column; rejoin any splits
                    text = ",".join(row).strip()
                    if not text:
                        stats.skipped += 1
                        continue
                    stats.processed += 1
                    writer.writerow(clean_row(stats.processed, text, vocabulary))
                    if stats.processed % PROGRESS_EVERY == 0:
                        logger.info("  Processed %d %s...", stats.processed, label)
        except (UnicodeDecodeError, csv.Error) as e:
            out_path.unlink(missing_ok=True)
            raise DataSourceError(raw_path, str(e)) from e
        except OSError as e:
            out_path.unlink(missing_ok=True)
            raise DataSourceError(out_path, str(e)) from e

    logger.info(
        "Wrote %d cleaned %s to %s (%d empty rows skipped)",
        stats.processed, label, out_path, stats.skipped,
    )
    return stats


def clean_jobs(
    raw_path: str | Path,
    out_path: str | Path,
    vocabulary: Optional[frozenset[str]] = None,
) -> CleaningStats:
    """Clean raw job descriptions into Job_ID,Title,Skills rows.

    Raises:
        DataSourceError: If the raw file cannot be read or the output written
    """
    return _clean_file(raw_path, out_path, JOB_HEADER, _clean_job_row, vocabulary, "jobs")


def clean_resumes(
    raw_path: str | Path,
    out_path: str | Path,
    vocabulary: Optional[frozenset[str]] = None,
) -> CleaningStats:
    """Clean raw résumés into Resume_ID,Skills rows.

    Raises:
        DataSourceError: If the raw file cannot be read or the output written
    """
    return _clean_file(
        raw_path, out_path, RESUME_HEADER, _clean_resume_row, vocabulary, "resumes"
    )
