"""CSV ingestion and cleaning."""
from .cleaning import CleaningStats, clean_jobs, clean_resumes
from .loader import LoadResult, load_into_store, load_records

__all__ = [
    "CleaningStats",
    "LoadResult",
    "clean_jobs",
    "clean_resumes",
    "load_into_store",
    "load_records",
]
