"""Pytest fixtures for Skill Radar tests."""
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.matching.engine import SearchEngine
from src.records.models import Job, Resume
from src.store.document_store import DocumentStore


# =============================================================================
# RECORD FIXTURES
# =============================================================================


@pytest.fixture
def scenario_resumes():
    """Three résumés: Python+SQL, Java, Python+Docker."""
    return [
        Resume(id=1, skills="Python, SQL"),
        Resume(id=2, skills="Java"),
        Resume(id=3, skills="Python, Docker"),
    ]


@pytest.fixture
def resume_store(scenario_resumes):
    return DocumentStore(scenario_resumes)


@pytest.fixture
def resume_engine(resume_store):
    return SearchEngine(resume_store)


@pytest.fixture
def sample_jobs():
    """A small job corpus with multi-word skills and overlapping titles."""
    return [
        Job(id=1, title="Data Scientist", skills="Python, Machine Learning, SQL"),
        Job(id=2, title="Backend Engineer", skills="Java, Spring Boot, Docker"),
        Job(id=3, title="Senior Data Engineer", skills="Python, ETL, Data Pipeline, AWS"),
        Job(id=4, title="Frontend Developer", skills="JavaScript, React"),
        Job(id=5, title="ML Engineer", skills="Python, Deep Learning, Docker"),
    ]


@pytest.fixture
def job_store(sample_jobs):
    return DocumentStore(sample_jobs)


@pytest.fixture
def job_engine(job_store):
    return SearchEngine(job_store)


# =============================================================================
# FILE FIXTURES
# =============================================================================


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
