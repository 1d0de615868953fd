"""Application settings using Pydantic."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.matching.engine import RetrievalStrategy
from src.matching.topk import RankingStrategy


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data files
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the CSV datasets",
    )
    jobs_file: str = Field(
        default="job_description_clean.csv",
        description="Clean job CSV (Job_ID,Title,Skills)",
    )
    resumes_file: str = Field(
        default="resume_clean.csv",
        description="Clean résumé CSV (Resume_ID,Skills)",
    )
    raw_jobs_file: str = Field(
        default="job_description.csv",
        description="Raw job descriptions consumed by the cleaning pass",
    )
    raw_resumes_file: str = Field(
        default="resume.csv",
        description="Raw résumés consumed by the cleaning pass",
    )
    skills_file: Optional[Path] = Field(
        default=None,
        description="Optional YAML skill vocabulary overriding the built-in list",
    )

    # Search
    retrieval_strategy: RetrievalStrategy = Field(
        default=RetrievalStrategy.INDEXED,
        description="Candidate retrieval: 'indexed' or 'scan'",
    )
    ranking_strategy: RankingStrategy = Field(
        default=RankingStrategy.TOP_K,
        description="Ranking: 'top_k' or 'full_sort'",
    )
    default_max_results: int = Field(
        default=10,
        ge=1,
        description="Results shown when --max-results is not given",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a rotating log file",
    )
    log_quiet: bool = Field(
        default=False,
        description="Hide indexing, loading and matching progress messages",
    )

    def _data_path(self, name: str) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.data_dir / path

    @property
    def jobs_path(self) -> Path:
        return self._data_path(self.jobs_file)

    @property
    def resumes_path(self) -> Path:
        return self._data_path(self.resumes_file)

    @property
    def raw_jobs_path(self) -> Path:
        return self._data_path(self.raw_jobs_file)

    @property
    def raw_resumes_path(self) -> Path:
        return self._data_path(self.raw_resumes_file)


# Global settings instance
settings = Settings()
