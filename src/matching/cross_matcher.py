"""Job-to-résumé matching."""
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from src.matching.engine import SearchEngine
from src.matching.scorer import Match, matched_skills, score_compatibility
from src.matching.topk import RankingStrategy, select_top_k
from src.records.models import Job, Resume
from src.store.document_store import DocumentStore

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 100


@dataclass
class CandidateMatch:
    """A résumé ranked against one job."""

    resume_id: int
    score: int
    resume: Resume
    matched_skills: list[str] = field(default_factory=list)


@dataclass
class JobMatchReport:
    """Best résumé match(es) for one job.

    A job with no résumé scoring above 0 is still reported, with
    best_score 0 and no tied résumés.
    """

    job_id: int
    job: Job
    best_score: int = 0
    tied_resume_ids: list[int] = field(default_factory=list)
    candidates_considered: int = 0
    matched_count: int = 0

    @property
    def has_match(self) -> bool:
        return self.best_score > 0


class CrossMatcher:
    """Find the best résumés for jobs using the résumé search engine.

    Candidates always come from the résumé engine's retrieval step (the
    index, unless the engine scans), never from a blind pass over every
    résumé. Nothing is written back to either store.
    """

    def __init__(
        self,
        resume_engine: SearchEngine[Resume],
        ranking: Optional[RankingStrategy] = None,
    ):
        """
        Initialize cross matcher.

        Args:
            resume_engine: Engine over the résumé store
            ranking: Ranking strategy (defaults to the engine's)
        """
        self.resume_engine = resume_engine
        self.ranking = ranking or resume_engine.ranking

    def _score_job(self, job: Job) -> tuple[set[int], list[Match]]:
        candidate_ids = self.resume_engine.candidates(job.skills)
        matches = []
        for resume_id in candidate_ids:
            resume = self.resume_engine.get(resume_id)
            if resume is None:
                continue
            score = score_compatibility(job, resume)
            if score > 0:
                matches.append(Match(doc_id=resume_id, score=score))
        return candidate_ids, matches

    def candidates_for_job(
        self, job: Job, max_results: Optional[int] = None
    ) -> list[CandidateMatch]:
        """Rank résumés for a single job, best first."""
        _, matches = self._score_job(job)
        candidates = []
        for m in select_top_k(matches, max_results, self.ranking):
            resume = self.resume_engine.store[m.doc_id]
            candidates.append(
                CandidateMatch(
                    resume_id=m.doc_id,
                    score=m.score,
                    resume=resume,
                    matched_skills=matched_skills(job, resume),
                )
            )
        return candidates

    def best_match_for_job(self, job_id: int, job: Job) -> JobMatchReport:
        """Best score and every résumé tied at it for one job."""
        candidate_ids, matches = self._score_job(job)
        report = JobMatchReport(
            job_id=job_id,
            job=job,
            candidates_considered=len(candidate_ids),
            matched_count=len(matches),
        )
        if not matches:
            return report

        ranked = select_top_k(matches, None, self.ranking)
        report.best_score = ranked[0].score
        report.tied_resume_ids = [m.doc_id for m in ranked if m.score == report.best_score]
        return report

    def best_matches_for_jobs(
        self, jobs: DocumentStore[Job], limit: Optional[int] = None
    ) -> list[JobMatchReport]:
        """Report the best résumé match for each of the first ``limit`` jobs.

        Args:
            jobs: Job store, processed in ID order
            limit: Number of jobs to process (all when None)

        Returns:
            One report per processed job, including jobs with no match
        """
        total = jobs.size() if limit is None else max(0, min(limit, jobs.size()))
        self.resume_engine.ensure_indexed()

        started = time.perf_counter()
        reports = []
        for job_id in range(total):
            reports.append(self.best_match_for_job(job_id, jobs[job_id]))
            if (job_id + 1) % PROGRESS_EVERY == 0:
                logger.info("Progress: %d/%d jobs processed", job_id + 1, total)

        elapsed = time.perf_counter() - started
        matched = sum(1 for r in reports if r.has_match)
        logger.info(
            "Matched %d of %d jobs in %.3fs", matched, total, elapsed,
        )
        return reports
