"""Plain-text rendering of search and matching results."""
from src.matching.cross_matcher import CandidateMatch, JobMatchReport
from src.matching.scorer import Match, job_skill_terms
from src.records.models import Job
from src.store.document_store import DocumentStore

SEPARATOR = "-" * 40
SUMMARY_PREVIEW = 80


def format_search_results(
    query: str, matches: list[Match], store: DocumentStore
) -> str:
    """Render ranked search matches with each record's display block."""
    if not matches:
        return f"No matches found for '{query}'"

    lines = [f"=== Top {len(matches)} Matches for '{query}' ==="]
    for rank, match in enumerate(matches, start=1):
        lines.append("")
        lines.append(f"Match {rank} (Score: {match.score}):")
        lines.append(f"ID: {match.doc_id}")
        lines.append(store[match.doc_id].display())
        lines.append(SEPARATOR)
    return "\n".join(lines)


def format_candidates(job: Job, candidates: list[CandidateMatch]) -> str:
    """Render the ranked résumés for one job."""
    lines = [
        f"=== Top {len(candidates)} Candidates for '{job.title}' ===",
        f"Required Skills: {job.skills}",
    ]
    if not candidates:
        lines.append("No suitable candidates found for this job description.")
        return "\n".join(lines)

    required = len(job_skill_terms(job.skills))
    for rank, candidate in enumerate(candidates, start=1):
        summary = candidate.resume.summary[:SUMMARY_PREVIEW]
        lines.extend([
            "",
            f"Candidate {rank} (Score: {candidate.score}):",
            f"ID: {candidate.resume_id}",
            f"Skills: {candidate.resume.skills}",
            f"Matched Skills: {', '.join(candidate.matched_skills)}",
            f"Skill Matches: {len(candidate.matched_skills)} out of {required} required skills",
            f"Summary: {summary}...",
            SEPARATOR,
        ])
    lines.append(f"Found {len(candidates)} candidates with matching skills.")
    return "\n".join(lines)


def format_job_report(report: JobMatchReport) -> str:
    """Render one job's best-match report."""
    lines = [
        f"Job ID: {report.job.id}",
        f"Job Title: {report.job.title}",
        f"Job Skills: {report.job.skills}",
    ]
    if not report.has_match:
        lines.append("No matching resumes found.")
    else:
        lines.extend([
            f"Resume ID: {', '.join(str(i) for i in report.tied_resume_ids)}",
            f"Best Score: {report.best_score}",
            f"Candidates Found: {report.matched_count} "
            f"(from {report.candidates_considered} candidates)",
        ])
    lines.append(SEPARATOR)
    return "\n".join(lines)


def format_best_matches(reports: list[JobMatchReport]) -> str:
    """Render best-match reports for a batch of jobs."""
    matched = sum(1 for r in reports if r.has_match)
    body = "\n".join(format_job_report(r) for r in reports)
    return f"{body}\nMatched {matched} of {len(reports)} jobs."
