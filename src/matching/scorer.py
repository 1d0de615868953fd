"""Additive relevance scoring for search candidates."""
from dataclasses import dataclass

from src.matching.normalizer import normalize, split_skills
from src.records.models import Job, Record, Resume
from src.records.skills import MIN_KEYWORD_LENGTH, NOT_SPECIFIED, skill_keywords

# Skill query weights
SKILL_IN_SKILLS = 10
SKILL_IN_TEXT = 5
WORD_IN_SKILLS = 2

# Title query weights
QUERY_IN_TITLE = 20
QUERY_IN_TEXT = 10
WORD_IN_TITLE = 5
WORD_IN_TEXT = 2

# Job/résumé compatibility weight per shared skill
COMPATIBLE_SKILL = 5


@dataclass(frozen=True)
class Match:
    """A scored document. Orders by score descending, then ID ascending."""

    doc_id: int
    score: int

    @property
    def rank_key(self) -> tuple[int, int]:
        return (-self.score, self.doc_id)


def score_skill_query(query: str, record: Record) -> int:
    """Score a record against a skill search query.

    Comma queries score each listed skill separately. Single queries score
    the whole phrase plus a small bonus per word found in the skills.
    """
    norm_skills = normalize(record.skills)
    norm_text = normalize(record.text)
    score = 0

    if "," in query:
        for term in split_skills(query):
            term = normalize(term)
            if not term:
                continue
            if term in norm_skills:
                score += SKILL_IN_SKILLS
            if term in norm_text:
                score += SKILL_IN_TEXT
        return score

    norm_query = normalize(query)
    if not norm_query:
        return 0
    if norm_query in norm_skills:
        score += SKILL_IN_SKILLS
    if norm_query in norm_text:
        score += SKILL_IN_TEXT
    for word in norm_query.split():
        if word in norm_skills:
            score += WORD_IN_SKILLS
    return score


def score_title_query(query: str, record: Record) -> int:
    """Score a record against a title search query."""
    norm_query = normalize(query)
    if not norm_query:
        return 0
    norm_title = normalize(record.title)
    norm_text = normalize(record.text)
    score = 0

    if norm_query in norm_title:
        score += QUERY_IN_TITLE
    if norm_query in norm_text:
        score += QUERY_IN_TEXT
    for word in norm_query.split():
        if word in norm_title:
            score += WORD_IN_TITLE
        if word in norm_text:
            score += WORD_IN_TEXT
    return score


def job_skill_terms(job_skills: str) -> list[str]:
    """Normalized skill terms of a job.

    Skills split on commas; a comma-free skill set splits into keywords,
    dropping stop words and fragments too short to match meaningfully.
    Placeholder skills yield no terms.
    """
    if job_skills.strip() == NOT_SPECIFIED:
        return []
    if "," in job_skills:
        return [t for t in (normalize(p) for p in split_skills(job_skills)) if t]
    terms = (normalize(w) for w in skill_keywords(job_skills))
    return [t for t in terms if len(t) >= MIN_KEYWORD_LENGTH]


def matched_skills(job: Job, resume: Resume) -> list[str]:
    """Job skill terms found in the résumé's skills."""
    if resume.skills.strip() == NOT_SPECIFIED:
        return []
    norm_resume = normalize(resume.skills)
    return [term for term in job_skill_terms(job.skills) if term in norm_resume]


def score_compatibility(job: Job, resume: Resume) -> int:
    """Score how well a résumé covers a job's skills (+5 per shared skill)."""
    return COMPATIBLE_SKILL * len(matched_skills(job, resume))


class SkillQueryScorer:
    """CandidateScorer for skill search."""

    def score(self, query: str, record: Record) -> int:
        return score_skill_query(query, record)


class TitleQueryScorer:
    """CandidateScorer for title search."""

    def score(self, query: str, record: Record) -> int:
        return score_title_query(query, record)
