"""Shared technical skill vocabulary."""
import logging
import string
from pathlib import Path
from typing import Iterable, Optional

import yaml

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"

# Canonical, case-preserved skill names recognized in jobs and résumés.
TECHNICAL_SKILLS: frozenset[str] = frozenset([
    "SQL", "Python", "Java", "JavaScript", "C++", "C#", "R", "Scala", "Go", "Rust",
    "Power BI", "Tableau", "Excel", "Pandas", "NumPy", "Matplotlib", "Seaborn",
    "Machine Learning", "Deep Learning", "NLP", "Computer Vision", "Statistics",
    "TensorFlow", "PyTorch", "Keras", "Scikit-learn", "MLOps", "ML",
    "REST APIs", "Spring Boot", "Docker", "Kubernetes", "Git", "Agile", "Scrum",
    "System Design", "Microservices", "AWS", "Azure", "GCP", "Cloud",
    "Data Cleaning", "Data Analysis", "Reporting", "ETL", "Data Pipeline",
    "Product Roadmap", "User Stories", "Stakeholder Management", "Project Management",
    "React", "Angular", "Vue", "Node.js", "Express", "Django", "Flask",
    "MongoDB", "PostgreSQL", "MySQL", "Redis", "Elasticsearch",
    "Linux", "Windows", "macOS", "Bash", "Shell", "DevOps", "CI/CD",
])


# Connective words that never name a skill on their own
STOP_WORDS: frozenset[str] = frozenset([
    "a", "an", "and", "or", "the", "for", "with", "in", "of", "to", "on",
    "at", "as", "by", "from", "plus", "strong", "good", "experience",
])

MIN_KEYWORD_LENGTH = 2


def skill_keywords(text: str) -> list[str]:
    """Lowercased words of free skill text that could name a skill.

    Stop words and words shorter than MIN_KEYWORD_LENGTH are dropped, so
    "cooking for a bakery" gives ["cooking", "bakery"].
    """
    words = (w.strip(string.punctuation).lower() for w in text.split())
    return [w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in STOP_WORDS]


def _canonical_lookup(vocabulary: Iterable[str]) -> dict[str, str]:
    return {skill.lower(): skill for skill in vocabulary}


_DEFAULT_LOOKUP = _canonical_lookup(TECHNICAL_SKILLS)


def filter_technical_skills(
    raw_skills: str,
    vocabulary: Optional[frozenset[str]] = None,
) -> str:
    """Keep only recognized technical skills from a comma-separated string.

    Matching is case-insensitive; kept skills are rewritten in their
    canonical casing and joined with ", " in input order.

    Args:
        raw_skills: Comma-separated skill text, possibly noisy
        vocabulary: Skill names to accept (defaults to TECHNICAL_SKILLS)

    Returns:
        Filtered skills, or NOT_SPECIFIED when nothing is recognized
    """
    lookup = _DEFAULT_LOOKUP if vocabulary is None else _canonical_lookup(vocabulary)

    kept = []
    for skill in raw_skills.split(","):
        skill = skill.strip()
        if not skill:
            continue
        canonical = lookup.get(skill.lower())
        if canonical is not None:
            kept.append(canonical)

    return ", ".join(kept) if kept else NOT_SPECIFIED


def load_skill_vocabulary(path: str | Path) -> frozenset[str]:
    """Load a skill vocabulary from a YAML file.

    The file holds either a plain list of skill names or a mapping with a
    ``skills`` key containing that list.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("skills", [])

    skills = frozenset(str(s).strip() for s in data if str(s).strip())
    logger.info("Loaded %d skills from %s", len(skills), path)
    return skills
