"""Job and résumé records."""
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, runtime_checkable

from src.records.skills import NOT_SPECIFIED, filter_technical_skills, skill_keywords

UNKNOWN_ID = -1
UNKNOWN_POSITION = "Unknown Position"
COMPANY_NOT_SPECIFIED = "Company Not Specified"
LOCATION_NOT_SPECIFIED = "Location Not Specified"
LEVEL_NOT_SPECIFIED = "Not Specified"
DEFAULT_NAME = "Professional"
DEFAULT_EXPERIENCE = "Experienced"
EDUCATION_NOT_SPECIFIED = "Not Specified"
CONTACT_NOT_PROVIDED = "Not Provided"


@runtime_checkable
class Record(Protocol):
    """Capabilities the search engine needs from a stored document."""

    @property
    def text(self) -> str:
        """Full free text indexed into the description mapping."""
        ...

    @property
    def skills(self) -> str:
        """Comma-separated canonical skill names."""
        ...

    @property
    def title(self) -> str:
        """Short heading indexed into the title mapping."""
        ...

    def display(self) -> str:
        """Human-readable block for reports."""
        ...


def _parse_id(value: str) -> int:
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return UNKNOWN_ID


def _or_default(value: Optional[str], default: str) -> str:
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _set(obj, name: str, value) -> None:
    object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class Job:
    """A job posting."""

    id: int = UNKNOWN_ID
    title: str = UNKNOWN_POSITION
    skills: str = NOT_SPECIFIED
    description: str = ""
    company: str = COMPANY_NOT_SPECIFIED
    location: str = LOCATION_NOT_SPECIFIED
    experience_level: str = LEVEL_NOT_SPECIFIED

    def __post_init__(self):
        """Replace missing fields with placeholders."""
        _set(self, "title", _or_default(self.title, UNKNOWN_POSITION))
        _set(self, "skills", _or_default(self.skills, NOT_SPECIFIED))
        _set(self, "company", _or_default(self.company, COMPANY_NOT_SPECIFIED))
        _set(self, "location", _or_default(self.location, LOCATION_NOT_SPECIFIED))
        _set(self, "experience_level", _or_default(self.experience_level, LEVEL_NOT_SPECIFIED))
        if not (self.description or "").strip():
            _set(self, "description", f"Job: {self.title} requiring {self.skills}")

    @property
    def text(self) -> str:
        return self.description

    def display(self) -> str:
        return "\n".join([
            f"Job Description: {self.title} needed with experience in {self.skills}.",
            f"Title: {self.title}",
            f"Skills: {self.skills}",
        ])

    @classmethod
    def from_csv_row(cls, fields: Sequence[str]) -> "Job":
        """Build a job from a clean CSV row: Job_ID, Title, Skills.

        Rows with fewer than three fields are kept with placeholder values
        and the raw row as description.
        """
        if len(fields) >= 3:
            return cls(
                id=_parse_id(fields[0]),
                title=fields[1],
                skills=fields[2],
            )
        return cls(description=",".join(fields))

    @classmethod
    def from_description(
        cls,
        text: str,
        vocabulary: Optional[frozenset[str]] = None,
    ) -> "Job":
        """Build an ad-hoc job from free text.

        Expected shape: "<title> needed with experience in <skills>. ..."
        When no known skill is recognized the raw skill text is kept so the
        job can still be matched. Comma-separated phrases made only of stop
        words are dropped; comma-free text is reduced to its keywords.
        """
        title = UNKNOWN_POSITION
        needed = text.find("needed")
        if needed != -1:
            title = text[:needed].strip() or UNKNOWN_POSITION

        marker = "experience in"
        start = text.find(marker)
        raw_skills = text[start + len(marker):] if start != -1 else text
        period = raw_skills.find(".")
        if period != -1:
            raw_skills = raw_skills[:period]
        raw_skills = raw_skills.strip()

        skills = filter_technical_skills(raw_skills, vocabulary)
        if skills == NOT_SPECIFIED:
            if "," in raw_skills:
                phrases = [p.strip() for p in raw_skills.split(",") if skill_keywords(p)]
            else:
                phrases = skill_keywords(raw_skills)
            skills = ", ".join(phrases) or NOT_SPECIFIED

        return cls(title=title, skills=skills, description=text)


@dataclass(frozen=True)
class Resume:
    """A candidate résumé."""

    id: int = UNKNOWN_ID
    skills: str = NOT_SPECIFIED
    summary: str = ""
    name: str = DEFAULT_NAME
    experience: str = DEFAULT_EXPERIENCE
    education: str = EDUCATION_NOT_SPECIFIED
    contact: str = CONTACT_NOT_PROVIDED

    def __post_init__(self):
        """Replace missing fields with placeholders."""
        _set(self, "skills", _or_default(self.skills, NOT_SPECIFIED))
        _set(self, "name", _or_default(self.name, DEFAULT_NAME))
        _set(self, "experience", _or_default(self.experience, DEFAULT_EXPERIENCE))
        _set(self, "education", _or_default(self.education, EDUCATION_NOT_SPECIFIED))
        _set(self, "contact", _or_default(self.contact, CONTACT_NOT_PROVIDED))
        if not (self.summary or "").strip():
            _set(self, "summary", f"Professional with skills in {self.skills}")

    @property
    def text(self) -> str:
        return self.summary

    @property
    def title(self) -> str:
        # Résumés have no heading to index.
        return ""

    def display(self) -> str:
        return "\n".join([
            f"Details: Experienced professional skilled in {self.skills}.",
            f"Skills: {self.skills}",
        ])

    @classmethod
    def from_csv_row(cls, fields: Sequence[str]) -> "Resume":
        """Build a résumé from a clean CSV row: Resume_ID, Skills."""
        if len(fields) >= 2:
            return cls(id=_parse_id(fields[0]), skills=fields[1])
        return cls(summary=",".join(fields))
