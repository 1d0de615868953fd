"""Job and résumé record types."""
from .models import Job, Record, Resume
from .skills import TECHNICAL_SKILLS, filter_technical_skills, load_skill_vocabulary

__all__ = [
    "Job",
    "Record",
    "Resume",
    "TECHNICAL_SKILLS",
    "filter_technical_skills",
    "load_skill_vocabulary",
]
