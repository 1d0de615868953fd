"""Text normalization and tokenization."""
import string
from typing import Iterator

_STRIP_PUNCTUATION = str.maketrans("", "", string.punctuation)


def normalize(text: str) -> str:
    """Lowercase, drop punctuation (spaces are kept) and trim.

    Idempotent: ``normalize(normalize(x)) == normalize(x)``.
    """
    return text.lower().translate(_STRIP_PUNCTUATION).strip()


def tokenize(text: str) -> Iterator[str]:
    """Yield lowercase, punctuation-free whitespace tokens.

    Empty tokens (e.g. a lone "-") are skipped. Each call returns a fresh
    generator.
    """
    for word in text.split():
        word = word.translate(_STRIP_PUNCTUATION).lower()
        if word:
            yield word


def split_skills(skills: str) -> list[str]:
    """Split a comma-separated skills string into trimmed, non-empty entries."""
    return [s.strip() for s in skills.split(",") if s.strip()]
