"""Exceptions for Skill Radar."""


class SkillRadarError(Exception):
    """Base exception for Skill Radar errors."""

    pass


class DocumentNotFoundError(SkillRadarError, IndexError):
    """Raised when a document ID is outside the store's range."""

    def __init__(self, doc_id: int, size: int):
        self.doc_id = doc_id
        self.size = size
        super().__init__(f"Document ID {doc_id} out of range (store size {size})")


class DataSourceError(SkillRadarError):
    """Raised when a data file cannot be opened or written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot use data file {path}: {reason}")
