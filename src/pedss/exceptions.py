"""Exception hierarchy for pedss."""

from __future__ import annotations


class PedssError(Exception):
    """Base exception for all pedss errors."""


class ValidationError(PedssError):
    """Raised when patient input or a parameter set fails validation.

    ``fields`` names every offending field, in prompting order.
    """

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class StorageError(PedssError):
    """Raised when the underlying key-value store cannot be read or written."""


class SchemaError(StorageError):
    """Stored data does not match any known schema version."""


class NotFoundError(PedssError):
    """No assessment exists with the requested id."""

    def __init__(self, assessment_id: str) -> None:
        super().__init__(f"Assessment not found: {assessment_id}")
        self.assessment_id = assessment_id
