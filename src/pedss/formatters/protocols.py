"""Output formatter protocol: the contract every export format implements."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for export formatters (CSV, text report, JSON)."""

    def format(self, data: Any, **kwargs: Any) -> bytes:
        """Render one assessment or a sequence of assessments to UTF-8 bytes."""
        ...

    def format_to_file(self, data: Any, path: Path, **kwargs: Any) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'text/csv')."""
        ...

    @property
    def extension(self) -> str:
        """File extension including the dot (e.g. '.csv')."""
        ...


__all__ = ["IOutputFormatter"]
