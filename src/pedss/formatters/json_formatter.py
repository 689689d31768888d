"""JSON export of the full assessment records, for backups and PDF tooling."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence, Union

from pedss.models import Assessment


def to_json(assessments: Sequence[Assessment]) -> str:
    """Indented JSON array of assessments."""
    return json.dumps([a.model_dump(mode="json") for a in assessments], indent=2, ensure_ascii=False)


class JSONFormatter:
    """Renders assessments as indented JSON bytes."""

    def format(self, data: Union[Assessment, Sequence[Assessment]], **kwargs: Any) -> bytes:
        if isinstance(data, Assessment):
            data = [data]
        return to_json(data).encode("utf-8")

    def format_to_file(self, data: Union[Assessment, Sequence[Assessment]], path: Path, **kwargs: Any) -> Path:
        path.write_bytes(self.format(data, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/json"

    @property
    def extension(self) -> str:
        return ".json"
