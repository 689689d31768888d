"""CSV export: a fixed 13-column schema, every data cell double-quoted."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

from pedss.models import Assessment

CSV_HEADERS: tuple[str, ...] = (
    "ID",
    "Patient Name",
    "Age",
    "Gender",
    "Date",
    "P Score",
    "E Score",
    "D Score",
    "S1 Score",
    "S2 Score",
    "Total Score",
    "Risk Level",
    "Created At",
)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _number(value: Optional[int]) -> int:
    return 0 if value is None else value


def _cells(assessment: Assessment) -> list[Any]:
    patient = assessment.patient_data
    params = assessment.parameters
    return [
        _text(assessment.id),
        _text(patient.name),
        _text(patient.age_months),
        _text(patient.gender),
        _text(patient.assessment_date),
        _number(params.P),
        _number(params.E),
        _number(params.D),
        _number(params.S1),
        _number(params.S2),
        _number(assessment.score),
        _text(assessment.risk_level),
        _text(assessment.created_at),
    ]


def _quoted(rows: Iterable[list[Any]]) -> list[str]:
    lines = []
    for row in rows:
        buf = io.StringIO()
        csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="").writerow(row)
        lines.append(buf.getvalue())
    return lines


def to_csv_row(assessment: Assessment) -> str:
    """One quoted CSV line (no trailing newline)."""
    return _quoted([_cells(assessment)])[0]


def to_csv(assessments: Sequence[Assessment]) -> str:
    """Header row plus one row per assessment, joined with ``\\n``."""
    return "\n".join([",".join(CSV_HEADERS), *_quoted(_cells(a) for a in assessments)])


class CSVFormatter:
    """Renders assessments as UTF-8 CSV bytes."""

    def format(self, data: Union[Assessment, Sequence[Assessment]], **kwargs: Any) -> bytes:
        if isinstance(data, Assessment):
            data = [data]
        return to_csv(data).encode("utf-8")

    def format_to_file(self, data: Union[Assessment, Sequence[Assessment]], path: Path, **kwargs: Any) -> Path:
        path.write_bytes(self.format(data, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "text/csv"

    @property
    def extension(self) -> str:
        return ".csv"
