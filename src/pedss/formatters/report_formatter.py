"""Plain-text assessment report.

Section headings are fixed: PATIENT INFORMATION, PEDSS SCORE, PARAMETER
BREAKDOWN, CLINICAL INTERPRETATION and RISK ASSESSMENT, followed by a
generation-time footer.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pedss.core.config import ExportConfig
from pedss.models import Assessment
from pedss.scoring import MAX_SCORE, PARAMETER_CATALOG

# (min score, clinical interpretation, risk description, short summary)
_INTERPRETATIONS: tuple[tuple[int, str, str, str], ...] = (
    (
        4,
        "This patient demonstrates high-risk factors including abnormal premorbid status "
        "and drug refractoriness. Immediate intensive care unit admission with continuous "
        "monitoring is strongly recommended.",
        "HIGH MORTALITY RISK - Immediate intensive care recommended.",
        "High mortality risk. Immediate intensive care recommended.",
    ),
    (
        3,
        "The patient shows concerning features that suggest a poor outcome is likely. "
        "Close monitoring in a high-dependency unit is advised.",
        "MEDIUM RISK - Poor outcome likely. Close monitoring and aggressive treatment advised.",
        "Poor outcome likely. Close monitoring and aggressive treatment advised.",
    ),
    (
        1,
        "Moderate risk factors are present. Standard care protocols should be followed "
        "with regular reassessment.",
        "MODERATE RISK - Standard care with regular assessment.",
        "Moderate risk. Standard care with regular assessment.",
    ),
    (
        0,
        "Low risk profile suggests good prognosis with routine care. Continue standard "
        "monitoring and treatment protocols.",
        "LOW RISK - Routine care and monitoring.",
        "Low risk. Routine care and monitoring.",
    ),
)


def _bucket(score: int) -> tuple[int, str, str, str]:
    for entry in _INTERPRETATIONS:
        if score >= entry[0]:
            return entry
    return _INTERPRETATIONS[-1]


def clinical_interpretation(score: int) -> str:
    return _bucket(score)[1]


def risk_description(score: int) -> str:
    return _bucket(score)[2]


def risk_summary(score: int) -> str:
    """One-line text shown next to the score on the results screen."""
    return _bucket(score)[3]


def _heading(title: str, underline: str = "-") -> list[str]:
    return [title, underline * len(title)]


def to_report(
    assessment: Assessment,
    generated_at: Optional[datetime] = None,
    config: Optional[ExportConfig] = None,
) -> str:
    """Render *assessment* as a structured plain-text report."""
    config = config or ExportConfig()
    generated_at = generated_at or datetime.now()
    patient = assessment.patient_data
    params = assessment.parameters

    lines: list[str] = [*_heading("PEDSS ASSESSMENT REPORT", "="), ""]

    lines += _heading("PATIENT INFORMATION")
    lines += [
        f"Name/ID: {patient.name}",
        f"Age: {patient.age_months} months",
        f"Gender: {patient.gender.value}",
        f"Assessment Date: {patient.assessment_date.isoformat()}",
        "",
    ]

    lines += _heading("PEDSS SCORE")
    lines += [
        f"Total Score: {assessment.score}/{MAX_SCORE}",
        f"Risk Level: {assessment.risk_level.value}",
        "",
    ]

    lines += _heading("PARAMETER BREAKDOWN")
    for key in ("P", "E", "D", "S1", "S2"):
        info = PARAMETER_CATALOG[key]
        lines.append(f"{key} ({info.label}): {getattr(params, key)}/{info.max_value}")
    lines.append("")

    lines += _heading("CLINICAL INTERPRETATION")
    lines += [clinical_interpretation(assessment.score), ""]

    lines += _heading("RISK ASSESSMENT")
    lines += [risk_description(assessment.score), ""]

    lines += [
        "---",
        f"Report Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        f"{config.app_name} v{config.app_version}",
        config.institution,
    ]
    return "\n".join(lines)


class ReportFormatter:
    """Renders a single assessment as a UTF-8 text report."""

    def __init__(self, config: Optional[ExportConfig] = None) -> None:
        self._config = config or ExportConfig()

    def format(self, data: Assessment, **kwargs: Any) -> bytes:
        return to_report(data, generated_at=kwargs.get("generated_at"), config=self._config).encode("utf-8")

    def format_to_file(self, data: Assessment, path: Path, **kwargs: Any) -> Path:
        path.write_bytes(self.format(data, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "text/plain"

    @property
    def extension(self) -> str:
        return ".txt"
