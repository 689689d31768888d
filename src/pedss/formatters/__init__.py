"""Export formatters for assessments.

Usage::

    from pedss.formatters import to_csv, to_report

    csv_text = to_csv(assessments)
    report = to_report(assessment)
"""

from __future__ import annotations

from pedss.formatters.csv_formatter import CSV_HEADERS, CSVFormatter, to_csv, to_csv_row
from pedss.formatters.json_formatter import JSONFormatter, to_json
from pedss.formatters.protocols import IOutputFormatter
from pedss.formatters.report_formatter import (
    ReportFormatter,
    clinical_interpretation,
    risk_description,
    risk_summary,
    to_report,
)

__all__ = [
    "IOutputFormatter",
    "CSVFormatter",
    "ReportFormatter",
    "JSONFormatter",
    "CSV_HEADERS",
    "to_csv",
    "to_csv_row",
    "to_report",
    "to_json",
    "clinical_interpretation",
    "risk_description",
    "risk_summary",
]
