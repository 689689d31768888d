"""Writes assessment exports to files in the export directory.

Sharing the resulting file is left to the host application.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from pedss.core.config import ExportConfig
from pedss.exceptions import StorageError
from pedss.formatters import CSVFormatter, IOutputFormatter, JSONFormatter, ReportFormatter
from pedss.services.assessment_repository import AssessmentRepository

log = logging.getLogger(__name__)


class ExportService:
    """Render assessments with the formatters and write them to disk."""

    def __init__(
        self,
        repository: AssessmentRepository,
        config: Optional[ExportConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._repository = repository
        self._config = config or ExportConfig()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._csv = CSVFormatter()
        self._report = ReportFormatter(self._config)
        self._json = JSONFormatter()
        self._last_stamp = 0

    @property
    def directory(self) -> Path:
        return self._config.directory

    def _bulk_stem(self, prefix: str, extension: str) -> str:
        """``<prefix><ms timestamp>``, bumped past files this or an earlier run already wrote."""
        stamp = max(int(self._clock().timestamp() * 1000), self._last_stamp + 1)
        while (self.directory / f"{prefix}{stamp}{extension}").exists():
            stamp += 1
        self._last_stamp = stamp
        return f"{prefix}{stamp}"

    def _write(self, formatter: IOutputFormatter, data: Any, stem: str, **kwargs: Any) -> Path:
        path = self.directory / f"{stem}{formatter.extension}"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            formatter.format_to_file(data, path, **kwargs)
        except OSError as exc:
            raise StorageError(f"Failed to write export {path}: {exc}") from exc
        log.info("Exported %s (%s)", path.name, formatter.content_type)
        return path

    async def export_assessment_csv(self, assessment_id: str) -> Path:
        assessment = await self._repository.get_by_id(assessment_id)
        return self._write(self._csv, assessment, f"PEDSS_Assessment_{assessment.id}")

    async def export_all_csv(self) -> Path:
        assessments = await self._repository.get_all()
        stem = self._bulk_stem("PEDSS_All_Assessments_", self._csv.extension)
        return self._write(self._csv, assessments, stem)

    async def export_assessment_report(self, assessment_id: str) -> Path:
        assessment = await self._repository.get_by_id(assessment_id)
        return self._write(
            self._report,
            assessment,
            f"PEDSS_Report_{assessment.id}",
            generated_at=self._clock(),
        )

    async def export_all_json(self) -> Path:
        assessments = await self._repository.get_all()
        stem = self._bulk_stem("PEDSS_All_Assessments_", self._json.extension)
        return self._write(self._json, assessments, stem)
