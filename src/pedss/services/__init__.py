"""Services: assessment repository, preference stores and file exports."""

from __future__ import annotations

from pedss.services.assessment_repository import AssessmentRepository, compute_statistics
from pedss.services.export_service import ExportService
from pedss.services.preferences import ProfileStore, SettingsStore

__all__ = [
    "AssessmentRepository",
    "ExportService",
    "ProfileStore",
    "SettingsStore",
    "compute_statistics",
]
