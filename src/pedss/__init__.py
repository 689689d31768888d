"""pedss: PEDSS pediatric seizure risk scoring, storage and export.

Typical flow::

    from pedss import PatientDraft, ParameterDraft, PedssApp, finalize, validate_patient

    app = PedssApp()
    patient = validate_patient(PatientDraft(name="A-12", age="24", gender="Male"))
    draft = ParameterDraft()
    draft.set("P", 1)
    ...
    result = finalize(draft.snapshot())
    assessment = await app.repository.save_result(patient, result)
"""

from __future__ import annotations

from pedss.app import PedssApp
from pedss.core.config import AppSettings
from pedss.exceptions import NotFoundError, PedssError, SchemaError, StorageError, ValidationError
from pedss.formatters import to_csv, to_csv_row, to_json, to_report
from pedss.models import (
    AggregateStatistics,
    Assessment,
    CriticalSickness,
    Gender,
    ParameterSet,
    PatientRecord,
    Profile,
    RiskTier,
    ScoredParameters,
    ScoreResult,
    Settings,
)
from pedss.scoring import (
    ParameterDraft,
    compute_score,
    finalize,
    is_complete,
    missing_parameters,
    preview_score,
    risk_tier,
)
from pedss.services import AssessmentRepository, ExportService, ProfileStore, SettingsStore
from pedss.validation import PatientDraft, validate_patient

__version__ = "1.0.0"

__all__ = [
    "PedssApp",
    "AppSettings",
    "PedssError",
    "ValidationError",
    "StorageError",
    "SchemaError",
    "NotFoundError",
    "Gender",
    "RiskTier",
    "PatientRecord",
    "CriticalSickness",
    "ParameterSet",
    "ScoredParameters",
    "ScoreResult",
    "Assessment",
    "AggregateStatistics",
    "Settings",
    "Profile",
    "ParameterDraft",
    "PatientDraft",
    "validate_patient",
    "preview_score",
    "missing_parameters",
    "is_complete",
    "finalize",
    "compute_score",
    "risk_tier",
    "AssessmentRepository",
    "SettingsStore",
    "ProfileStore",
    "ExportService",
    "to_csv",
    "to_csv_row",
    "to_report",
    "to_json",
]
