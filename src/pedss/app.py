"""Composition root: wires settings, storage and services for a UI shell."""

from __future__ import annotations

import logging
from typing import Optional

from pedss.core.config import AppSettings
from pedss.core.logging_config import setup_logging
from pedss.core.startup_checks import validate_settings
from pedss.formatters import to_csv, to_csv_row, to_json, to_report
from pedss.models import ParameterSet, ScoreResult
from pedss.persistence import IPersistenceBackend, create_backend
from pedss.scoring import finalize, preview_score
from pedss.services import AssessmentRepository, ExportService, ProfileStore, SettingsStore
from pedss.validation import validate_patient

log = logging.getLogger(__name__)


class PedssApp:
    """Everything the screens call into, built from one ``AppSettings``."""

    validate_patient = staticmethod(validate_patient)
    to_csv = staticmethod(to_csv)
    to_csv_row = staticmethod(to_csv_row)
    to_report = staticmethod(to_report)
    to_json = staticmethod(to_json)

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        backend: Optional[IPersistenceBackend] = None,
    ) -> None:
        self.settings = settings or AppSettings()
        self.backend = backend or create_backend(self.settings.persistence)
        self.repository = AssessmentRepository(self.backend)
        self.settings_store = SettingsStore(self.backend)
        self.profile_store = ProfileStore(self.backend)
        self.exports = ExportService(self.repository, self.settings.export)

    @classmethod
    def from_env(cls) -> PedssApp:
        """Load settings from ``PEDSS_*`` variables, validate them and set up logging."""
        settings = AppSettings()
        validate_settings(settings)
        setup_logging(settings.observability)
        app = cls(settings)
        log.info("PEDSS core ready (backend=%s)", settings.persistence.backend)
        return app

    @staticmethod
    def preview_score(params: ParameterSet) -> int:
        return preview_score(params)

    @staticmethod
    def finalize_score(params: ParameterSet) -> ScoreResult:
        return finalize(params)
