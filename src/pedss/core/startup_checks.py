"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pedss.core.config import AppSettings

log = logging.getLogger(__name__)

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_log_level(settings)
    _check_persistence(settings)
    _check_export(settings)


def _check_log_level(settings: AppSettings) -> None:
    level = settings.observability.log_level.upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"PEDSS_OBSERVABILITY_LOG_LEVEL={settings.observability.log_level!r} is not a "
            f"valid level. Use one of: {', '.join(sorted(_LOG_LEVELS))}."
        )


def _check_persistence(settings: AppSettings) -> None:
    """Warn when assessments will not survive a restart."""
    if settings.persistence.backend == "memory":
        log.warning(
            "PEDSS_PERSISTENCE_BACKEND=memory. Saved assessments will be lost when "
            "the process exits. Use PEDSS_PERSISTENCE_BACKEND=file on devices."
        )
    elif settings.persistence.store_path.exists() and not settings.persistence.store_path.is_dir():
        raise ValueError(
            f"PEDSS_PERSISTENCE_STORE_PATH={settings.persistence.store_path} exists and is "
            "not a directory."
        )


def _check_export(settings: AppSettings) -> None:
    directory = settings.export.directory
    if directory.exists() and not directory.is_dir():
        raise ValueError(f"PEDSS_EXPORT_DIRECTORY={directory} exists and is not a directory.")
