"""Tests for settings defaults, env overrides and startup checks."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pedss.core.config import AppSettings, ExportConfig, ObservabilityConfig, PersistenceConfig
from pedss.core.logging_config import setup_logging
from pedss.core.startup_checks import validate_settings


class TestDefaults:
    def test_persistence(self) -> None:
        config = PersistenceConfig()
        assert config.backend == "file"
        assert config.store_path == Path("./pedss_data")

    def test_export(self) -> None:
        config = ExportConfig()
        assert config.app_name == "PEDSS App"
        assert config.app_version == "1.0.0"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PEDSS_PERSISTENCE_BACKEND", "memory")
        monkeypatch.setenv("PEDSS_OBSERVABILITY_LOG_LEVEL", "DEBUG")
        assert PersistenceConfig().backend == "memory"
        assert ObservabilityConfig().log_level == "DEBUG"


class TestStartupChecks:
    def test_rejects_bad_log_level(self) -> None:
        settings = AppSettings(observability=ObservabilityConfig(log_level="LOUD"))
        with pytest.raises(ValueError, match="PEDSS_OBSERVABILITY_LOG_LEVEL"):
            validate_settings(settings)

    def test_warns_on_memory_backend(self, caplog: pytest.LogCaptureFixture) -> None:
        settings = AppSettings(persistence=PersistenceConfig(backend="memory"))
        with caplog.at_level(logging.WARNING, logger="pedss.core.startup_checks"):
            validate_settings(settings)
        assert "will be lost" in caplog.text

    def test_rejects_file_as_store_path(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        settings = AppSettings(persistence=PersistenceConfig(store_path=blocker))
        with pytest.raises(ValueError, match="not a directory"):
            validate_settings(settings)

    def test_accepts_defaults(self, tmp_path) -> None:
        settings = AppSettings(
            persistence=PersistenceConfig(store_path=tmp_path / "data"),
            export=ExportConfig(directory=tmp_path / "exports"),
        )
        validate_settings(settings)


def test_setup_logging_sets_level() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(ObservabilityConfig(log_level="debug", json_logs=True))
        assert logging.getLogger("pedss").level == logging.DEBUG
        assert len(root.handlers) == 1
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
