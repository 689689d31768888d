"""Tests for ExportService file output."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from pedss.core.config import ExportConfig
from pedss.exceptions import NotFoundError, StorageError
from pedss.scoring import finalize
from pedss.services.export_service import ExportService

_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def exports(repository, tmp_path) -> ExportService:
    return ExportService(repository, ExportConfig(directory=tmp_path / "exports"), clock=lambda: _NOW)


class TestExportService:
    @pytest.mark.asyncio
    async def test_single_csv(self, exports, repository, patient, high_risk_params) -> None:
        saved = await repository.save_result(patient, finalize(high_risk_params))
        path = await exports.export_assessment_csv(saved.id)

        assert path.name == f"PEDSS_Assessment_{saved.id}.csv"
        lines = path.read_text(encoding="utf-8").split("\n")
        assert len(lines) == 2
        assert lines[1].startswith(f'"{saved.id}"')

    @pytest.mark.asyncio
    async def test_all_csv(self, exports, repository, patient, high_risk_params) -> None:
        await repository.save_result(patient, finalize(high_risk_params))
        await repository.save_result(patient, finalize(high_risk_params))
        path = await exports.export_all_csv()

        assert path.name == f"PEDSS_All_Assessments_{int(_NOW.timestamp() * 1000)}.csv"
        assert len(path.read_text(encoding="utf-8").split("\n")) == 3

    @pytest.mark.asyncio
    async def test_report(self, exports, repository, patient, high_risk_params) -> None:
        saved = await repository.save_result(patient, finalize(high_risk_params))
        path = await exports.export_assessment_report(saved.id)

        assert path.suffix == ".txt"
        text = path.read_text(encoding="utf-8")
        assert "RISK ASSESSMENT" in text
        assert "Report Generated: 2024-03-15 12:00:00" in text

    @pytest.mark.asyncio
    async def test_all_json(self, exports, repository, patient, high_risk_params) -> None:
        await repository.save_result(patient, finalize(high_risk_params))
        path = await exports.export_all_json()
        assert len(json.loads(path.read_text(encoding="utf-8"))) == 1

    @pytest.mark.asyncio
    async def test_unknown_id(self, exports) -> None:
        with pytest.raises(NotFoundError):
            await exports.export_assessment_report("missing")

    @pytest.mark.asyncio
    async def test_unwritable_directory(self, repository, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        service = ExportService(repository, ExportConfig(directory=blocker / "exports"))
        with pytest.raises(StorageError):
            await service.export_all_csv()

    @pytest.mark.asyncio
    async def test_bulk_exports_in_same_millisecond_get_distinct_files(
        self, exports, repository, patient, high_risk_params
    ) -> None:
        await repository.save_result(patient, finalize(high_risk_params))
        first = await exports.export_all_csv()
        second = await exports.export_all_csv()

        assert first != second
        assert first.exists() and second.exists()
        assert second.name == f"PEDSS_All_Assessments_{int(_NOW.timestamp() * 1000) + 1}.csv"

    @pytest.mark.asyncio
    async def test_bulk_export_skips_existing_file(self, repository, tmp_path) -> None:
        directory = tmp_path / "exports"
        directory.mkdir()
        stamp = int(_NOW.timestamp() * 1000)
        taken = directory / f"PEDSS_All_Assessments_{stamp}.json"
        taken.write_text("earlier run", encoding="utf-8")

        service = ExportService(repository, ExportConfig(directory=directory), clock=lambda: _NOW)
        path = await service.export_all_json()

        assert path.name == f"PEDSS_All_Assessments_{stamp + 1}.json"
        assert taken.read_text(encoding="utf-8") == "earlier run"
