"""End-to-end flow through PedssApp with an in-memory backend."""

from __future__ import annotations

import pytest

from pedss import PatientDraft, ParameterDraft, PedssApp, RiskTier
from pedss.core.config import AppSettings, ExportConfig, PersistenceConfig
from pedss.persistence import MemoryPersistenceBackend


@pytest.fixture
def app(tmp_path) -> PedssApp:
    settings = AppSettings(
        persistence=PersistenceConfig(backend="memory"),
        export=ExportConfig(directory=tmp_path / "exports"),
    )
    return PedssApp(settings)


class TestPedssApp:
    def test_uses_configured_backend(self, app) -> None:
        assert isinstance(app.backend, MemoryPersistenceBackend)

    @pytest.mark.asyncio
    async def test_full_flow(self, app) -> None:
        patient = app.validate_patient(PatientDraft(name="Case-42", age="24", gender="Male"))

        draft = ParameterDraft()
        draft.set("P", 1)
        draft.set("E", 1)
        assert app.preview_score(draft.snapshot()) == 2
        draft.set("D", 2)
        draft.set("S1", 0)
        draft.toggle_critical("shock")

        result = app.finalize_score(draft.snapshot())
        saved = await app.repository.save_result(patient, result)

        assert saved.score == 5
        assert saved.risk_level is RiskTier.HIGH
        assert (await app.repository.get_statistics()).high_risk == 1
        assert app.to_csv_row(saved).startswith(f'"{saved.id}","Case-42"')

        path = await app.exports.export_assessment_report(saved.id)
        assert "PEDSS SCORE" in path.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_preferences_share_backend(self, app) -> None:
        await app.settings_store.save({"dark_mode": True})
        await app.profile_store.save({"name": "Dr. Rao"})
        assert (await app.settings_store.get()).dark_mode is True
        assert (await app.profile_store.get()).name == "Dr. Rao"
