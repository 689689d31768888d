"""Shared fixtures for pedss tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from pedss.models import CriticalSickness, Gender, ParameterSet, PatientRecord
from pedss.services.assessment_repository import AssessmentRepository
from tests.fakes.fake_persistence import FakePersistenceBackend


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


@pytest.fixture
def backend() -> FakePersistenceBackend:
    return FakePersistenceBackend()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def repository(backend: FakePersistenceBackend, clock: StepClock) -> AssessmentRepository:
    return AssessmentRepository(backend, clock=clock)


@pytest.fixture
def patient() -> PatientRecord:
    """24-month-old male from the reference scenario."""
    return PatientRecord(
        name="Case-001",
        age_months=24,
        gender=Gender.MALE,
        assessment_date=date(2024, 3, 15),
    )


@pytest.fixture
def high_risk_params() -> ParameterSet:
    """P=1, E=1, D=2, S1=0, shock only: total 5."""
    return ParameterSet(P=1, E=1, D=2, S1=0, S2=CriticalSickness(shock=True))
