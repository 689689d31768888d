"""Data models for pedss.

Persisted entities (``PatientRecord``, ``Assessment``, ``Settings``, ``Profile``
and the statistics counters) are pydantic models parsed strictly: unknown
fields are rejected so a corrupt store fails loudly instead of leaking
half-populated records.  In-progress scoring inputs (``ParameterSet``,
``CriticalSickness``) and computed results are frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pedss.exceptions import ValidationError

# ── Enums ────────────────────────────────────────────────────────────


class Gender(str, Enum):
    """Patient gender as captured on the demographics form."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class RiskTier(str, Enum):
    """Risk classification derived from the PEDSS total."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# ── Patient demographics ─────────────────────────────────────────────


class PatientRecord(BaseModel):
    """Validated patient demographics attached to an assessment."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="always")

    name: str = Field(min_length=1)
    age_months: int = Field(ge=0, le=240)
    gender: Gender
    assessment_date: date = Field(default_factory=date.today)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


# ── Scoring inputs ───────────────────────────────────────────────────

# Allowed values per required parameter.
PARAMETER_RANGES: dict[str, tuple[int, ...]] = {
    "P": (0, 1),
    "E": (0, 1),
    "D": (0, 1, 2),
    "S1": (0, 1),
}

REQUIRED_PARAMETERS: tuple[str, ...] = ("P", "E", "D", "S1")


@dataclass(frozen=True)
class CriticalSickness:
    """S2 flags. Any true flag contributes exactly one point."""

    shock: bool = False
    intubation: bool = False
    mods: bool = False

    def any(self) -> bool:
        return self.shock or self.intubation or self.mods

    @property
    def points(self) -> int:
        return 1 if self.any() else 0


@dataclass(frozen=True)
class ParameterSet:
    """Immutable snapshot of the five PEDSS parameters.

    ``None`` for P/E/D/S1 means the clinician has not made a selection yet.
    """

    P: Optional[int] = None
    E: Optional[int] = None
    D: Optional[int] = None
    S1: Optional[int] = None
    S2: CriticalSickness = field(default_factory=CriticalSickness)

    def __post_init__(self) -> None:
        bad = []
        for name, allowed in PARAMETER_RANGES.items():
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value not in allowed:
                bad.append(name)
        if bad:
            raise ValidationError(
                f"Invalid parameter value(s) for {', '.join(bad)}",
                fields=bad,
            )

    def value(self, name: str) -> Optional[int]:
        return getattr(self, name)


class ScoredParameters(BaseModel):
    """Finalized parameter values as persisted; S2 is reduced to 0/1."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    P: int = Field(ge=0, le=1)
    E: int = Field(ge=0, le=1)
    D: int = Field(ge=0, le=2)
    S1: int = Field(ge=0, le=1)
    S2: int = Field(ge=0, le=1)

    @property
    def total(self) -> int:
        return self.P + self.E + self.D + self.S1 + self.S2


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of finalizing a complete parameter set."""

    total_score: int
    risk_tier: RiskTier
    parameters: ScoredParameters


# ── Persisted assessment ─────────────────────────────────────────────


class Assessment(BaseModel):
    """One completed, persisted PEDSS scoring session."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    patient_data: PatientRecord
    parameters: ScoredParameters
    score: int = Field(ge=0, le=6)
    risk_level: RiskTier
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _check_score(self) -> Assessment:
        from pedss.scoring import risk_tier

        if self.score != self.parameters.total:
            raise ValueError(
                f"score {self.score} does not match parameters (expected {self.parameters.total})"
            )
        expected = risk_tier(self.score)
        if self.risk_level is not expected:
            raise ValueError(
                f"risk_level {self.risk_level.value} does not match score {self.score} "
                f"(expected {expected.value})"
            )
        return self


# ── Statistics ───────────────────────────────────────────────────────


class StatisticsCounters(BaseModel):
    """Cached per-tier counters stored next to the assessment collection."""

    model_config = ConfigDict(extra="forbid")

    total: int = Field(default=0, ge=0)
    high_risk: int = Field(default=0, ge=0)
    medium_risk: int = Field(default=0, ge=0)
    low_risk: int = Field(default=0, ge=0)


class AggregateStatistics(StatisticsCounters):
    """Counters plus the average score, as shown on the dashboard."""

    avg_score: float = 0.0


# ── Preferences ──────────────────────────────────────────────────────


class Settings(BaseModel):
    """User preference toggles."""

    model_config = ConfigDict(extra="forbid")

    notifications: bool = True
    dark_mode: bool = False
    auto_save: bool = True
    data_sync: bool = False


class Profile(BaseModel):
    """Free-form clinician profile."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    title: str = ""
    hospital: str = ""
    email: str = ""
    phone: str = ""
    experience: str = ""
    specializations: list[str] = Field(default_factory=list)
