"""PEDSS score model.

Two distinct entry points exist on purpose:

- ``preview_score`` is the running total shown while parameters are being
  selected.  Unset parameters count as zero.
- ``finalize`` is the only producer of a ``ScoreResult`` and refuses
  incomplete parameter sets.

Neither holds state.  The UI owns a mutable ``ParameterDraft`` and passes
immutable ``ParameterSet`` snapshots in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pedss.exceptions import ValidationError
from pedss.models import (
    PARAMETER_RANGES,
    REQUIRED_PARAMETERS,
    CriticalSickness,
    ParameterSet,
    RiskTier,
    ScoredParameters,
    ScoreResult,
)

log = logging.getLogger(__name__)

MAX_SCORE = 6

_S2_FLAGS = ("shock", "intubation", "mods")

# Lowest score for each tier, checked highest first.
_TIER_THRESHOLDS: tuple[tuple[int, RiskTier], ...] = (
    (4, RiskTier.HIGH),
    (3, RiskTier.MEDIUM),
    (0, RiskTier.LOW),
)


@dataclass(frozen=True)
class ParameterInfo:
    """Display metadata for one scored parameter."""

    key: str
    label: str
    description: str
    max_value: int
    options: tuple[str, ...] = ()


PARAMETER_CATALOG: dict[str, ParameterInfo] = {
    "P": ParameterInfo(
        key="P",
        label="Premorbid PCPCS",
        description="Pediatric Cerebral Performance Category Scale",
        max_value=1,
        options=("≤2 (Normal)", ">2 (Abnormal)"),
    ),
    "E": ParameterInfo(
        key="E",
        label="EEG Background",
        description=(
            "30-minute EEG at 6-12 hours (paucity of sleep markers with continuous "
            "diffuse delta activity or low voltage slow unreactive activity or NCSE)"
        ),
        max_value=1,
        options=("Normal", "Abnormal"),
    ),
    "D": ParameterInfo(
        key="D",
        label="Drug Refractoriness",
        description="Response to treatment",
        max_value=2,
        options=("None", "BDZR", "RSE"),
    ),
    "S1": ParameterInfo(
        key="S1",
        label="Seizure Semiology",
        description="Seizure type classification",
        max_value=1,
        options=("Focal", "Generalized"),
    ),
    "S2": ParameterInfo(
        key="S2",
        label="Critical Sickness",
        description="Presence of critical conditions (shock, ET intubation, MODS)",
        max_value=1,
        options=("Shock", "ET Intubation", "MODS"),
    ),
}


def risk_tier(score: int) -> RiskTier:
    """Classify a PEDSS total: 0-2 Low, 3 Medium, 4-6 High."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise TypeError(f"score must be an int, got {type(score).__name__}")
    if not 0 <= score <= MAX_SCORE:
        raise ValueError(f"score {score} outside 0..{MAX_SCORE}")
    for threshold, tier in _TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    raise AssertionError("unreachable")  # pragma: no cover


def preview_score(params: ParameterSet) -> int:
    """Running total for display; unset parameters contribute 0."""
    total = sum(params.value(name) or 0 for name in REQUIRED_PARAMETERS)
    return total + params.S2.points


def missing_parameters(params: ParameterSet) -> list[str]:
    """Names of required parameters not yet selected, in form order."""
    return [name for name in REQUIRED_PARAMETERS if params.value(name) is None]


def is_complete(params: ParameterSet) -> bool:
    """True when P, E, D and S1 are all selected. S2 is never required."""
    return not missing_parameters(params)


def finalize(params: ParameterSet) -> ScoreResult:
    """Score a complete parameter set.

    Raises:
        ValidationError: listing every missing parameter in ``fields``.
    """
    missing = missing_parameters(params)
    if missing:
        labels = [f"{name} ({PARAMETER_CATALOG[name].label})" for name in missing]
        raise ValidationError(
            "Incomplete assessment, please complete: " + ", ".join(labels),
            fields=missing,
        )

    scored = ScoredParameters(
        P=params.P,
        E=params.E,
        D=params.D,
        S1=params.S1,
        S2=params.S2.points,
    )
    total = scored.total
    result = ScoreResult(total_score=total, risk_tier=risk_tier(total), parameters=scored)
    log.debug("Finalized PEDSS score %d (%s)", total, result.risk_tier.value)
    return result


compute_score = finalize


@dataclass
class ParameterDraft:
    """Mutable, UI-owned parameter selections.

    Call ``snapshot()`` to hand an immutable ``ParameterSet`` to the score
    model.  Invalid values are rejected as they are set.
    """

    P: Optional[int] = None
    E: Optional[int] = None
    D: Optional[int] = None
    S1: Optional[int] = None
    shock: bool = False
    intubation: bool = False
    mods: bool = False

    def set(self, name: str, value: int) -> None:
        if name not in PARAMETER_RANGES:
            raise ValidationError(f"Unknown parameter: {name}", fields=[name])
        allowed = PARAMETER_RANGES[name]
        if isinstance(value, bool) or not isinstance(value, int) or value not in allowed:
            raise ValidationError(
                f"{name} must be one of {', '.join(str(v) for v in allowed)}",
                fields=[name],
            )
        setattr(self, name, value)

    def clear(self, name: str) -> None:
        if name not in PARAMETER_RANGES:
            raise ValidationError(f"Unknown parameter: {name}", fields=[name])
        setattr(self, name, None)

    def toggle_critical(self, flag: str) -> bool:
        """Flip one S2 flag and return its new state."""
        if flag not in _S2_FLAGS:
            raise ValidationError(f"Unknown critical sickness flag: {flag}", fields=["S2"])
        new_value = not getattr(self, flag)
        setattr(self, flag, new_value)
        return new_value

    def reset(self) -> None:
        for name in PARAMETER_RANGES:
            setattr(self, name, None)
        for flag in _S2_FLAGS:
            setattr(self, flag, False)

    def snapshot(self) -> ParameterSet:
        return ParameterSet(
            P=self.P,
            E=self.E,
            D=self.D,
            S1=self.S1,
            S2=CriticalSickness(shock=self.shock, intubation=self.intubation, mods=self.mods),
        )
