"""Assessment repository: durable collection plus cached statistics.

The collection stored under ``pedss_assessments`` is the source of truth.
Per-tier counters under ``pedss_assessment_counts`` are a cached projection
updated on every save/delete; ``reconcile_statistics`` rebuilds them from
the collection.  If the counter write fails, the collection write is undone
so callers never see half of an operation.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from pedss.exceptions import NotFoundError, SchemaError, StorageError, ValidationError
from pedss.models import (
    AggregateStatistics,
    Assessment,
    ParameterSet,
    PatientRecord,
    RiskTier,
    ScoredParameters,
    ScoreResult,
    StatisticsCounters,
)
from pedss.persistence import ASSESSMENTS_KEY, COUNTS_KEY, IPersistenceBackend
from pedss.scoring import finalize, risk_tier
from pedss.services.schema import dump_collection, load_collection

log = logging.getLogger(__name__)

_TIER_COUNTER = {
    RiskTier.HIGH: "high_risk",
    RiskTier.MEDIUM: "medium_risk",
    RiskTier.LOW: "low_risk",
}


def _round_one_decimal(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_statistics(assessments: list[Assessment]) -> AggregateStatistics:
    """Derive statistics from the full collection."""
    counts = {name: 0 for name in _TIER_COUNTER.values()}
    for assessment in assessments:
        counts[_TIER_COUNTER[assessment.risk_level]] += 1
    total = len(assessments)
    avg = 0.0
    if total:
        avg = _round_one_decimal(Decimal(sum(a.score for a in assessments)) / Decimal(total))
    return AggregateStatistics(total=total, avg_score=avg, **counts)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AssessmentRepository:
    """Save, list, fetch and delete assessments in a key-value backend."""

    def __init__(
        self,
        backend: IPersistenceBackend,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._backend = backend
        self._clock = clock or _utc_now
        self._last_id = 0

    # ── storage helpers ──────────────────────────────────────────────

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._backend.load(key)
        except KeyError:
            return None
        except OSError as exc:
            raise StorageError(f"Failed to read {key}: {exc}") from exc

    def _write(self, key: str, data: str) -> None:
        try:
            self._backend.save(key, data)
        except OSError as exc:
            raise StorageError(f"Failed to write {key}: {exc}") from exc

    def _load_assessments(self) -> list[Assessment]:
        raw = self._read(ASSESSMENTS_KEY)
        if raw is None:
            return []
        return load_collection(raw)

    def _store_assessments(self, assessments: list[Assessment]) -> None:
        self._write(ASSESSMENTS_KEY, dump_collection(assessments))

    def _load_counts(self) -> StatisticsCounters:
        raw = self._read(COUNTS_KEY)
        if raw is None:
            return StatisticsCounters()
        try:
            return StatisticsCounters.model_validate_json(raw)
        except PydanticValidationError as exc:
            raise SchemaError(f"Stored statistics counters failed validation: {exc}") from exc

    def _store_counts(self, counts: StatisticsCounters) -> None:
        self._write(COUNTS_KEY, counts.model_dump_json())

    def _restore_assessments(self, raw: Optional[str]) -> None:
        try:
            if raw is None:
                self._backend.delete(ASSESSMENTS_KEY)
            else:
                self._backend.save(ASSESSMENTS_KEY, raw)
        except OSError as exc:
            log.error("Rollback of %s failed; call reconcile_statistics(): %s", ASSESSMENTS_KEY, exc)

    def _commit(self, assessments: Optional[list[Assessment]], counts: StatisticsCounters) -> None:
        """Write the collection then the counters, undoing the first write if the second fails.

        ``None`` removes the collection key.
        """
        previous = self._read(ASSESSMENTS_KEY)
        if assessments is not None:
            self._store_assessments(assessments)
        else:
            try:
                self._backend.delete(ASSESSMENTS_KEY)
            except OSError as exc:
                raise StorageError(f"Failed to clear assessments: {exc}") from exc
        try:
            self._store_counts(counts)
        except StorageError:
            self._restore_assessments(previous)
            raise

    def _new_id(self, created_at: datetime, taken: set[str]) -> str:
        candidate = max(int(created_at.timestamp() * 1000), self._last_id + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    @staticmethod
    def _adjust(counts: StatisticsCounters, tier: RiskTier, delta: int) -> StatisticsCounters:
        field = _TIER_COUNTER[tier]
        return counts.model_copy(
            update={
                "total": max(0, counts.total + delta),
                field: max(0, getattr(counts, field) + delta),
            }
        )

    # ── public API ───────────────────────────────────────────────────

    async def save(
        self,
        patient_data: PatientRecord,
        parameters: Union[ScoredParameters, ParameterSet],
        score: int,
        risk_level: Union[RiskTier, str],
    ) -> Assessment:
        """Persist a finalized assessment and return it with its generated id.

        The score and tier must be exactly what the parameters produce, so
        an unfinalized draft cannot be stored.
        """
        if not isinstance(patient_data, PatientRecord):
            raise ValidationError("patient_data must be a validated PatientRecord", fields=["patient_data"])
        if isinstance(parameters, ParameterSet):
            parameters = finalize(parameters).parameters
        if parameters.total != score:
            raise ValidationError(
                f"Score {score} does not match parameters (expected {parameters.total})",
                fields=["score"],
            )
        try:
            tier = RiskTier(risk_level)
        except ValueError as exc:
            raise ValidationError(f"Unknown risk level: {risk_level!r}", fields=["risk_level"]) from exc
        if tier is not risk_tier(score):
            raise ValidationError(
                f"Risk level {tier.value} does not match score {score}",
                fields=["risk_level"],
            )

        assessments = self._load_assessments()
        counts = self._adjust(self._load_counts(), tier, +1)
        created_at = self._clock()
        try:
            assessment = Assessment(
                id=self._new_id(created_at, {a.id for a in assessments}),
                patient_data=patient_data,
                parameters=parameters,
                score=score,
                risk_level=tier,
                created_at=created_at,
            )
        except PydanticValidationError as exc:
            fields = [str(err["loc"][0]) for err in exc.errors() if err["loc"]]
            raise ValidationError(f"Invalid assessment: {exc}", fields=fields) from exc
        assessments.append(assessment)
        self._commit(assessments, counts)

        log.info("Saved assessment %s (score=%d, tier=%s)", assessment.id, score, tier.value)
        return assessment

    async def save_result(self, patient_data: PatientRecord, result: ScoreResult) -> Assessment:
        """Persist the output of ``pedss.scoring.finalize``."""
        return await self.save(patient_data, result.parameters, result.total_score, result.risk_tier)

    async def get_all(self) -> list[Assessment]:
        """All assessments, newest first."""
        assessments = self._load_assessments()
        # Ties keep insertion order reversed, so the later save comes first.
        return sorted(reversed(assessments), key=lambda a: a.created_at, reverse=True)

    async def get_by_id(self, assessment_id: str) -> Assessment:
        for assessment in self._load_assessments():
            if assessment.id == assessment_id:
                return assessment
        raise NotFoundError(assessment_id)

    async def search(self, query: str) -> list[Assessment]:
        """Case-insensitive match on patient name or id, newest first."""
        needle = query.strip().lower()
        assessments = await self.get_all()
        if not needle:
            return assessments
        return [
            a for a in assessments
            if needle in a.patient_data.name.lower() or needle in a.id.lower()
        ]

    async def delete(self, assessment_id: str) -> bool:
        assessments = self._load_assessments()
        target = next((a for a in assessments if a.id == assessment_id), None)
        if target is None:
            raise NotFoundError(assessment_id)

        counts = self._adjust(self._load_counts(), target.risk_level, -1)
        self._commit([a for a in assessments if a.id != assessment_id], counts)
        log.info("Deleted assessment %s", assessment_id)
        return True

    async def clear_all(self) -> None:
        self._commit(None, StatisticsCounters())
        log.info("Cleared all assessments")

    async def get_statistics(self) -> AggregateStatistics:
        """Cached counters plus the average score over the stored collection."""
        counts = self._load_counts()
        assessments = self._load_assessments()
        if counts.total != len(assessments):
            log.warning(
                "Statistics counters out of sync (cached total=%d, stored=%d); "
                "call reconcile_statistics()",
                counts.total,
                len(assessments),
            )
        avg = compute_statistics(assessments).avg_score
        return AggregateStatistics(**counts.model_dump(), avg_score=avg)

    async def reconcile_statistics(self) -> AggregateStatistics:
        """Recompute counters from the collection and persist them."""
        stats = compute_statistics(self._load_assessments())
        cached = self._load_counts()
        fresh = StatisticsCounters(**stats.model_dump(exclude={"avg_score"}))
        if cached != fresh:
            log.warning("Reconciled drifted statistics counters: %s -> %s", cached, fresh)
        self._store_counts(fresh)
        return stats

