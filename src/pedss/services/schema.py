"""Versioned storage schema for the assessment collection.

Version 1 is a JSON envelope::

    {"schema_version": 1, "assessments": [<Assessment>, ...]}

Version 0 is the bare camelCase list written by the original mobile app
(``patientData``, ``riskLevel``, ``createdAt``, age stored as a string).  It
is migrated on read.  Any other shape raises ``SchemaError``.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from pedss.exceptions import SchemaError
from pedss.models import Assessment

log = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_LEGACY_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y", "%d.%m.%Y")


class AssessmentCollection(BaseModel):
    """Envelope persisted under the assessments key."""

    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = SCHEMA_VERSION
    assessments: list[Assessment] = Field(default_factory=list)


def dump_collection(assessments: list[Assessment]) -> str:
    return AssessmentCollection(assessments=assessments).model_dump_json()


def load_collection(raw: str) -> list[Assessment]:
    """Parse a stored collection, migrating legacy data when needed."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Stored assessments are not valid JSON: {exc}") from exc

    if isinstance(data, list):
        log.info("Migrating %d legacy assessment record(s) to schema v%d", len(data), SCHEMA_VERSION)
        data = {"schema_version": SCHEMA_VERSION, "assessments": [_migrate_v0(r) for r in data]}

    if not isinstance(data, dict):
        raise SchemaError(f"Unexpected stored assessments shape: {type(data).__name__}")

    version = data.get("schema_version")
    if version != SCHEMA_VERSION:
        raise SchemaError(f"Unsupported assessments schema version: {version!r}")

    try:
        return AssessmentCollection.model_validate(data).assessments
    except PydanticValidationError as exc:
        raise SchemaError(f"Stored assessments failed validation: {exc}") from exc


def _parse_legacy_date(value: Any) -> date:
    if isinstance(value, str):
        text = value.strip()
        for fmt in _LEGACY_DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise SchemaError(f"Unrecognized legacy assessment date: {value!r}")


def _migrate_v0(record: Any) -> dict[str, Any]:
    """Map one version-0 record onto the version-1 field names."""
    if not isinstance(record, dict):
        raise SchemaError(f"Legacy assessment is not an object: {record!r}")

    expected = {"id", "patientData", "parameters", "score", "riskLevel", "createdAt"}
    unknown = set(record) - expected
    missing = expected - set(record)
    if unknown or missing:
        raise SchemaError(
            f"Legacy assessment {record.get('id')!r} has unexpected shape "
            f"(missing={sorted(missing)}, unknown={sorted(unknown)})"
        )

    patient = record["patientData"]
    if not isinstance(patient, dict):
        raise SchemaError(f"Legacy assessment {record['id']!r} has no patient data")

    age = patient.get("age")
    try:
        age_months = int(str(age).strip())
    except ValueError as exc:
        raise SchemaError(f"Legacy assessment {record['id']!r} has invalid age {age!r}") from exc

    return {
        "id": str(record["id"]),
        "patient_data": {
            "name": patient.get("name"),
            "age_months": age_months,
            "gender": patient.get("gender"),
            "assessment_date": _parse_legacy_date(patient.get("date")),
        },
        "parameters": record["parameters"],
        "score": record["score"],
        "risk_level": record["riskLevel"],
        "created_at": record["createdAt"],
    }
