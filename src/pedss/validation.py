"""Patient demographics validation.

Checks run in form order (name, age, gender).  Every failure is collected;
``ValidationError.fields[0]`` and the message describe the first one so the
UI can prompt for a single field at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

from pedss.exceptions import ValidationError
from pedss.models import Gender, PatientRecord

log = logging.getLogger(__name__)

MIN_AGE_MONTHS = 0
MAX_AGE_MONTHS = 240

_MESSAGES = {
    "name": "Please enter patient name or ID",
    "age_required": "Please enter patient age in months",
    "age_invalid": "Please enter a valid age in months (0-240 months, i.e., 0-20 years)",
    "gender": "Please select patient gender",
}


@dataclass
class PatientDraft:
    """Raw demographics as typed into the form."""

    name: str = ""
    age: Union[str, int, None] = None
    gender: Union[Gender, str, None] = None
    assessment_date: Optional[date] = None


def _parse_age(raw: Any) -> Optional[int]:
    """Return the age as an int, or None unless it is a plain run of ASCII digits."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if not (text.isascii() and text.isdigit()):
            return None
        return int(text)
    return None


def _parse_gender(raw: Any) -> Optional[Gender]:
    if isinstance(raw, Gender):
        return raw
    if isinstance(raw, str):
        try:
            return Gender(raw)
        except ValueError:
            return None
    return None


def validate_patient(draft: PatientDraft) -> PatientRecord:
    """Validate *draft* and return a frozen ``PatientRecord``.

    Raises:
        ValidationError: with the failing fields in name, age, gender order.
    """
    errors: list[tuple[str, str]] = []

    name = (draft.name or "").strip()
    if not name:
        errors.append(("name", _MESSAGES["name"]))

    age = _parse_age(draft.age)
    if draft.age is None or (isinstance(draft.age, str) and not draft.age.strip()):
        errors.append(("age", _MESSAGES["age_required"]))
    elif age is None or not MIN_AGE_MONTHS <= age <= MAX_AGE_MONTHS:
        errors.append(("age", _MESSAGES["age_invalid"]))

    gender = _parse_gender(draft.gender)
    if gender is None:
        errors.append(("gender", _MESSAGES["gender"]))

    if errors or age is None or gender is None:
        fields = [f for f, _ in errors]
        log.debug("Patient validation failed for fields: %s", fields)
        raise ValidationError(errors[0][1], fields=fields)

    return PatientRecord(
        name=name,
        age_months=age,
        gender=gender,
        assessment_date=draft.assessment_date or date.today(),
    )
