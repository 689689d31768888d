"""Tests for patient demographics validation."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from pedss.exceptions import ValidationError
from pedss.models import Gender, PatientRecord
from pedss.validation import PatientDraft, validate_patient


class TestValidatePatient:
    def test_valid_draft(self) -> None:
        record = validate_patient(PatientDraft(name="  Case-7 ", age="24", gender="Male"))
        assert record.name == "Case-7"
        assert record.age_months == 24
        assert record.gender is Gender.MALE
        assert record.assessment_date == date.today()

    def test_keeps_supplied_date(self) -> None:
        record = validate_patient(
            PatientDraft(name="X", age=3, gender=Gender.OTHER, assessment_date=date(2024, 1, 2))
        )
        assert record.assessment_date == date(2024, 1, 2)

    def test_record_is_frozen(self) -> None:
        record = validate_patient(PatientDraft(name="X", age=3, gender="Female"))
        with pytest.raises(PydanticValidationError):
            record.assessment_date = date(2000, 1, 1)  # type: ignore[misc]

    @pytest.mark.parametrize("age", ["0", "240", 0, 240])
    def test_age_bounds_inclusive(self, age: object) -> None:
        assert validate_patient(PatientDraft(name="X", age=age, gender="Male")).age_months == int(age)

    @pytest.mark.parametrize("age", ["241", "-1", 300, "12a", "1.5", 1.5, True, "1_0", "+5", "²"])
    def test_invalid_age(self, age: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_patient(PatientDraft(name="X", age=age, gender="Male"))
        assert exc_info.value.fields == ["age"]
        assert "0-240" in str(exc_info.value)

    @pytest.mark.parametrize("age", [None, "", "   "])
    def test_missing_age(self, age: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_patient(PatientDraft(name="X", age=age, gender="Male"))
        assert exc_info.value.fields == ["age"]
        assert "enter patient age" in str(exc_info.value)

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name(self, name: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_patient(PatientDraft(name=name, age="5", gender="Male"))
        assert exc_info.value.fields == ["name"]

    @pytest.mark.parametrize("gender", [None, "", "male", "Unknown"])
    def test_invalid_gender(self, gender: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_patient(PatientDraft(name="X", age="5", gender=gender))
        assert exc_info.value.fields == ["gender"]

    def test_all_failures_in_prompt_order(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_patient(PatientDraft())
        assert exc_info.value.fields == ["name", "age", "gender"]
        assert str(exc_info.value) == "Please enter patient name or ID"


class TestPatientRecord:
    def test_name_is_trimmed(self) -> None:
        record = PatientRecord(name="  Case-7 ", age_months=3, gender=Gender.FEMALE)
        assert record.name == "Case-7"

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_rejected(self, name: str) -> None:
        with pytest.raises(PydanticValidationError):
            PatientRecord(name=name, age_months=3, gender=Gender.FEMALE)
