"""Tests for the patient intake workflow."""

from __future__ import annotations

import json
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[3]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from services.patient_registry.intake import IntakeResult, PatientIntake
from services.patient_registry.models import PatientForm
from services.patient_registry.storage import InMemoryStorage, StorageError
from services.patient_registry.store import RecordStore


class _FailingWriteStorage(InMemoryStorage):
    def write(self, key: str, value: str) -> bool:
        raise StorageError("quota exceeded")


def _form(**overrides) -> dict:
    payload = {
        "fullName": "Asha Rao",
        "age": "34",
        "gender": "female",
        "contactNumber": "+91 98765 43210",
        "prakritiType": "Vata-Pitta",
        "weight": "70",
        "height": "175",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def intake(storage: InMemoryStorage) -> PatientIntake:
    ids = iter(["PAT-1714557600000-1", "PAT-1714557600000-2"])
    return PatientIntake(RecordStore(storage), id_generator=lambda: next(ids))


def test_register_valid_form_saves_with_generated_id_and_bmi(
    intake: PatientIntake, storage: InMemoryStorage
) -> None:
    result = intake.register(_form())

    assert result.succeeded
    assert result.errors == ()
    assert result.patient is not None
    assert result.patient.patient_id == "PAT-1714557600000-1"
    assert result.patient.age == 34
    assert result.patient.bmi == "22.9"
    assert result.patient.bmi_category == "Normal"
    assert result.patient.created_at == result.patient.last_updated

    stored = json.loads(storage.values["patients"])
    assert [entry["patientId"] for entry in stored] == ["PAT-1714557600000-1"]
    assert stored[0]["bmiCategory"] == "Normal"


def test_register_without_measurements_omits_bmi(intake: PatientIntake) -> None:
    result = intake.register(_form(weight="", height=None))

    assert result.succeeded
    assert result.patient is not None
    assert result.patient.bmi is None
    assert result.patient.bmi_category is None


def test_register_oversized_measurements_omit_bmi(intake: PatientIntake) -> None:
    result = intake.register(_form(weight="1e30", height="1"))

    assert result.succeeded
    assert result.patient is not None
    assert result.patient.weight == 1e30
    assert result.patient.bmi is None
    assert result.patient.bmi_category is None


@pytest.mark.parametrize("weight", ["inf", "nan", "-inf"])
def test_register_non_finite_weight_is_reported(
    intake: PatientIntake, storage: InMemoryStorage, weight: str
) -> None:
    result = intake.register(_form(weight=weight))

    assert not result.succeeded
    assert result.errors and result.errors[0].startswith("weight")
    assert storage.values == {}


def test_register_invalid_form_saves_nothing(
    intake: PatientIntake, storage: InMemoryStorage
) -> None:
    result = intake.register(_form(fullName=" ", email="broken"))

    assert not result.succeeded
    assert result.patient is None
    assert result.errors == ("Full Name is required", "Valid email format is required")
    assert storage.values == {}


def test_register_existing_id_updates_patient(intake: PatientIntake) -> None:
    first = intake.register(_form())
    assert first.patient is not None

    second = intake.register(_form(patientId=first.patient.patient_id, weight="80"))

    assert second.succeeded
    assert second.patient is not None
    assert second.patient.patient_id == first.patient.patient_id
    assert second.patient.bmi == "26.1"
    assert second.patient.bmi_category == "Overweight"
    assert second.patient.created_at == first.patient.created_at
    assert len(intake.store.list_all()) == 1


def test_register_accepts_patient_form_model(intake: PatientIntake) -> None:
    result = intake.register(PatientForm.model_validate(_form()))

    assert result.succeeded


def test_register_non_integer_age_is_reported(intake: PatientIntake) -> None:
    result = intake.register(_form(age="34.5"))

    assert not result.succeeded
    assert result.errors and result.errors[0].startswith("age")


def test_register_reports_storage_failure() -> None:
    intake = PatientIntake(RecordStore(_FailingWriteStorage()), id_generator=lambda: "PAT-1")

    result = intake.register(_form())

    assert isinstance(result, IntakeResult)
    assert result.saved is False
    assert not result.succeeded
    assert result.patient is not None
    assert result.patient.patient_id == "PAT-1"
