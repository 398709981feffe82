"""Patient intake workflow: validate, identify, derive, save."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from shared.observability import get_logger, operation_context

from services.patient_registry.bmi import bmi_category, compute_bmi
from services.patient_registry.identifiers import IdGenerator, generate_id
from services.patient_registry.models import PatientForm, PatientRecord
from services.patient_registry.store import RecordStore
from services.patient_registry.validation import parse_patient_form, validate

__all__ = ["IntakeResult", "PatientIntake"]

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class IntakeResult:
    """Outcome of registering one intake form."""

    patient: PatientRecord | None
    errors: tuple[str, ...] = ()
    saved: bool = False

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the form was valid and the save went through."""

        return self.saved and not self.errors


class PatientIntake:
    """Turn submitted intake forms into stored patient records."""

    def __init__(self, store: RecordStore, *, id_generator: IdGenerator = generate_id) -> None:
        self._store = store
        self._id_generator = id_generator

    @property
    def store(self) -> RecordStore:
        return self._store

    def register(self, form: PatientForm | Mapping[str, Any]) -> IntakeResult:
        """Validate ``form`` and save it as a new or updated patient.

        A ``patientId`` in the form updates that patient; otherwise a fresh
        identifier is generated. BMI and its category are derived from
        ``weight`` and ``height`` when both are usable.
        """

        data = form if isinstance(form, PatientForm) else PatientForm.model_validate(dict(form))
        payload = data.supplied_fields()

        errors = validate(payload)
        if errors:
            logger.info("patient_intake_rejected", error_count=len(errors))
            return IntakeResult(patient=None, errors=tuple(errors))

        payload["patientId"] = payload.get("patientId") or self._id_generator()
        bmi = compute_bmi(payload.get("weight"), payload.get("height"))
        if bmi:
            payload["bmi"] = bmi
            payload["bmiCategory"] = bmi_category(bmi)

        with operation_context("intake", patient_id=payload["patientId"]):
            parsed = parse_patient_form(payload)
            if isinstance(parsed, list):
                logger.info("patient_intake_rejected", error_count=len(parsed))
                return IntakeResult(patient=None, errors=tuple(parsed))

            if not self._store.save(parsed):
                return IntakeResult(patient=parsed, saved=False)

            stored = self._store.find_by_id(parsed.patient_id)
            logger.info("patient_intake_completed")
            return IntakeResult(patient=stored or parsed, saved=True)
