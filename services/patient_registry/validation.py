"""Intake form validation rules.

Validation never raises for bad input: it returns the list of messages a
caller shows next to the form, in a fixed order, and an empty list means the
form may be saved.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from pydantic import ValidationError

from services.patient_registry.models import PatientForm, PatientRecord

__all__ = [
    "AGE_RANGE",
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
    "is_valid_email",
    "is_valid_phone",
    "parse_patient_form",
    "validate",
]

AGE_RANGE = (1, 150)
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# Accepts any 10+ run of ASCII digits, spaces, dashes and parentheses; digit count is not checked.
PHONE_PATTERN = re.compile(r"[+]?[0-9\s\-()]{10,}")

FormInput = PatientForm | Mapping[str, Any]


def _coerce_form(form: FormInput) -> PatientForm:
    if isinstance(form, PatientForm):
        return form
    return PatientForm.model_validate(dict(form))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _valid_age(value: Any) -> bool:
    if not value or isinstance(value, bool):
        return False
    try:
        age = float(value)
    except (TypeError, ValueError):
        return False
    low, high = AGE_RANGE
    return low <= age <= high


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    return PHONE_PATTERN.fullmatch(phone) is not None


def validate(form: FormInput) -> list[str]:
    """Return the ordered validation messages for ``form``."""

    data = _coerce_form(form)
    errors: list[str] = []

    if not _text(data.full_name).strip():
        errors.append("Full Name is required")
    if not _valid_age(data.age):
        errors.append("Valid age is required")
    if not data.gender:
        errors.append("Gender is required")
    if not _text(data.contact_number).strip():
        errors.append("Contact Number is required")
    if not data.prakriti_type:
        errors.append("Prakriti Type is required")

    if data.email and not is_valid_email(_text(data.email)):
        errors.append("Valid email format is required")
    if data.contact_number and not is_valid_phone(_text(data.contact_number)):
        errors.append("Valid phone number format is required")

    return errors


def parse_patient_form(form: FormInput) -> PatientRecord | list[str]:
    """Validate ``form`` and return either its messages or a typed record.

    The form must carry a ``patientId``; intake assigns one before parsing.
    """

    data = _coerce_form(form)
    errors = validate(data)
    if errors:
        return errors

    payload = data.supplied_fields()
    if not data.email:
        payload.pop("email", None)
    for key in ("weight", "height"):
        value = payload.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            payload.pop(key, None)
    try:
        return PatientRecord.model_validate(payload)
    except ValidationError as exc:
        return [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
