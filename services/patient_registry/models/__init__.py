"""Pydantic data models used by the patient registry."""

from .patient import PatientForm, PatientRecord, utc_timestamp  # noqa: F401

__all__ = [
    "PatientForm",
    "PatientRecord",
    "utc_timestamp",
]
