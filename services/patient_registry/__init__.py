"""Patient registry package."""

from pathlib import Path

from dotenv import load_dotenv

from .bmi import bmi_category, compute_bmi
from .identifiers import generate_id, generate_uuid_id, get_id_generator
from .intake import IntakeResult, PatientIntake
from .models import PatientForm, PatientRecord
from .store import RecordStore
from .validation import is_valid_email, is_valid_phone, parse_patient_form, validate

__all__ = [
    "__version__",
    "IntakeResult",
    "PatientForm",
    "PatientIntake",
    "PatientRecord",
    "RecordStore",
    "bmi_category",
    "compute_bmi",
    "generate_id",
    "generate_uuid_id",
    "get_id_generator",
    "is_valid_email",
    "is_valid_phone",
    "parse_patient_form",
    "validate",
]

__version__ = "0.1.0"

load_dotenv(Path(__file__).resolve().parents[2] / ".env", override=False)
