"""Service modules for the patient registry application."""

__all__ = [
    "patient_registry",
]
