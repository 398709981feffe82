"""Pydantic models describing patient intake payloads and stored records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "PatientForm",
    "PatientRecord",
    "utc_timestamp",
]


def utc_timestamp(moment: datetime | None = None) -> str:
    """Return ``moment`` (default: now) as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""

    value = moment or datetime.now(UTC)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PatientForm(BaseModel):
    """Loosely typed intake form as submitted by a caller.

    Every field is optional and unparsed so that validation can report
    missing or malformed values as messages instead of raising.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    patient_id: Any = None
    full_name: Any = None
    age: Any = None
    gender: Any = None
    contact_number: Any = None
    prakriti_type: Any = None
    email: Any = None
    weight: Any = None
    height: Any = None

    def supplied_fields(self) -> dict[str, Any]:
        """Return the keys the caller submitted, camelCase keyed."""

        supplied = self.model_dump(by_alias=True, exclude_unset=True)
        supplied.update(self.model_extra or {})
        return supplied


class PatientRecord(BaseModel):
    """A persisted patient record.

    Keys are serialized in camelCase (``patientId``, ``createdAt``...). Keys
    the model does not know about are kept as extras and written back
    unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    patient_id: str = Field(description="PAT-<epoch-ms>-<n> identifier, immutable")
    full_name: str
    age: int = Field(ge=1, le=150)
    gender: str
    contact_number: str
    prakriti_type: str = Field(description="Ayurvedic constitution type")
    email: str | None = None
    weight: float | None = Field(
        default=None, allow_inf_nan=False, description="Weight in kilograms"
    )
    height: float | None = Field(
        default=None, allow_inf_nan=False, description="Height in centimeters"
    )
    bmi: str | None = None
    bmi_category: str | None = None
    created_at: str | None = None
    last_updated: str | None = None

    @field_validator("weight", "height", "email", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        """Treat a blank optional form value as not provided."""

        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_storage(self) -> dict[str, Any]:
        """Return the camelCase mapping written to storage."""

        return self.model_dump(by_alias=True, exclude_none=True)

    def supplied_fields(self) -> dict[str, Any]:
        """Return only the fields the caller explicitly set, camelCase keyed."""

        supplied = self.model_dump(by_alias=True, exclude_unset=True)
        supplied.update(self.model_extra or {})
        return supplied
