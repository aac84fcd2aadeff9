# app/system_models/prescription_model/prescription_schemas.py
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class DosingFrequency(str, Enum):
    """Dosing frequency labels offered by the prescription form."""

    ONCE_DAILY = "Once daily"
    TWICE_DAILY = "Twice daily"
    THREE_TIMES_DAILY = "Three times daily"
    FOUR_TIMES_DAILY = "Four times daily"
    EVERY_OTHER_DAY = "Every other day"
    AS_NEEDED = "As needed"

    @property
    def doses_per_day(self) -> int:
        """Divisor applied to the quantity when computing days of supply."""
        return _DOSES_PER_DAY[self]

    @classmethod
    def from_label(cls, label) -> "DosingFrequency":
        """
        Resolve a free-form label.

        An exact label (ignoring case and extra whitespace) wins. Otherwise the
        first of "once", "twice", "three", "four" found in the label decides,
        and anything else resolves to DEFAULT_FREQUENCY.
        """
        if isinstance(label, cls):
            return label
        key = " ".join(str(label).split()).casefold()
        if key in _BY_LABEL:
            return _BY_LABEL[key]
        for token, member in _BY_TOKEN:
            if token in key:
                return member
        return DEFAULT_FREQUENCY


# Every other day and as needed are scheduled like once daily
_DOSES_PER_DAY = {
    DosingFrequency.ONCE_DAILY: 1,
    DosingFrequency.TWICE_DAILY: 2,
    DosingFrequency.THREE_TIMES_DAILY: 3,
    DosingFrequency.FOUR_TIMES_DAILY: 4,
    DosingFrequency.EVERY_OTHER_DAY: 1,
    DosingFrequency.AS_NEEDED: 1,
}

_BY_LABEL = {member.value.casefold(): member for member in DosingFrequency}

# Checked in order; "once" wins over "twice" when both appear
_BY_TOKEN = (
    ("once", DosingFrequency.ONCE_DAILY),
    ("twice", DosingFrequency.TWICE_DAILY),
    ("three", DosingFrequency.THREE_TIMES_DAILY),
    ("four", DosingFrequency.FOUR_TIMES_DAILY),
)

DEFAULT_FREQUENCY = DosingFrequency.ONCE_DAILY


class PrescriptionInput(BaseModel):
    """
    Caller-supplied prescription fields.
    Only types are normalized here ("30" -> 30); presence and range checks
    belong to the caller (see PrescriptionRequest).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    patient_id: int
    medication_name: str = ""
    dosage: str = ""
    frequency: str = ""
    quantity: int
    prescribing_doctor: str = ""
    notes: str = ""

    @field_validator("medication_name", "dosage", "frequency", "prescribing_doctor", "notes", mode="before")
    def blank_text(cls, v):
        return "" if v is None else v


class PrescriptionRequest(PrescriptionInput):
    """Request body for the create and update endpoints."""
    model_config = ConfigDict(use_enum_values=True)

    medication_name: str
    dosage: str
    frequency: DosingFrequency = DosingFrequency.ONCE_DAILY.value
    quantity: int = Field(..., gt=0)
    prescribing_doctor: str

    @field_validator("medication_name", "dosage", "prescribing_doctor")
    def not_blank(cls, v, info):
        if not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v


class Prescription(PrescriptionInput):
    """A stored prescription. Immutable; refill_date is derived."""

    id: int = Field(..., alias="Id", gt=0)
    prescribed_date: datetime
    refill_date: datetime

    @field_validator("prescribed_date", "refill_date")
    def assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)


class PrescriptionResponse(Prescription):
    refill_due_soon: bool = False


class PrescriptionDeleteResponse(BaseModel):
    success: bool


class FrequencyOption(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    label: str
    doses_per_day: int
