from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator


GENDER_OPTIONS = ["male", "female", "other"]
AGE_BUCKETS = ["40-50", "50-60", "60-70", "70-80", "80-90", "90-100"]
DIAGNOSIS_CATEGORIES = [
    "Circulatory",
    "Diabetes",
    "Digestive",
    "Injury",
    "Musculoskeletal",
    "Respiratory",
    "Other",
]
TEST_RESULT_OPTIONS = ["high", "normal", "unknown"]
MEDICATION_CHANGE_OPTIONS = ["no", "yes"]
MEDICAL_SPECIALTIES = [
    "Missing",
    "InternalMedicine",
    "Family/GeneralPractice",
    "Cardiology",
    "Endocrinology",
    "Other",
]
MAX_DIAGNOSES = 3

CHOICE_FIELDS = {
    "gender": GENDER_OPTIONS,
    "age": AGE_BUCKETS,
    "glucose": TEST_RESULT_OPTIONS,
    "a1c": TEST_RESULT_OPTIONS,
    "medication_changes": MEDICATION_CHANGE_OPTIONS,
    "medical_specialty": MEDICAL_SPECIALTIES,
}

# (min, max) accepted by the intake form widgets
NUMERIC_BOUNDS = {
    "visits": (1, 30),
    "medications": (0, 50),
    "lab_procedures": (0, 200),
    "procedures": (0, 20),
    "previous_visits": (0, 20),
    "emergency_visits": (0, 20),
}

# Counts arrive either as widget ints or as raw text; the request adapter coerces them.
RawCount = Optional[Union[int, str]]


class IntakeRecord(BaseModel):
    name: str = ""
    gender: str = Field("", description="male/female/other, empty while unset")
    age: str = Field("", description="Age bucket such as 60-70")
    visits: RawCount = 1
    diagnosis: List[str] = []
    glucose: str = ""
    a1c: str = ""
    medications: RawCount = None
    lab_procedures: RawCount = None
    procedures: RawCount = None
    previous_visits: RawCount = None
    emergency_visits: RawCount = None
    medication_changes: str = "no"
    medical_specialty: str = "Missing"

    @field_validator("gender", "age", "glucose", "a1c", "medication_changes", "medical_specialty")
    @classmethod
    def validate_choice(cls, v: str, info):
        # Empty means "not chosen yet"; the request adapter fills in defaults.
        if v and v not in CHOICE_FIELDS[info.field_name]:
            raise ValueError(f"{v!r} is not a valid {info.field_name}")
        return v

    @field_validator("diagnosis")
    @classmethod
    def validate_diagnosis(cls, v: List[str]):
        if len(v) > MAX_DIAGNOSES:
            raise ValueError(f"at most {MAX_DIAGNOSES} diagnoses can be selected")
        if len(set(v)) != len(v):
            raise ValueError("diagnoses must not repeat")
        return v


class PredictionResult(BaseModel):
    raw: Dict[str, Any]
    readmit_probability: float = Field(..., ge=0.0, le=1.0)
    will_readmit: bool
    readmit_probability_percent: str
    risk_level: str
    verdict: str
    patient_name: str
    patient_data: Dict[str, Any]
    extra_fields: Dict[str, Any] = {}
