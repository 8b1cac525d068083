import logging
import math
import re
from typing import Any, Optional

from src.application.ports import PredictionPort, PredictionServiceError
from src.application.schemas import PredictionRequest
from src.domain.models import IntakeRecord, PredictionResult
from src.domain.rules import classify_probability


logger = logging.getLogger(__name__)


# Values sent when the intake count is absent or not a number.
COUNT_FALLBACKS = {
    "time_in_hospital": 1,
    "n_lab_procedures": 15,
    "n_procedures": 1,
    "n_medications": 10,
    "n_outpatient": 0,
    "n_emergency": 0,
}

# Sent as-is on every request.
N_INPATIENT = 0
DIABETES_MED = "yes"

DEFAULT_DIAGNOSIS = "Other"
DEFAULT_SPECIALTY = "Missing"
DEFAULT_TEST_RESULT = "no"
DEFAULT_NAME = "Unknown"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """Read an integer the way a browser parseInt does: leading digits win, garbage gives None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def _count(value: Any, field: str) -> int:
    parsed = parse_int(value)
    return COUNT_FALLBACKS[field] if parsed is None else parsed


def _diagnosis_slot(record: IntakeRecord, index: int) -> str:
    if index < len(record.diagnosis) and record.diagnosis[index]:
        return record.diagnosis[index]
    return DEFAULT_DIAGNOSIS


def build_prediction_request(record: IntakeRecord) -> PredictionRequest:
    return PredictionRequest(
        age=record.age,
        time_in_hospital=_count(record.visits, "time_in_hospital"),
        n_lab_procedures=_count(record.lab_procedures, "n_lab_procedures"),
        n_procedures=_count(record.procedures, "n_procedures"),
        n_medications=_count(record.medications, "n_medications"),
        n_outpatient=_count(record.previous_visits, "n_outpatient"),
        n_inpatient=N_INPATIENT,
        n_emergency=_count(record.emergency_visits, "n_emergency"),
        medical_specialty=record.medical_specialty or DEFAULT_SPECIALTY,
        diag_1=_diagnosis_slot(record, 0),
        diag_2=_diagnosis_slot(record, 1),
        diag_3=_diagnosis_slot(record, 2),
        glucose_test=record.glucose or DEFAULT_TEST_RESULT,
        A1Ctest=record.a1c or DEFAULT_TEST_RESULT,
        change=record.medication_changes or DEFAULT_TEST_RESULT,
        diabetes_med=DIABETES_MED,
        name=record.name or DEFAULT_NAME,
    )


def read_probability(response: dict) -> float:
    value = response.get("readmit_probability")
    if value is None or isinstance(value, bool):
        raise PredictionServiceError(detail="response has no readmit_probability")
    try:
        probability = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise PredictionServiceError(detail=f"readmit_probability is not numeric: {value!r}") from e
    if math.isnan(probability) or not 0.0 <= probability <= 1.0:
        raise PredictionServiceError(detail=f"readmit_probability out of range: {probability}")
    return probability


def build_prediction_result(response: dict, request: PredictionRequest) -> PredictionResult:
    probability = read_probability(response)
    will_readmit, risk_level, verdict, percent = classify_probability(probability)
    return PredictionResult(
        raw=dict(response),
        readmit_probability=probability,
        will_readmit=will_readmit,
        readmit_probability_percent=percent,
        risk_level=risk_level,
        verdict=verdict,
        patient_name=request.name,
        patient_data=request.model_dump(),
        extra_fields={k: v for k, v in response.items() if k != "readmit_probability"},
    )


class ReadmissionPredictionUseCase:
    def __init__(self, predictor: PredictionPort):
        self.predictor = predictor

    def predict(self, record: IntakeRecord) -> PredictionResult:
        request = build_prediction_request(record)
        logger.info("Requesting readmission prediction for %s", request.name)
        response = self.predictor.predict(request)
        result = build_prediction_result(response, request)
        logger.info(
            "Prediction for %s: %s (%s)",
            request.name, result.readmit_probability_percent, result.risk_level,
        )
        return result
