from pydantic import BaseModel, ConfigDict


class PredictionRequest(BaseModel):
    """Body of POST /predict, using the prediction service's field names."""

    model_config = ConfigDict(frozen=True)

    age: str
    time_in_hospital: int
    n_lab_procedures: int
    n_procedures: int
    n_medications: int
    n_outpatient: int
    n_inpatient: int
    n_emergency: int
    medical_specialty: str
    diag_1: str
    diag_2: str
    diag_3: str
    glucose_test: str
    A1Ctest: str
    change: str
    diabetes_med: str
    name: str
