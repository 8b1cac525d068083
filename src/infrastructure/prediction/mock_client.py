from src.application.ports import PredictionPort
from src.application.schemas import PredictionRequest


class MockPredictionAdapter(PredictionPort):
    """Offline stand-in for the prediction service; the score only depends on the request."""

    def predict(self, request: PredictionRequest) -> dict:
        score = 0.1
        score += 0.02 * min(request.time_in_hospital, 14)
        score += 0.08 * min(request.n_emergency, 3)
        score += 0.04 * min(request.n_outpatient, 5)
        if request.diag_1 in {"Circulatory", "Diabetes", "Respiratory"}:
            score += 0.1
        if request.A1Ctest == "high" or request.glucose_test == "high":
            score += 0.08
        if request.change == "yes":
            score += 0.05
        probability = round(min(score, 0.95), 4)
        return {"readmit_probability": probability, "model": "mock"}
