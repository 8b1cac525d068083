import logging
from typing import Optional

import requests

from src.application.ports import PredictionPort, PredictionServiceError
from src.application.schemas import PredictionRequest
from src.infrastructure.config import Settings


logger = logging.getLogger(__name__)


def _service_error(resp: requests.Response) -> Optional[str]:
    """Pull the service's `error` string out of a response body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


class HttpPredictionAdapter(PredictionPort):
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.url = f"{self.settings.prediction_api_url}/predict"
        self.timeout = self.settings.prediction_timeout_seconds

    def predict(self, request: PredictionRequest) -> dict:
        try:
            resp = requests.post(
                self.url,
                json=request.model_dump(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PredictionServiceError(detail=f"POST {self.url} failed: {e}") from e

        if not resp.ok:
            raise PredictionServiceError(
                service_message=_service_error(resp),
                detail=f"POST {self.url} returned HTTP {resp.status_code}",
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise PredictionServiceError(detail="prediction service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise PredictionServiceError(detail="prediction service returned a non-object body")
        if data.get("error"):
            raise PredictionServiceError(service_message=str(data["error"]))

        logger.debug("Prediction response: %s", data)
        return data
