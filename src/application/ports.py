from typing import Optional, Protocol

from src.application.schemas import PredictionRequest


class PredictionServiceError(RuntimeError):
    """The prediction call failed; `service_message` holds the service's own error text if it sent one."""

    def __init__(self, service_message: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(service_message or detail or "prediction service call failed")
        self.service_message = service_message


class PredictionPort(Protocol):
    def predict(self, request: PredictionRequest) -> dict:
        """
        Sends one prediction request and returns the decoded response body.
        Raises PredictionServiceError on transport or service failure.
        """
        ...
