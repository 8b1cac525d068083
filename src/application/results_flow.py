import logging
import threading
from enum import Enum
from typing import Optional

from src.application.intake_form import NavigationHandoff
from src.application.ports import PredictionServiceError
from src.application.use_cases import ReadmissionPredictionUseCase
from src.domain.models import PredictionResult


logger = logging.getLogger(__name__)


NO_DATA_MESSAGE = "No patient data provided"
GENERIC_FAILURE_MESSAGE = "Failed to get prediction"


class ResultsStage(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class CancellationToken:
    """Signals that the results page was left and its outcome is no longer wanted."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ResultsFlow:
    """Drives one visit to the results page: loading, then success or error."""

    def __init__(self, handoff: Optional[NavigationHandoff], use_case: ReadmissionPredictionUseCase):
        self.handoff = handoff
        self.use_case = use_case
        self.stage = ResultsStage.LOADING
        self.result: Optional[PredictionResult] = None
        self.error_message: Optional[str] = None
        self.cancelled = False
        self._started = False

    @property
    def handoff_id(self) -> Optional[str]:
        return self.handoff.handoff_id if self.handoff else None

    def run(self, token: CancellationToken) -> ResultsStage:
        """Fetch the prediction once; repeated calls return the settled stage."""
        if self._started:
            return self.stage
        self._started = True

        if self.handoff is None:
            self._fail(NO_DATA_MESSAGE)
            return self.stage

        if token.cancelled:
            self.cancelled = True
            return self.stage

        try:
            result = self.use_case.predict(self.handoff.record)
        except PredictionServiceError as e:
            logger.exception("Prediction error: %s", e)
            if token.cancelled:
                self.cancelled = True
                return self.stage
            self._fail(e.service_message or GENERIC_FAILURE_MESSAGE)
            return self.stage
        except Exception as e:
            logger.exception("Unexpected prediction failure: %s", e)
            if token.cancelled:
                self.cancelled = True
                return self.stage
            self._fail(GENERIC_FAILURE_MESSAGE)
            return self.stage

        if token.cancelled:
            logger.debug("Results page left before prediction %s arrived", self.handoff_id)
            self.cancelled = True
            return self.stage

        self.result = result
        self.stage = ResultsStage.SUCCESS
        return self.stage

    def _fail(self, message: str) -> None:
        self.error_message = message
        self.stage = ResultsStage.ERROR
