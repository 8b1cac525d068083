import logging

import streamlit as st

from src.application.ports import PredictionPort
from src.application.use_cases import ReadmissionPredictionUseCase
from src.infrastructure.config import Settings
from src.infrastructure.prediction.http_client import HttpPredictionAdapter
from src.infrastructure.prediction.mock_client import MockPredictionAdapter
from src.presentation import intake_page, navigation, results_page


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "⚕️ **DISCLAIMER:** Predictions support, and never replace, clinical judgement. "
    "Review every result with the care team."
)


def build_predictor(settings: Settings) -> PredictionPort:
    if settings.prediction_backend == "mock":
        logger.info("Using mock prediction backend")
        return MockPredictionAdapter()
    if settings.prediction_backend != "http":
        logger.warning("Unknown PREDICTION_BACKEND %r; using http", settings.prediction_backend)
    return HttpPredictionAdapter(settings=settings)


def _render_sidebar(settings: Settings):
    st.sidebar.title("⚙️ Settings")
    st.sidebar.markdown("### Prediction service")
    if settings.prediction_backend == "mock":
        st.sidebar.warning("⚠️ Using mock predictions")
    else:
        st.sidebar.caption(f"**Endpoint:** {settings.prediction_api_url}/predict")


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="Hospital Readmission Predictor",
        page_icon="🏥",
        layout="centered",
        initial_sidebar_state="collapsed",
    )

    _render_sidebar(settings)
    st.info(DISCLAIMER)

    page = navigation.current_page()
    if page == navigation.RESULTS_PAGE:
        results_page.render(lambda: ReadmissionPredictionUseCase(build_predictor(settings)))
    else:
        intake_page.render()


if __name__ == "__main__":
    main()
