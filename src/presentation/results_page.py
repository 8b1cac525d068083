import logging
from typing import Callable

import streamlit as st

from src.application.results_flow import ResultsFlow, ResultsStage
from src.application.use_cases import ReadmissionPredictionUseCase
from src.domain.models import PredictionResult
from src.domain.rules import recommendations_for
from src.presentation import navigation


logger = logging.getLogger(__name__)


def _render_loading(flow: ResultsFlow, token) -> None:
    placeholder = st.empty()
    with placeholder.container():
        st.markdown("# Processing Prediction")
        st.write("Please wait while we analyze patient data...")
        with st.spinner("Analyzing Patient Data..."):
            flow.run(token)
    placeholder.empty()


def _render_error(message: str) -> None:
    st.markdown("# Prediction Error")
    st.write("We couldn't process the patient data.")
    st.error(f"❌ {message}")
    st.button("Back to Form", on_click=navigation.go_to_intake)


def _patient_lines(result: PredictionResult) -> list:
    data = result.patient_data
    return [
        f"Name: {result.patient_name}",
        f"Age Group: {data.get('age')}",
        f"Days at Hospital: {data.get('time_in_hospital')}",
        f"Diagnosis: {data.get('diag_1')}",
        f"Glucose Test: {data.get('glucose_test')}",
        f"A1C Test: {data.get('A1Ctest')}",
    ]


def _render_success(result: PredictionResult) -> None:
    st.markdown("# 🏥 Hospital Readmission Predictor")
    st.write("Below are the prediction results based on the entered patient details.")

    box = st.error if result.will_readmit else st.success
    with st.container(border=True):
        st.markdown("## Prediction Result")
        box(f"**{result.verdict}**")
        c1, c2 = st.columns(2)
        c1.metric("Readmission Probability", result.readmit_probability_percent)
        c2.metric("Risk Level", result.risk_level)

    with st.container(border=True):
        st.markdown("### Patient Information")
        st.markdown("\n".join(f"- {line}" for line in _patient_lines(result)))

    with st.container(border=True):
        st.markdown("### Clinical Recommendations")
        st.markdown("\n".join(f"- {r}" for r in recommendations_for(result.will_readmit)))

    if result.extra_fields:
        with st.expander("Additional service details"):
            st.json(result.extra_fields)

    st.button("New Prediction", type="primary", on_click=navigation.go_to_intake)


def render(use_case_factory: Callable[[], ReadmissionPredictionUseCase]) -> None:
    flow, token = navigation.get_results_flow(use_case_factory)

    if flow.stage is ResultsStage.LOADING:
        _render_loading(flow, token)
        logger.debug("Results flow %s settled in %s", flow.handoff_id, flow.stage.value)

    if flow.stage is ResultsStage.ERROR:
        _render_error(flow.error_message)
    elif flow.stage is ResultsStage.SUCCESS:
        _render_success(flow.result)
    else:
        # Only reachable when the visit was cancelled mid-request.
        st.info("Prediction cancelled.")
        st.button("Back to Form", on_click=navigation.go_to_intake)
