"""In-session page switching and the intake -> results handoff."""
import logging
from typing import Callable, Optional, Tuple

import streamlit as st

from src.application.intake_form import IntakeFormController, NavigationHandoff
from src.application.results_flow import CancellationToken, ResultsFlow
from src.application.use_cases import ReadmissionPredictionUseCase


logger = logging.getLogger(__name__)


INTAKE_PAGE = "intake"
RESULTS_PAGE = "results"
PAGES = (INTAKE_PAGE, RESULTS_PAGE)

PAGE_KEY = "page"
CONTROLLER_KEY = "intake_controller"
HANDOFF_KEY = "pending_handoff"
FLOW_KEY = "results_flow"
TOKEN_KEY = "results_token"
WIDGET_PREFIX = "intake_"


def current_page() -> str:
    """Active page; a fresh session may open the results page directly via ?page=results."""
    if PAGE_KEY not in st.session_state:
        requested = st.query_params.get(PAGE_KEY, INTAKE_PAGE)
        st.session_state[PAGE_KEY] = requested if requested in PAGES else INTAKE_PAGE
    return st.session_state[PAGE_KEY]


def get_intake_controller() -> IntakeFormController:
    if CONTROLLER_KEY not in st.session_state:
        st.session_state[CONTROLLER_KEY] = IntakeFormController()
    return st.session_state[CONTROLLER_KEY]


def _drop_intake_state() -> None:
    for key in list(st.session_state.keys()):
        if key == CONTROLLER_KEY or str(key).startswith(WIDGET_PREFIX):
            del st.session_state[key]


def _leave_results() -> None:
    token = st.session_state.get(TOKEN_KEY)
    if token is not None:
        token.cancel()
    for key in (FLOW_KEY, TOKEN_KEY, HANDOFF_KEY):
        if key in st.session_state:
            del st.session_state[key]


def go_to_results(handoff: NavigationHandoff) -> None:
    """Leave the intake page, carrying the submitted record in memory only."""
    _drop_intake_state()
    st.session_state[HANDOFF_KEY] = handoff
    st.session_state[PAGE_KEY] = RESULTS_PAGE
    logger.debug("Navigating to results with handoff %s", handoff.handoff_id)


def go_to_intake() -> None:
    _leave_results()
    st.session_state[PAGE_KEY] = INTAKE_PAGE


def take_handoff() -> Optional[NavigationHandoff]:
    """Consume the pending handoff; it is handed out at most once."""
    return st.session_state.pop(HANDOFF_KEY, None)


def get_results_flow(
    use_case_factory: Callable[[], ReadmissionPredictionUseCase],
) -> Tuple[ResultsFlow, CancellationToken]:
    """
    Flow for the current results visit.

    A new handoff starts a new flow (cancelling any previous one); reruns
    without a new handoff keep the existing flow so the request is sent once.
    """
    handoff = take_handoff()
    flow = st.session_state.get(FLOW_KEY)

    if handoff is not None or flow is None:
        old_token = st.session_state.get(TOKEN_KEY)
        if old_token is not None:
            old_token.cancel()
        flow = ResultsFlow(handoff, use_case_factory())
        st.session_state[FLOW_KEY] = flow
        st.session_state[TOKEN_KEY] = CancellationToken()

    return flow, st.session_state[TOKEN_KEY]
