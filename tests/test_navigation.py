"""Tests for in-session page switching and the intake -> results handoff."""
import pytest
from unittest.mock import Mock, patch

from src.application.intake_form import IntakeFormController, NavigationHandoff
from src.application.results_flow import ResultsStage
from src.domain.models import IntakeRecord


class MockSessionState(dict):
    """Mock Streamlit session state."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.__dict__ = self


@pytest.fixture
def mock_streamlit():
    """Mock streamlit module."""
    with patch('src.presentation.navigation.st') as mock_st:
        mock_st.session_state = MockSessionState()
        mock_st.query_params = {}
        yield mock_st


def make_handoff():
    return NavigationHandoff(record=IntakeRecord(name="Jane", gender="female", age="60-70"))


def use_case_factory():
    use_case = Mock()
    return Mock(return_value=use_case), use_case


class TestNavigation:
    """Test page switching."""

    def test_fresh_session_starts_on_intake(self, mock_streamlit):
        """Test a new session opens the intake page."""
        from src.presentation.navigation import current_page, INTAKE_PAGE
        assert current_page() == INTAKE_PAGE

    def test_direct_link_to_results(self, mock_streamlit):
        """Test ?page=results opens the results page."""
        from src.presentation.navigation import current_page, RESULTS_PAGE
        mock_streamlit.query_params = {"page": "results"}
        assert current_page() == RESULTS_PAGE

    def test_unknown_page_falls_back_to_intake(self, mock_streamlit):
        """Test an unknown page name opens the intake page."""
        from src.presentation.navigation import current_page, INTAKE_PAGE
        mock_streamlit.query_params = {"page": "admin"}
        assert current_page() == INTAKE_PAGE

    def test_go_to_results_drops_intake_state(self, mock_streamlit):
        """Test leaving the intake page discards its record and widgets."""
        from src.presentation import navigation

        controller = navigation.get_intake_controller()
        assert isinstance(controller, IntakeFormController)
        mock_streamlit.session_state["intake_name"] = "Jane"
        handoff = make_handoff()

        navigation.go_to_results(handoff)

        state = mock_streamlit.session_state
        assert state[navigation.PAGE_KEY] == navigation.RESULTS_PAGE
        assert state[navigation.HANDOFF_KEY] is handoff
        assert navigation.CONTROLLER_KEY not in state
        assert "intake_name" not in state

    def test_handoff_is_consumed_once(self, mock_streamlit):
        """Test the handoff can only be taken once."""
        from src.presentation import navigation
        handoff = make_handoff()
        navigation.go_to_results(handoff)
        assert navigation.take_handoff() is handoff
        assert navigation.take_handoff() is None


class TestResultsFlowLifetime:
    """Test one flow per navigation and cancellation on leave."""

    def test_reruns_reuse_the_same_flow(self, mock_streamlit):
        """Test reruns keep the flow of the current visit."""
        from src.presentation import navigation
        factory, _ = use_case_factory()
        navigation.go_to_results(make_handoff())

        flow, token = navigation.get_results_flow(factory)
        again, same_token = navigation.get_results_flow(factory)

        assert again is flow
        assert same_token is token
        assert factory.call_count == 1

    def test_no_handoff_gives_error_flow(self, mock_streamlit):
        """Test results without a handoff end in the no-data error."""
        from src.presentation import navigation
        factory, use_case = use_case_factory()
        flow, token = navigation.get_results_flow(factory)
        assert flow.handoff is None
        assert flow.run(token) is ResultsStage.ERROR
        assert flow.error_message == "No patient data provided"
        use_case.predict.assert_not_called()

    def test_new_handoff_replaces_and_cancels_old_flow(self, mock_streamlit):
        """Test a new submission cancels the previous visit."""
        from src.presentation import navigation
        factory, _ = use_case_factory()
        navigation.go_to_results(make_handoff())
        first, first_token = navigation.get_results_flow(factory)

        second_handoff = make_handoff()
        navigation.go_to_results(second_handoff)
        second, second_token = navigation.get_results_flow(factory)

        assert second is not first
        assert second.handoff is second_handoff
        assert first_token.cancelled
        assert not second_token.cancelled

    def test_leaving_results_cancels_token(self, mock_streamlit):
        """Test going back to the form cancels the visit."""
        from src.presentation import navigation
        factory, _ = use_case_factory()
        navigation.go_to_results(make_handoff())
        _, token = navigation.get_results_flow(factory)

        navigation.go_to_intake()

        state = mock_streamlit.session_state
        assert token.cancelled
        assert state[navigation.PAGE_KEY] == navigation.INTAKE_PAGE
        assert navigation.FLOW_KEY not in state
        assert navigation.TOKEN_KEY not in state
