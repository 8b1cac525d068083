"""Unit tests for the intake form controller."""
import pytest
from pydantic import ValidationError

from src.application.intake_form import (
    IncompleteIntakeError,
    IntakeFormController,
    NavigationHandoff,
)
from src.domain.models import IntakeRecord


@pytest.fixture
def controller():
    return IntakeFormController()


def fill_required(controller):
    controller.update_field("name", "John Doe")
    controller.update_field("gender", "male")
    controller.update_field("age", "60-70")
    controller.update_field("glucose", "normal")
    controller.update_field("a1c", "unknown")


class TestIntakeRecord:
    """Test record defaults and invariants."""

    def test_defaults(self):
        """Test a blank record has the form's defaults."""
        record = IntakeRecord()
        assert record.visits == 1
        assert record.diagnosis == []
        assert record.medication_changes == "no"
        assert record.medical_specialty == "Missing"
        assert record.lab_procedures is None

    def test_more_than_three_diagnoses_rejected(self):
        """Test a record with four diagnoses is invalid."""
        with pytest.raises(ValidationError):
            IntakeRecord(diagnosis=["Circulatory", "Diabetes", "Injury", "Other"])

    def test_repeated_diagnosis_rejected(self):
        """Test a diagnosis cannot appear twice."""
        with pytest.raises(ValidationError):
            IntakeRecord(diagnosis=["Injury", "Injury"])

    def test_invalid_age_bucket_rejected(self):
        """Age must be one of the form's buckets."""
        with pytest.raises(ValidationError):
            IntakeRecord(age="20-30")


class TestUpdateField:
    """Test field-level overwrite."""

    def test_overwrites_value(self, controller):
        """Test the latest value wins."""
        controller.update_field("name", "Ann")
        controller.update_field("name", "Anna")
        assert controller.record.name == "Anna"

    def test_numeric_fields_accept_text_and_ints(self, controller):
        """Test count fields keep widget ints and raw text."""
        controller.update_field("medications", 4)
        controller.update_field("lab_procedures", "30")
        assert controller.record.medications == 4
        assert controller.record.lab_procedures == "30"

    def test_choice_outside_catalogue_rejected(self, controller):
        """Choice fields only take their option values."""
        with pytest.raises(ValidationError):
            controller.update_field("gender", "banana")
        with pytest.raises(ValidationError):
            controller.update_field("medical_specialty", "Surgery")
        assert controller.record.gender == ""
        assert controller.record.medical_specialty == "Missing"

    def test_choice_can_be_cleared(self, controller):
        """An empty choice stays allowed while the form is being filled."""
        controller.update_field("glucose", "high")
        controller.update_field("glucose", "")
        assert controller.record.glucose == ""

    def test_unknown_field(self, controller):
        """Test unknown field names are refused."""
        with pytest.raises(KeyError):
            controller.update_field("blood_type", "A")

    def test_diagnosis_not_overwritable(self, controller):
        """Test diagnosis only changes through toggling."""
        with pytest.raises(KeyError):
            controller.update_field("diagnosis", ["Injury"])


class TestToggleDiagnosis:
    """Test diagnosis multi-select through the controller."""

    def test_cap_and_removal(self, controller):
        """Test the cap, removal when full, and re-adding after removal."""
        assert controller.toggle_diagnosis("Respiratory") is True
        assert controller.toggle_diagnosis("Diabetes") is True
        assert controller.toggle_diagnosis("Injury") is True
        assert controller.toggle_diagnosis("Other") is False
        assert controller.record.diagnosis == ["Respiratory", "Diabetes", "Injury"]

        assert controller.toggle_diagnosis("Respiratory") is False
        assert controller.record.diagnosis == ["Diabetes", "Injury"]

        assert controller.toggle_diagnosis("Other") is True
        assert controller.record.diagnosis == ["Diabetes", "Injury", "Other"]


class TestSubmit:
    """Test submission and the navigation handoff."""

    def test_missing_required_fields(self, controller):
        """Test submit refuses a record without required fields."""
        controller.update_field("name", "   ")
        assert controller.missing_required_fields() == ["name", "gender", "age", "glucose", "a1c"]
        with pytest.raises(IncompleteIntakeError) as exc:
            controller.submit()
        assert exc.value.missing == ["name", "gender", "age", "glucose", "a1c"]

    def test_submit_returns_handoff_copy(self, controller):
        """Test the handoff carries a copy detached from the form."""
        fill_required(controller)
        controller.toggle_diagnosis("Digestive")
        handoff = controller.submit()

        assert isinstance(handoff, NavigationHandoff)
        assert handoff.record == controller.record
        assert handoff.record is not controller.record

        controller.toggle_diagnosis("Injury")
        assert handoff.record.diagnosis == ["Digestive"]

    def test_each_submit_has_new_id(self, controller):
        """Test every submission gets its own handoff id."""
        fill_required(controller)
        assert controller.submit().handoff_id != controller.submit().handoff_id
