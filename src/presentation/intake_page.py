"""Patient details form."""
import streamlit as st

from src.application.intake_form import IncompleteIntakeError
from src.domain.models import (
    AGE_BUCKETS,
    DIAGNOSIS_CATEGORIES,
    GENDER_OPTIONS,
    MAX_DIAGNOSES,
    MEDICAL_SPECIALTIES,
    MEDICATION_CHANGE_OPTIONS,
    NUMERIC_BOUNDS,
    TEST_RESULT_OPTIONS,
)
from src.presentation import navigation


ERROR_KEY = "intake_submit_error"

INTRO = (
    "Hospital Readmission Predictor is an AI-powered web application designed to help "
    "healthcare providers assess the likelihood of a patient being readmitted after discharge. "
    "By analyzing patient demographics, medical history, and clinical details, the system "
    "provides instant predictions and actionable insights."
)

BENEFITS = [
    "Improving patient care through early identification of high-risk patients.",
    "Optimizing treatment plans by tailoring follow-ups and preventive measures.",
    "Reducing hospital costs by lowering avoidable readmission rates.",
    "Supporting decision-making with data-driven insights.",
]

FIELD_LABELS = {
    "name": "Full Name",
    "gender": "Gender",
    "age": "Age",
    "glucose": "Glucose Test",
    "a1c": "A1C Test",
}

NUMBER_FIELDS = [
    ("visits", "Hospital Stay (days)"),
    ("medications", "Number of Medications"),
    ("lab_procedures", "Lab Procedures"),
    ("procedures", "Number of Procedures"),
    ("previous_visits", "Previous Outpatient Visits"),
    ("emergency_visits", "Emergency Visits"),
]


def _key(field: str) -> str:
    return f"{navigation.WIDGET_PREFIX}{field}"


def _diag_key(label: str) -> str:
    return f"{navigation.WIDGET_PREFIX}diag_{label}"


def _placeholder(text: str):
    return lambda v: v.title() if v else text


def _seed_widget_state(controller) -> None:
    """Give every widget its starting value from the record, once per intake visit."""
    record = controller.record
    for field in ("name", "gender", "age", "glucose", "a1c", "medication_changes", "medical_specialty"):
        st.session_state.setdefault(_key(field), getattr(record, field))
    for field, _ in NUMBER_FIELDS:
        value = getattr(record, field)
        st.session_state.setdefault(_key(field), value if isinstance(value, int) else None)
    for label in DIAGNOSIS_CATEGORIES:
        st.session_state.setdefault(_diag_key(label), label in record.diagnosis)


def _on_field_change(field: str) -> None:
    navigation.get_intake_controller().update_field(field, st.session_state[_key(field)])


def _on_diagnosis_change(label: str) -> None:
    selected = navigation.get_intake_controller().toggle_diagnosis(label)
    # Keep the checkbox in line with the record when the cap refuses a pick.
    st.session_state[_diag_key(label)] = selected


def _on_submit() -> None:
    controller = navigation.get_intake_controller()
    try:
        handoff = controller.submit()
    except IncompleteIntakeError as e:
        st.session_state[ERROR_KEY] = [FIELD_LABELS.get(m, m) for m in e.missing]
        return
    st.session_state.pop(ERROR_KEY, None)
    navigation.go_to_results(handoff)


def _render_info() -> None:
    st.markdown("# 🏥 Hospital Readmission Predictor")
    st.write(INTRO)
    st.write("This tool supports doctors, nurses, and hospital administrators in:")
    st.markdown("\n".join(f"- {b}" for b in BENEFITS))
    st.write(
        "With its intuitive interface, healthcare professionals can enter patient details via a "
        "user-friendly form and instantly receive a prediction, along with probability scores."
    )


def render() -> None:
    controller = navigation.get_intake_controller()
    _seed_widget_state(controller)

    _render_info()
    st.divider()
    st.subheader("Patient Details Form")

    st.text_input(
        "Full Name", key=_key("name"), placeholder="Enter patient name",
        on_change=_on_field_change, args=("name",),
    )
    col1, col2 = st.columns(2)
    col1.selectbox(
        "Gender", [""] + GENDER_OPTIONS, key=_key("gender"),
        format_func=_placeholder("--Select Gender--"), on_change=_on_field_change, args=("gender",),
    )
    col2.selectbox(
        "Age", [""] + AGE_BUCKETS, key=_key("age"),
        format_func=lambda v: v or "--Select Age--", on_change=_on_field_change, args=("age",),
    )

    lo, hi = NUMERIC_BOUNDS["visits"]
    st.number_input(
        "Hospital Stay (days)", min_value=lo, max_value=hi, step=1, key=_key("visits"),
        on_change=_on_field_change, args=("visits",),
    )

    st.markdown(f"**Diagnosis** (select up to {MAX_DIAGNOSES} and give primary first)")
    cols = st.columns(len(DIAGNOSIS_CATEGORIES))
    for col, label in zip(cols, DIAGNOSIS_CATEGORIES):
        col.checkbox(label, key=_diag_key(label), on_change=_on_diagnosis_change, args=(label,))
    if controller.record.diagnosis:
        st.caption("Selected: " + " → ".join(controller.record.diagnosis))

    col1, col2 = st.columns(2)
    col1.selectbox(
        "Glucose Test", [""] + TEST_RESULT_OPTIONS, key=_key("glucose"),
        format_func=_placeholder("--Select Level--"), on_change=_on_field_change, args=("glucose",),
    )
    col2.selectbox(
        "A1C Test", [""] + TEST_RESULT_OPTIONS, key=_key("a1c"),
        format_func=_placeholder("--Select Level--"), on_change=_on_field_change, args=("a1c",),
    )

    st.selectbox(
        "Medical Specialty", MEDICAL_SPECIALTIES, key=_key("medical_specialty"),
        on_change=_on_field_change, args=("medical_specialty",),
    )

    for field, label in NUMBER_FIELDS[1:]:
        lo, hi = NUMERIC_BOUNDS[field]
        st.number_input(
            label, min_value=lo, max_value=hi, step=1, value=None, key=_key(field),
            on_change=_on_field_change, args=(field,),
        )

    st.selectbox(
        "Medication Changes", MEDICATION_CHANGE_OPTIONS, key=_key("medication_changes"),
        format_func=str.title, on_change=_on_field_change, args=("medication_changes",),
    )

    missing = st.session_state.get(ERROR_KEY)
    if missing:
        st.warning("Please fill in: " + ", ".join(missing))

    st.button("Submit", type="primary", on_click=_on_submit, use_container_width=True)
