from typing import List, Tuple
from .models import MAX_DIAGNOSES


READMIT_THRESHOLD = 0.5

HIGH_RISK = "High Risk"
LOW_RISK = "Low Risk"

RECOMMENDATIONS = {
    True: (
        "Schedule follow-up appointment within 7 days",
        "Ensure medication adherence counseling",
        "Consider home health services",
        "Review discharge planning with care team",
        "Monitor top risk factors closely",
    ),
    False: (
        "Standard discharge planning",
        "Follow-up appointment within 2-4 weeks",
        "Patient education on warning signs",
        "Continue current treatment plan",
    ),
}


def toggle_diagnosis(current: List[str], value: str) -> List[str]:
    """Return a new selection with `value` toggled.

    A selected value is always removed. An unselected one is appended only
    while fewer than MAX_DIAGNOSES are selected, so the first pick stays primary.
    """
    if value in current:
        return [d for d in current if d != value]
    if len(current) < MAX_DIAGNOSES:
        return current + [value]
    return list(current)


def format_percent(probability: float) -> str:
    return f"{probability * 100:.2f}%"


def classify_probability(probability: float) -> Tuple[bool, str, str, str]:
    """Map a readmission probability to (will_readmit, risk_level, verdict, percent)."""
    will_readmit = probability >= READMIT_THRESHOLD
    risk_level = HIGH_RISK if will_readmit else LOW_RISK
    verdict = "WILL readmit" if will_readmit else "WILL NOT readmit"
    return will_readmit, risk_level, verdict, format_percent(probability)


def recommendations_for(will_readmit: bool) -> Tuple[str, ...]:
    return RECOMMENDATIONS[bool(will_readmit)]
