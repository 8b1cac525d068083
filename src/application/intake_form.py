"""Intake form state and the handoff that carries it to the results page."""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional

from src.domain.models import IntakeRecord
from src.domain.rules import toggle_diagnosis


logger = logging.getLogger(__name__)


REQUIRED_FIELDS = ("name", "gender", "age", "glucose", "a1c")


class IncompleteIntakeError(ValueError):
    """Raised on submit when required intake fields are empty."""

    def __init__(self, missing: List[str]):
        super().__init__("Missing required fields: " + ", ".join(missing))
        self.missing = missing


@dataclass(frozen=True)
class NavigationHandoff:
    """
    Short-lived payload passed from the intake page to the results page.

    It only ever lives in the browser session's memory, so it is gone after a
    page reload.
    """
    record: IntakeRecord
    handoff_id: str = field(default_factory=lambda: uuid.uuid4().hex)


class IntakeFormController:
    """Holds the editable intake record for one visit to the intake page."""

    def __init__(self, record: Optional[IntakeRecord] = None):
        self.record = record or IntakeRecord()

    def update_field(self, name: str, value: Any) -> None:
        """
        Overwrite one field by name.

        Args:
            name: IntakeRecord field name (anything but diagnosis)
            value: New value as produced by the widget

        Raises:
            KeyError: If the field does not exist or is diagnosis
        """
        if name not in IntakeRecord.model_fields:
            raise KeyError(f"Unknown intake field: {name}")
        if name == "diagnosis":
            raise KeyError("diagnosis is updated with toggle_diagnosis")
        data = self.record.model_dump()
        data[name] = value
        self.record = IntakeRecord(**data)

    def toggle_diagnosis(self, value: str) -> bool:
        """Toggle one diagnosis; returns True if it is selected afterwards."""
        selection = toggle_diagnosis(self.record.diagnosis, value)
        if value not in selection and value not in self.record.diagnosis:
            logger.debug("Diagnosis cap reached, ignoring %s", value)
        self.record = self.record.model_copy(update={"diagnosis": selection})
        return value in selection

    def missing_required_fields(self) -> List[str]:
        missing = []
        for name in REQUIRED_FIELDS:
            value = getattr(self.record, name)
            if value is None or not str(value).strip():
                missing.append(name)
        return missing

    def submit(self) -> NavigationHandoff:
        missing = self.missing_required_fields()
        if missing:
            raise IncompleteIntakeError(missing)
        logger.info("Submitted intake: %s", self.record.model_dump())
        return NavigationHandoff(record=self.record.model_copy(deep=True))
