"""Validation models — field types, severity levels, diagnostics, and report structure.

All validation is deterministic: same input → same output, no network calls.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"      # Schema is invalid
    WARNING = "warning"  # Schema is suspect but usable


class FieldType(str, Enum):
    """The closed set of property types a Handoff component may declare."""

    TEXT = "text"
    ARRAY = "array"
    IMAGE = "image"
    LINK = "link"
    BUTTON = "button"
    GROUP = "group"

    @classmethod
    def is_valid(cls, value) -> bool:
        return isinstance(value, str) and any(value == member.value for member in cls)


FIELD_TYPES = [t.value for t in FieldType]


class FieldValidation(BaseModel):
    """A single validation diagnostic."""

    message: str
    attribute: str                        # Dotted path of the failed constraint
    property: Optional[str] = None        # Key of the field, None for component-level
    severity: Optional[Severity] = None   # Unset is treated as an error

    model_config = {"use_enum_values": True, "frozen": True}

    # `property` is a field name here, so these are plain methods.
    def effective_severity(self) -> str:
        return self.severity or Severity.ERROR.value

    def is_error(self) -> bool:
        return self.effective_severity() == Severity.ERROR.value


class ValidationReport(BaseModel):
    """Complete validation report — the output of the validation engine."""

    passed: bool = Field(description="True if no error-severity diagnostics")
    summary: dict = Field(
        description="Count of diagnostics by severity",
        default_factory=lambda: {level.value: 0 for level in Severity},
    )
    errors: list[FieldValidation] = Field(default_factory=list)
    component: Optional[str] = Field(default=None, description="Code or id of the validated component")

    @classmethod
    def build(cls, errors: list[FieldValidation], component: Optional[str] = None) -> "ValidationReport":
        """Build a report from a list of diagnostics, keeping their order.

        The summary keeps one counter per Severity member.
        """
        summary = {level.value: 0 for level in Severity}
        for err in errors:
            summary[err.effective_severity()] += 1

        return cls(
            passed=summary["error"] == 0,
            summary=summary,
            errors=list(errors),
            component=component,
        )

    def failed(self, strict: bool = False) -> bool:
        """True if the report has errors, or any warning when strict."""
        if strict:
            return bool(self.errors)
        return not self.passed
