"""Component Validator — deterministic schema checks for Handoff components.

Usage:
    from handoff.validators import validate_component

    errors = validate_component(component)
    if errors:
        # Print or return the diagnostics
"""

from handoff.validators.engine import (
    ValidationEngine,
    validate_component,
    validate_field,
    validation_engine,
)
from handoff.validators.models import (
    FIELD_TYPES,
    FieldType,
    FieldValidation,
    Severity,
    ValidationReport,
)

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "validate_component",
    "validate_field",
    "ValidationReport",
    "FieldValidation",
    "FieldType",
    "FIELD_TYPES",
    "Severity",
]
