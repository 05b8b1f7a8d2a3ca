"""Validation Engine — runs the component validator and produces a report.

This is the main entry point for component validation.

Usage:
    engine = ValidationEngine()
    report = engine.validate(component_json)
    if not report.passed:
        print(format_errors(report.errors))
"""

import json
import time
from typing import Any, Optional, Union

import structlog

from handoff.validators.component_validator import ComponentValidator
from handoff.validators.field_validator import FieldValidator
from handoff.validators.models import FieldValidation, Severity, ValidationReport

logger = structlog.get_logger()


class ValidationEngine:
    """Validates Handoff components and summarizes the diagnostics.

    Design principles:
        - Deterministic: same input → same output
        - Accumulating: every problem is reported in one pass
        - Observable: logs every validation run with timing
    """

    def __init__(self, validator: Optional[ComponentValidator] = None):
        self.validator = validator or ComponentValidator()

    def diagnostics(self, component: Any) -> list[FieldValidation]:
        """Return the ordered diagnostics for a component mapping."""
        return self.validator.validate(component)

    def validate(self, component: Union[dict, str], name: Optional[str] = None) -> ValidationReport:
        """Validate a component and produce a report.

        Args:
            component: Component mapping or its JSON string
            name: Label for the report and logs, defaults to the component code

        Returns:
            ValidationReport with pass/fail, severity counts and all diagnostics
        """
        start_time = time.perf_counter()

        if isinstance(component, str):
            try:
                component = json.loads(component)
            except json.JSONDecodeError as e:
                logger.warning("component_json_invalid", error=str(e))
                return ValidationReport.build(
                    [FieldValidation(
                        message=f"Cannot parse component JSON: {e}",
                        attribute="component",
                        severity=Severity.ERROR,
                    )],
                    component=name,
                )

        if name is None and isinstance(component, dict):
            label = component.get("code") or component.get("id")
            name = str(label) if label else None

        errors = self.diagnostics(component)
        report = ValidationReport.build(errors, component=name)

        logger.info(
            "validation_complete",
            component=name,
            passed=report.passed,
            summary=report.summary,
            total_errors=len(errors),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return report


# Module-level singletons
validation_engine = ValidationEngine()
_field_validator = FieldValidator()


def validate_component(component: Any) -> list[FieldValidation]:
    """Validate a component, returning its diagnostics in traversal order."""
    return validation_engine.diagnostics(component)


def validate_field(prop: Any, key: str) -> list[FieldValidation]:
    """Validate a single property definition and any nested item properties."""
    return _field_validator.validate(prop, key)
