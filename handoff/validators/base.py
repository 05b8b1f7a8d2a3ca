"""Base validator — shared diagnostic helpers for component and field validators.

Each validator is a standalone, independently testable unit.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

from handoff.validators.models import FieldValidation, Severity


def is_missing(value: Any) -> bool:
    """True for values the component schema treats as absent.

    None, empty strings, False and numeric zero are all missing. Empty
    mappings and lists are present.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or value != value  # NaN
    return False


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class BaseValidator(ABC):
    """Abstract base for schema validators.

    Contract:
        - validate() is deterministic: same input → same output
        - validate() returns a list of FieldValidation (empty = no issues)
        - validate() never raises for malformed input, it reports it
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def validate(self, *args, **kwargs) -> list[FieldValidation]:
        ...

    # ── Helper Methods ──

    def _diagnostic(
        self,
        message: str,
        attribute: str,
        property: Optional[str] = None,
        severity: Severity = Severity.ERROR,
    ) -> FieldValidation:
        """Convenience method to create a FieldValidation."""
        return FieldValidation(
            message=message,
            attribute=attribute,
            property=property,
            severity=severity,
        )

    def _error(self, message: str, attribute: str, property: Optional[str] = None) -> FieldValidation:
        return self._diagnostic(message, attribute, property, Severity.ERROR)

    def _warning(self, message: str, attribute: str, property: Optional[str] = None) -> FieldValidation:
        return self._diagnostic(message, attribute, property, Severity.WARNING)
