"""Component Validator — validates the component wrapper and every top-level property."""

from typing import Any, Optional

from handoff.validators.base import BaseValidator, is_array, is_mapping, is_missing
from handoff.validators.field_validator import FieldValidator
from handoff.validators.models import FieldValidation


class ComponentValidator(BaseValidator):
    """Validates the structural integrity of a Handoff component."""

    def __init__(self, field_validator: Optional[FieldValidator] = None):
        self.field_validator = field_validator or FieldValidator()

    @property
    def name(self) -> str:
        return "ComponentValidator"

    def validate(self, component: Any) -> list[FieldValidation]:
        if not is_mapping(component):
            return [self._error("Component must be an object", "component")]

        errors = []

        # 1. Required identity fields
        if is_missing(component.get("code")):
            errors.append(self._error("Component code is required", "code"))
        if is_missing(component.get("title")):
            errors.append(self._error("Component title is required", "title"))

        # 2. Tags must be an array
        tags = component.get("tags")
        if tags is None:
            errors.append(self._error("Component tags are required", "tags"))
        elif not is_array(tags):
            errors.append(self._error("Component tags must be an array", "tags"))

        # 3. Properties, validated field by field in mapping order
        properties = component.get("properties")
        if is_missing(properties):
            errors.append(self._error("Component properties are required", "properties"))
        elif not is_mapping(properties):
            errors.append(self._error("Component properties must be an object", "properties"))
        else:
            for key, prop in properties.items():
                errors.extend(self.field_validator.validate(prop, key))

        return errors
