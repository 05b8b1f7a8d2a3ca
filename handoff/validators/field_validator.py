"""Field Validator — recursive rule checks for a single property definition.

Generic checks run for every field; type-specific checks are looked up in a
rule table keyed by FieldType. Array fields recurse into their item
properties, which is the only recursive edge in a property tree.
"""

from collections.abc import Mapping
from numbers import Number
from typing import Any, Callable

from handoff.validators.base import BaseValidator, is_mapping, is_missing
from handoff.validators.models import FieldType, FieldValidation

TypeRule = Callable[[Mapping, Mapping, str], list[FieldValidation]]


def _below_one(value: Any) -> bool:
    """True when a content bound is not a number of at least 1."""
    if isinstance(value, bool) or not isinstance(value, Number):
        return True
    return value < 1


class FieldValidator(BaseValidator):
    """Validates a property definition and, for arrays, its nested item properties."""

    def __init__(self):
        self._type_rules: dict[FieldType, TypeRule] = {
            FieldType.TEXT: self._text_rules,
            FieldType.ARRAY: self._array_rules,
            FieldType.IMAGE: self._image_rules,
            FieldType.LINK: self._link_rules,
            FieldType.BUTTON: self._button_rules,
            FieldType.GROUP: self._group_rules,
        }

    @property
    def name(self) -> str:
        return "FieldValidator"

    def validate(self, prop: Any, key: str) -> list[FieldValidation]:
        if not is_mapping(prop):
            return [self._error("Field definition must be an object", "property", key)]

        errors = []
        field_type = prop.get("type")

        # 1. Type presence and validity
        if is_missing(field_type):
            errors.append(self._error("Field type is required", "type", key))
        elif not FieldType.is_valid(field_type):
            errors.append(self._error(f"Field type {field_type} is invalid", "type", key))

        # 2-4. Presentation metadata
        if is_missing(prop.get("description")):
            errors.append(self._warning("Field description is required", "description", key))
        if is_missing(prop.get("name")):
            errors.append(self._error("Field name is required", "name", key))
        if is_missing(prop.get("default")) and field_type != FieldType.ARRAY.value:
            errors.append(self._warning("Field default is required", "default", key))

        # 5. Rules bundle
        rules = prop.get("rules")
        if is_missing(rules):
            errors.append(self._warning("Field rules are required", "rules", key))
            return errors
        if not is_mapping(rules):
            errors.append(self._error("Field rules must be an object", "rules", key))
            return errors

        # 6. Generic rule checks
        required = rules.get("required")
        if required is not True and required is not False:
            errors.append(self._error("Field rules.required is required", "rules.required", key))

        content = rules.get("content")
        if not is_missing(content):
            if not is_mapping(content):
                errors.append(self._error("Content rules must be an object", "rules.content", key))
            else:
                if required is True and is_missing(content.get("min")):
                    errors.append(self._warning(
                        "Content rules must have a minimum length", "rules.content.min", key
                    ))
                if is_missing(content.get("max")):
                    errors.append(self._warning(
                        "Content rules must have a maximum length", "rules.content.max", key
                    ))

        # 7. Type-specific checks
        if FieldType.is_valid(field_type):
            errors.extend(self._type_rules[FieldType(field_type)](prop, rules, key))

        return errors

    # ── Type Rules ──

    def _text_rules(self, prop: Mapping, rules: Mapping, key: str) -> list[FieldValidation]:
        if is_missing(rules.get("content")):
            return [self._error("Content rules are required for text fields", "rules.content", key)]
        return []

    def _array_rules(self, prop: Mapping, rules: Mapping, key: str) -> list[FieldValidation]:
        errors = []

        content = rules.get("content")
        if is_missing(content):
            errors.append(self._error("Content rules are required for array fields", "rules.content", key))
        elif is_mapping(content):
            # Absent and below-one minimums share one message
            if is_missing(content.get("min")) or _below_one(content.get("min")):
                errors.append(self._error(
                    "Array fields must have a minimum content length", "rules.content.min", key
                ))
            if is_missing(content.get("max")):
                errors.append(self._error(
                    "Content rules must have a maximum length", "rules.content.max", key
                ))
            elif _below_one(content.get("max")):
                errors.append(self._error(
                    "Content rules maximum length must be greater than 0", "rules.content.max", key
                ))

        items = prop.get("items")
        if is_missing(items):
            errors.append(self._error("Items are required for array fields", "items", key))
            return errors
        if not is_mapping(items):
            errors.append(self._error("Items must be an object for array fields", "items", key))
            return errors

        item_type = items.get("type")
        if is_missing(item_type):
            errors.append(self._error("Type is required for array fields", "items.type", key))
        elif not FieldType.is_valid(item_type):
            errors.append(self._error(f"Field type {item_type} is invalid", "items.type", key))

        properties = items.get("properties")
        if is_missing(properties):
            errors.append(self._error("Properties are required for array fields", "items.properties", key))
        elif not is_mapping(properties):
            errors.append(self._error(
                "Properties must be an object for array fields", "items.properties", key
            ))
        else:
            for child_key, child in properties.items():
                errors.extend(self.validate(child, child_key))

        return errors

    def _link_rules(self, prop: Mapping, rules: Mapping, key: str) -> list[FieldValidation]:
        return self._object_default(prop, key, "link", ("url", "text"))

    def _button_rules(self, prop: Mapping, rules: Mapping, key: str) -> list[FieldValidation]:
        # Button messages keep the "image fields" wording of the published rule set
        return self._object_default(prop, key, "image", ("url", "label"))

    def _image_rules(self, prop: Mapping, rules: Mapping, key: str) -> list[FieldValidation]:
        errors = self._object_default(prop, key, "image", ("src", "alt"))

        dimensions = rules.get("dimensions")
        if is_missing(dimensions):
            errors.append(self._error("Dimensions are required for image fields", "rules.dimensions", key))
            return errors
        if not is_mapping(dimensions):
            errors.append(self._error(
                "Dimensions must be an object for image fields", "rules.dimensions", key
            ))
            return errors

        minimum = dimensions.get("min")
        if is_missing(minimum):
            errors.append(self._error("Minimum is required for image fields", "rules.dimensions.min", key))
        elif not is_mapping(minimum):
            errors.append(self._error(
                "Minimum must be an object for image fields", "rules.dimensions.min", key
            ))
        else:
            if is_missing(minimum.get("width")):
                errors.append(self._error(
                    "Minimum width is required for image fields", "rules.dimensions.min.width", key
                ))
            if is_missing(minimum.get("height")):
                errors.append(self._error(
                    "Minimum height is required for image fields", "rules.dimensions.min.height", key
                ))

        return errors

    def _group_rules(self, prop: Mapping, rules: Mapping, key: str) -> list[FieldValidation]:
        return []

    # ── Helpers ──

    def _object_default(
        self, prop: Mapping, key: str, label: str, required_keys: tuple[str, ...]
    ) -> list[FieldValidation]:
        """Check that `default` is an object carrying each of `required_keys`."""
        default = prop.get("default")
        if is_missing(default):
            return [self._error(f"Default is required for {label} fields", "default", key)]
        if not is_mapping(default):
            return [self._error(f"Default must be an object for {label} fields", "default", key)]

        errors = []
        for required_key in required_keys:
            if is_missing(default.get(required_key)):
                errors.append(self._error(
                    f"Default {required_key} is required for {label} fields",
                    f"default.{required_key}",
                    key,
                ))
        return errors
