"""Form-field builders for validated Handoff components."""

from handoff.fields.builder import (
    AnyField,
    FormField,
    GroupField,
    Occurrence,
    build_base_field,
    build_field,
    build_fields,
    build_group_field,
)
from handoff.fields.utils import parse_required, safe_label, safe_name

__all__ = [
    "AnyField",
    "FormField",
    "GroupField",
    "Occurrence",
    "build_base_field",
    "build_field",
    "build_fields",
    "build_group_field",
    "parse_required",
    "safe_label",
    "safe_name",
]
