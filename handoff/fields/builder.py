"""Form-field builder — maps validated property definitions onto UI field records.

No validation happens here. Callers validate the component first; building
fields from a tree that failed validation gives undefined results.
"""

import math
import uuid
from collections.abc import Mapping
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, Discriminator, Field, Tag

from handoff.fields.utils import parse_required, safe_label, safe_name
from handoff.validators.models import FieldType

GROUP_TYPES = {FieldType.ARRAY.value, FieldType.GROUP.value}


class Occurrence(BaseModel):
    """How many times a repeatable group may occur."""

    min: Union[int, float] = 0
    max: Union[int, float] = 0
    sorting_label_field: Optional[str] = None
    default: Union[int, float] = 0


class FormField(BaseModel):
    """A renderable form field."""

    id: str
    name: str
    label: str
    required: bool = False
    help_text: Optional[str] = None
    locked: bool = False
    allow_new_line: bool = False
    show_emoji_picker: bool = False
    type: str
    display_width: Optional[Any] = None
    default: Any = None


class GroupField(FormField):
    """A field holding repeatable children, built from array and group properties."""

    type: str = "group"
    occurrence: Occurrence = Field(default_factory=Occurrence)
    children: list["AnyField"] = Field(default_factory=list)


def _field_kind(value: Any) -> str:
    field_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return "group" if field_type == "group" else "field"


AnyField = Annotated[
    Union[Annotated[GroupField, Tag("group")], Annotated[FormField, Tag("field")]],
    Discriminator(_field_kind),
]

GroupField.model_rebuild()


def _bound(value: Any) -> Union[int, float]:
    # Non-numeric or non-finite bounds fall back to 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


def _field_id(prefix: str, key: str) -> str:
    return f"{prefix}{key}_{uuid.uuid4()}"


def build_base_field(key: str, prop: Mapping, prefix: str = "") -> FormField:
    """Build a scalar field (text, image, link, button)."""
    return FormField(
        id=_field_id(prefix, key),
        name=safe_name(key),
        label=safe_label(prop.get("name")),
        required=parse_required(prop.get("rules")),
        help_text=prop.get("description"),
        type=prop.get("type") or FieldType.TEXT.value,
        default=prop.get("default"),
    )


def build_group_field(key: str, prop: Mapping, prefix: str = "") -> GroupField:
    """Build a group field whose children come from the array's item properties."""
    rules = prop.get("rules") or {}
    content = rules.get("content") or {}
    if not isinstance(content, Mapping):
        content = {}
    minimum = _bound(content.get("min"))
    name = safe_name(key)

    children: list[FormField] = []
    if prop.get("type") == FieldType.ARRAY.value:
        items = prop.get("items") or {}
        children = build_fields(items.get("properties") or {}, prefix=f"{name}_")

    return GroupField(
        id=_field_id(prefix, key),
        name=name,
        label=safe_label(prop.get("name")),
        required=parse_required(rules),
        help_text=prop.get("description"),
        default=prop.get("default"),
        occurrence=Occurrence(
            min=minimum,
            max=_bound(content.get("max")),
            default=minimum,
        ),
        children=children,
    )


def build_field(key: str, prop: Mapping, prefix: str = "") -> FormField:
    """Build the field for one property definition."""
    if prop.get("type") in GROUP_TYPES:
        return build_group_field(key, prop, prefix)
    return build_base_field(key, prop, prefix)


def build_fields(properties: Mapping, prefix: str = "") -> list[FormField]:
    """Build fields for every property, in mapping order."""
    return [build_field(key, prop, prefix) for key, prop in properties.items()]
