"""Sanitizers shared by the field builders."""

import re
from typing import Any

_NON_IDENTIFIER = re.compile(r"[^a-z0-9]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_TAG = re.compile(r"<[^>]*>")
_CONTROL = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")


def safe_name(value: Any) -> str:
    """Turn a declaration key into a snake_case field name.

    >>> safe_name("heroImage")
    'hero_image'
    >>> safe_name("Call to action!")
    'call_to_action'
    """
    text = _CAMEL_BOUNDARY.sub("_", str(value or ""))
    name = _NON_IDENTIFIER.sub("_", text.lower()).strip("_")
    if name and name[0].isdigit():
        name = f"field_{name}"
    return name


def safe_label(value: Any) -> str:
    """Strip markup and control characters from a human-readable label."""
    text = _TAG.sub("", str(value or ""))
    text = _CONTROL.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def parse_required(rules: Any) -> bool:
    """A field is required only when its rules say so explicitly."""
    if not isinstance(rules, dict):
        return False
    return rules.get("required") is True
