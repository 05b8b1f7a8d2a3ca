"""Handoff Validator — schema validation for Handoff design-system components."""

__version__ = "1.0.0"
