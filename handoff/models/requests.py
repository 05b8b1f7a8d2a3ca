"""API request models."""

from typing import Any

from pydantic import BaseModel, Field


class BuildFieldsRequest(BaseModel):
    """Request to build form fields from a component's properties."""

    properties: dict[str, Any] = Field(
        ...,
        description="Property definitions keyed by field key",
        examples=[{
            "title": {
                "type": "text",
                "name": "Title",
                "description": "Headline",
                "default": "Hello",
                "rules": {"required": True, "content": {"min": 1, "max": 80}},
            }
        }],
    )
    prefix: str = Field(default="", max_length=100, description="Prefix for generated field ids")
    validate_first: bool = Field(
        default=True,
        description="Reject properties with error-severity diagnostics before building",
    )
