"""Fields API — build form fields from property definitions."""

from fastapi import APIRouter, HTTPException

from handoff.fields import build_fields
from handoff.models.requests import BuildFieldsRequest
from handoff.models.responses import BuildFieldsResponse
from handoff.validators import validate_field

router = APIRouter()


@router.post("/fields", response_model=BuildFieldsResponse)
async def build_form_fields(body: BuildFieldsRequest):
    """Build form fields, rejecting invalid properties unless validation is skipped."""
    diagnostics = []
    if body.validate_first:
        for key, prop in body.properties.items():
            diagnostics.extend(validate_field(prop, key))

        errors = [d for d in diagnostics if d.is_error()]
        if errors:
            raise HTTPException(
                status_code=422,
                detail={
                    "error": "invalid_properties",
                    "message": f"{len(errors)} error(s) must be fixed before building fields",
                    "diagnostics": [d.model_dump() for d in errors],
                },
            )

    return BuildFieldsResponse(
        fields=build_fields(body.properties, prefix=body.prefix),
        diagnostics=diagnostics,
    )
