"""Validation API — validate posted components or components from the Handoff API."""

from typing import Any

from fastapi import APIRouter, Body, Request

import structlog

from handoff.models.responses import ComponentListValidationResponse
from handoff.services.validation_service import validate_all_components, validate_remote_component
from handoff.validators import ValidationReport, validation_engine

logger = structlog.get_logger()

router = APIRouter()


@router.post("/validate", response_model=ValidationReport)
async def validate_posted_component(component: Any = Body(..., description="Handoff component JSON")):
    """Validate a component supplied in the request body."""
    return validation_engine.validate(component)


@router.get("/components/validation", response_model=ComponentListValidationResponse)
async def validate_all(request: Request):
    """Validate every component listed by the Handoff API."""
    results = await validate_all_components(request.app.state.component_client)
    passed = sum(1 for r in results if r.passed)
    return ComponentListValidationResponse(
        total=len(results),
        passed=passed,
        failed=len(results) - passed,
        results=results,
    )


@router.get("/components/{component_id}/validation", response_model=ValidationReport)
async def validate_component_by_id(component_id: str, request: Request):
    """Fetch one component from the Handoff API and validate it."""
    logger.info("component_validation_requested", component_id=component_id)
    return await validate_remote_component(request.app.state.component_client, component_id)
