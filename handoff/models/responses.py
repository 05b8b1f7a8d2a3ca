"""API response models."""

from typing import Literal, Optional

from pydantic import BaseModel

from handoff.fields import AnyField
from handoff.services.validation_service import ComponentResult
from handoff.validators import FieldValidation


class ComponentListValidationResponse(BaseModel):
    """Validation results for every remote component."""

    total: int
    passed: int
    failed: int
    results: list[ComponentResult]


class BuildFieldsResponse(BaseModel):
    """Fields built from a property mapping."""

    fields: list[AnyField] = []
    diagnostics: list[FieldValidation] = []


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded", "disabled"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
