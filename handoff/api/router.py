"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from handoff.api.fields import router as fields_router
from handoff.api.health import router as health_router
from handoff.api.validation import router as validation_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Component validation
api_router.include_router(validation_router, tags=["Validation"])

# Form-field building
api_router.include_router(fields_router, tags=["Fields"])
