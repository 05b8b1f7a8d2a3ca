"""Validation service — fetches remote components and validates them."""

import asyncio
from typing import Optional

import structlog
from pydantic import BaseModel

from handoff.config import get_settings
from handoff.services.component_client import ComponentClient, ComponentFetchError
from handoff.validators import ValidationReport, validation_engine

logger = structlog.get_logger()


class ComponentResult(BaseModel):
    """Outcome of validating one remote component."""

    id: str
    title: Optional[str] = None
    report: Optional[ValidationReport] = None
    fetch_error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.report is not None and self.report.passed


async def validate_remote_component(client: ComponentClient, component_id: str) -> ValidationReport:
    """Fetch a component and validate its latest definition.

    Raises:
        ComponentFetchError: if the component cannot be retrieved
    """
    data = await client.fetch_component(component_id)
    return validation_engine.validate(data.get("latest"), name=component_id)


async def validate_all_components(
    client: ComponentClient,
    concurrency: Optional[int] = None,
) -> list[ComponentResult]:
    """Validate every listed component concurrently.

    Results keep the order of the component list. A component that fails to
    fetch is reported with `fetch_error` and does not stop the others.
    """
    summaries = await client.fetch_component_list()
    semaphore = asyncio.Semaphore(concurrency or get_settings().FETCH_CONCURRENCY)

    async def _run(summary: dict) -> ComponentResult:
        component_id = str(summary.get("id", ""))
        title = summary.get("title")
        async with semaphore:
            try:
                report = await validate_remote_component(client, component_id)
            except ComponentFetchError as e:
                logger.error("component_validation_skipped", component_id=component_id, error=str(e))
                return ComponentResult(id=component_id, title=title, fetch_error=str(e))
        return ComponentResult(id=component_id, title=title, report=report)

    results = await asyncio.gather(*(_run(s) for s in summaries))

    logger.info(
        "validate_all_complete",
        total=len(results),
        passed=sum(1 for r in results if r.passed),
        fetch_errors=sum(1 for r in results if r.fetch_error),
    )
    return list(results)
