"""Component client — fetches components from a Handoff design-system API.

Transport failures and 5xx responses are retried with exponential backoff;
4xx responses fail immediately.
"""

from typing import Any, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from handoff.config import get_settings
from handoff.services.component_cache import ComponentCache

logger = structlog.get_logger()


class ComponentFetchError(Exception):
    """Error retrieving a component from the Handoff API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ComponentNotFoundError(ComponentFetchError):
    """The requested component does not exist."""


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


def _log_retry(retry_state) -> None:
    logger.warning(
        "component_fetch_retry",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else 0,
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
    )


class ComponentClient:
    """Async HTTP client for the Handoff component API.

    Example:
        >>> async with ComponentClient() as client:
        ...     data = await client.fetch_component("hero")
        ...     component = data["latest"]
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        cache: Optional[ComponentCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        attempts: int = 3,
        wait=None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.HANDOFF_API_URL).rstrip("/")
        token = token if token is not None else settings.HANDOFF_API_TOKEN
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.cache = cache or ComponentCache()
        self.attempts = attempts
        self.wait = wait if wait is not None else wait_exponential(multiplier=1, min=2, max=30)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "ComponentClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()
        await self.cache.close()

    async def ping(self) -> None:
        """Single request, no retries, used by health checks."""
        response = await self._client.get("/api/components.json", timeout=5.0)
        response.raise_for_status()

    async def fetch_component_list(self) -> list[dict]:
        """Fetch the summaries of every component in the design system."""
        data = await self._get_json("/api/components.json")
        if not isinstance(data, list):
            raise ComponentFetchError("Component list response is not an array")
        logger.info("component_list_fetched", count=len(data))
        return data

    async def fetch_component(self, component_id: str) -> dict:
        """Fetch a component wrapper; the current definition is under `latest`."""
        cached = await self.cache.get(component_id)
        if cached is not None:
            return cached

        data = await self._get_json(f"/api/component/{component_id}.json")
        if not isinstance(data, dict):
            raise ComponentFetchError(f"Component '{component_id}' response is not an object")

        await self.cache.set(component_id, data)
        logger.info("component_fetched", component_id=component_id)
        return data

    async def _get_json(self, path: str) -> Any:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.attempts),
                wait=self.wait,
                retry=retry_if_exception(_is_retryable),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await self._client.get(path)
                    response.raise_for_status()
                    return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("component_fetch_failed", path=path, status_code=status)
            if status == 404:
                raise ComponentNotFoundError(f"Not found: {path}", status_code=status) from e
            raise ComponentFetchError(f"Handoff API returned {status} for {path}", status_code=status) from e
        except httpx.RequestError as e:
            logger.error("component_fetch_failed", path=path, error=str(e))
            raise ComponentFetchError(f"Cannot reach Handoff API: {e}") from e
        except ValueError as e:
            raise ComponentFetchError(f"Invalid JSON from {path}: {e}") from e
