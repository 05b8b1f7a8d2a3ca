"""Tests for the component client, cache, and validation service (mocked HTTP)."""

import httpx
import pytest
from tenacity import wait_none

from handoff.services.component_cache import ComponentCache, create_cache
from handoff.services.component_client import (
    ComponentClient,
    ComponentFetchError,
    ComponentNotFoundError,
)
from handoff.services.validation_service import validate_all_components, validate_remote_component


class TestComponentClient:
    """ComponentClient against the mock Handoff API."""

    async def test_fetch_component(self, make_client, handoff_api):
        async with make_client() as client:
            data = await client.fetch_component("hero")
        assert data["latest"]["code"] == "hero"
        assert handoff_api.calls("/api/component/hero.json") == 1

    async def test_fetch_component_list(self, make_client):
        async with make_client() as client:
            summaries = await client.fetch_component_list()
        assert [s["id"] for s in summaries] == ["hero", "broken"]

    async def test_not_found_is_not_retried(self, make_client, handoff_api):
        async with make_client() as client:
            with pytest.raises(ComponentNotFoundError) as exc_info:
                await client.fetch_component("missing")
        assert exc_info.value.status_code == 404
        assert handoff_api.calls("/api/component/missing.json") == 1

    async def test_server_errors_are_retried(self, make_client, handoff_api):
        handoff_api.failures["/api/component/hero.json"] = [503, 502]
        async with make_client() as client:
            data = await client.fetch_component("hero")
        assert data["id"] == "hero"
        assert handoff_api.calls("/api/component/hero.json") == 3

    async def test_retries_exhausted(self, make_client, handoff_api):
        handoff_api.failures["/api/components.json"] = [500, 500, 500]
        async with make_client() as client:
            with pytest.raises(ComponentFetchError) as exc_info:
                await client.fetch_component_list()
        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, ComponentNotFoundError)

    async def test_transport_errors_become_fetch_errors(self):
        attempts = []

        def handler(request):
            attempts.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        client = ComponentClient(
            base_url="http://handoff.test",
            transport=httpx.MockTransport(handler),
            wait=wait_none(),
        )
        with pytest.raises(ComponentFetchError) as exc_info:
            await client.fetch_component("hero")
        await client.close()
        assert exc_info.value.status_code is None
        assert len(attempts) == 3

    async def test_bearer_token(self, make_client, handoff_api):
        async with make_client(token="secret") as client:
            await client.fetch_component("hero")
        assert handoff_api.requests[0].headers["Authorization"] == "Bearer secret"

    async def test_cache_hit_skips_http(self, make_client, handoff_api, fake_redis):
        cache = ComponentCache(fake_redis, ttl=60)
        async with make_client(cache=cache) as client:
            await client.fetch_component("hero")
            await client.fetch_component("hero")
        assert handoff_api.calls("/api/component/hero.json") == 1
        assert fake_redis.ttls["handoff:component:hero"] == 60
        assert fake_redis.closed is True


class TestComponentCache:
    """ComponentCache behavior with and without Redis."""

    async def test_disabled_cache_is_noop(self):
        cache = ComponentCache()
        assert cache.enabled is False
        await cache.set("hero", {"id": "hero"})
        assert await cache.get("hero") is None

    async def test_round_trip(self, fake_redis):
        cache = ComponentCache(fake_redis, ttl=60)
        await cache.set("hero", {"id": "hero"})
        assert await cache.get("hero") == {"id": "hero"}
        assert fake_redis.ttls["handoff:component:hero"] == 60
        assert await cache.get("broken") is None

    async def test_redis_failure_degrades_to_miss(self, failing_redis):
        cache = ComponentCache(failing_redis)
        await cache.set("hero", {"id": "hero"})
        assert await cache.get("hero") is None

    def test_create_cache_without_url(self):
        assert create_cache(redis_url="").enabled is False


class TestValidationService:
    """Fetch-and-validate orchestration."""

    async def test_validate_remote_component(self, make_client):
        async with make_client() as client:
            report = await validate_remote_component(client, "hero")
        assert report.passed is True
        assert report.component == "hero"

    async def test_validate_all_keeps_list_order(self, make_client):
        async with make_client() as client:
            results = await validate_all_components(client, concurrency=2)
        assert [r.id for r in results] == ["hero", "broken"]
        assert results[0].passed is True
        assert results[1].passed is False
        assert [e.attribute for e in results[1].report.errors] == ["code"]

    async def test_fetch_failure_does_not_stop_others(self, make_client, handoff_api):
        handoff_api.failures["/api/component/broken.json"] = [404]
        async with make_client() as client:
            results = await validate_all_components(client)
        assert results[0].passed is True
        assert results[1].report is None
        assert "Not found" in results[1].fetch_error
