"""Shared pytest fixtures: well-formed components, fake Redis, mocked Handoff API."""

import copy
import json

import httpx
import pytest
import structlog
from redis.exceptions import ConnectionError as RedisConnectionError
from tenacity import wait_none

from handoff.services.component_cache import ComponentCache
from handoff.services.component_client import ComponentClient

TEXT_FIELD = {
    "type": "text",
    "name": "Title",
    "description": "Headline shown above the fold",
    "default": "Build faster",
    "rules": {"required": True, "content": {"min": 1, "max": 80}},
}

IMAGE_FIELD = {
    "type": "image",
    "name": "Hero Image",
    "description": "Background image",
    "default": {"src": "/img/hero.png", "alt": "Hero"},
    "rules": {"required": True, "dimensions": {"min": {"width": 1200, "height": 600}}},
}

LINK_FIELD = {
    "type": "link",
    "name": "Secondary Link",
    "description": "Text link under the CTA",
    "default": {"url": "/docs", "text": "Read the docs"},
    "rules": {"required": False},
}

BUTTON_FIELD = {
    "type": "button",
    "name": "Call to action",
    "description": "Primary button",
    "default": {"url": "/signup", "label": "Sign up"},
    "rules": {"required": False},
}

GROUP_FIELD = {
    "type": "group",
    "name": "Settings",
    "description": "Layout settings",
    "default": {"theme": "light"},
    "rules": {"required": False},
}

ARRAY_FIELD = {
    "type": "array",
    "name": "Cards",
    "description": "Feature cards",
    "rules": {"required": True, "content": {"min": 1, "max": 3}},
    "items": {
        "type": "group",
        "properties": {
            "heading": {
                "type": "text",
                "name": "Heading",
                "description": "Card heading",
                "default": "Fast",
                "rules": {"required": True, "content": {"min": 1, "max": 40}},
            },
            "icon": {
                "type": "image",
                "name": "Icon",
                "description": "Card icon",
                "default": {"src": "/img/bolt.svg", "alt": "Bolt"},
                "rules": {"required": False, "dimensions": {"min": {"width": 32, "height": 32}}},
            },
        },
    },
}

VALID_COMPONENT = {
    "id": "hero",
    "code": "hero",
    "title": "Hero",
    "tags": ["marketing", "landing"],
    "properties": {
        "title": TEXT_FIELD,
        "image": IMAGE_FIELD,
        "link": LINK_FIELD,
        "cta": BUTTON_FIELD,
        "settings": GROUP_FIELD,
        "cards": ARRAY_FIELD,
    },
}


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo configure_logging() calls so later tests don't log to a closed capture stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def component() -> dict:
    """A fully populated component that validates cleanly. Safe to mutate."""
    return copy.deepcopy(VALID_COMPONENT)


@pytest.fixture
def text_field() -> dict:
    return copy.deepcopy(TEXT_FIELD)


@pytest.fixture
def image_field() -> dict:
    return copy.deepcopy(IMAGE_FIELD)


@pytest.fixture
def array_field() -> dict:
    return copy.deepcopy(ARRAY_FIELD)


# =============================================================================
# Redis
# =============================================================================


class FakeRedis:
    """In-memory stand-in for the redis.asyncio client methods the cache uses."""

    def __init__(self, fail: bool = False):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail = fail
        self.closed = False

    def _check(self):
        if self.fail:
            raise RedisConnectionError("connection refused")

    async def get(self, key):
        self._check()
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self._check()
        self.store[key] = value
        self.ttls[key] = ttl

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def failing_redis() -> FakeRedis:
    return FakeRedis(fail=True)


# =============================================================================
# Handoff API
# =============================================================================


class HandoffAPI:
    """Mock Handoff API routing requests to canned components."""

    def __init__(self, components: dict[str, dict]):
        self.components = components
        self.requests: list[httpx.Request] = []
        self.failures: dict[str, list[int]] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        queued = self.failures.get(path)
        if queued:
            return httpx.Response(queued.pop(0), json={"error": "upstream"})

        if path == "/api/components.json":
            return httpx.Response(200, json=[
                {"id": cid, "title": data["latest"].get("title")}
                for cid, data in self.components.items()
            ])
        if path.startswith("/api/component/") and path.endswith(".json"):
            cid = path[len("/api/component/"):-len(".json")]
            if cid in self.components:
                return httpx.Response(200, content=json.dumps(self.components[cid]))
        return httpx.Response(404, json={"error": "not found"})

    def calls(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)


@pytest.fixture
def handoff_api(component) -> HandoffAPI:
    broken = copy.deepcopy(component)
    del broken["code"]
    broken["title"] = "Broken"
    return HandoffAPI({
        "hero": {"id": "hero", "latest": component},
        "broken": {"id": "broken", "latest": broken},
    })


@pytest.fixture
def make_client(handoff_api):
    """Factory for ComponentClients talking to the mock API without retry waits."""

    def _make(cache: ComponentCache = None, **kwargs) -> ComponentClient:
        return ComponentClient(
            base_url="http://handoff.test",
            token=kwargs.pop("token", ""),
            cache=cache,
            transport=httpx.MockTransport(handoff_api.handler),
            wait=wait_none(),
            **kwargs,
        )

    return _make
