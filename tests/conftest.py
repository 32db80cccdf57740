"""
Pytest fixtures and configuration for storefront gateway tests.

Provides a fake aiohttp session with scripted responses, a controllable
clock for the cache, and sample backend payloads.
"""

import json
from dataclasses import dataclass
from typing import Any
from unittest.mock import AsyncMock

import aiohttp
import pytest
import structlog

from storefront_gateway.cache.memory import TTLCache
from storefront_gateway.client.catalog import CatalogService
from storefront_gateway.client.gateway import GatewayClient
from storefront_gateway.core.models import SessionToken

BASE_URL = "https://api.example.test/api"

# =============================================================================
# Fake HTTP layer
# =============================================================================


class FakeResponse:
    """Stands in for aiohttp.ClientResponse inside ``async with``."""

    def __init__(
        self,
        status: int = 200,
        body: Any = None,
        headers: dict[str, str] | None = None,
        raw: str | None = None,
    ):
        self.status = status
        self._body = body
        self._raw = raw
        self.headers = headers or {}

    async def json(self, content_type: str | None = "application/json") -> Any:
        if self._raw is not None:
            return json.loads(self._raw)
        return self._body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: dict[str, str]
    json: Any

    @property
    def path(self) -> str:
        return self.url[len(BASE_URL):]


class FakeSession:
    """Scripted replacement for aiohttp.ClientSession.

    Responses are queued per (method, path). Each call consumes the next
    queued response; the last one is repeated once the queue runs down.
    Exceptions in the queue are raised instead of returned.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], list[Any]] = {}
        self.calls: list[RecordedCall] = []
        self.closed = False

    def queue(self, method: str, path: str, *responses: Any) -> None:
        self._routes.setdefault((method, path), []).extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        call = RecordedCall(method, url, kwargs.get("headers", {}), kwargs.get("json"))
        self.calls.append(call)

        queued = self._routes.get((method, call.path))
        if not queued:
            raise aiohttp.ClientConnectionError(f"Connection refused: {url}")
        response = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(response, BaseException):
            raise response
        return response

    def calls_to(self, method: str, path: str) -> list[RecordedCall]:
        return [c for c in self.calls if c.method == method and c.path == path]

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep structlog from printing while still allowing capture_logs()."""
    structlog.configure(
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def fake_session() -> FakeSession:
    """Create a fake aiohttp session."""
    return FakeSession()


@pytest.fixture
def clock() -> FakeClock:
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    """Create a 5 minute TTL cache driven by the fake clock."""
    return TTLCache(ttl=300, clock=clock)


@pytest.fixture
def sleep() -> AsyncMock:
    """Create a sleep stand-in that returns immediately."""
    return AsyncMock()


@pytest.fixture
def client(fake_session: FakeSession, cache: TTLCache, sleep: AsyncMock) -> GatewayClient:
    """Create a gateway client wired to the fake session."""
    return GatewayClient(BASE_URL, session=fake_session, cache=cache, sleep=sleep)


@pytest.fixture
def catalog_service(client: GatewayClient) -> CatalogService:
    """Create a catalog service over the fake-backed client."""
    return CatalogService(client)


@pytest.fixture
def admin_token() -> SessionToken:
    """Create a logged-in admin session."""
    return SessionToken(value="tok-123", username="admin")


# =============================================================================
# Sample Payload Fixtures
# =============================================================================


@pytest.fixture
def sample_products() -> list[dict[str, Any]]:
    """Create five sample product records."""
    return [
        {"_id": "p1", "name": "Trail Runner", "brand": "Acme", "category": "shoes",
         "price": 89.99, "featured": True},
        {"_id": "p2", "name": "Road Racer", "brand": "Acme", "category": "shoes",
         "price": 120.0, "featured": False},
        {"_id": "p3", "name": "Rain Shell", "brand": "Northwind", "category": "jackets",
         "price": 150.0, "featured": True},
        {"_id": "p4", "name": "Wool Beanie", "brand": "Northwind", "category": "hats",
         "price": 25.5},
        {"_id": "p5", "name": "Day Pack", "brand": "Summit", "category": "bags",
         "price": 60.0, "featured": True},
    ]


@pytest.fixture
def sample_categories() -> list[dict[str, Any]]:
    """Create sample category records."""
    return [
        {"_id": "c1", "name": "shoes", "description": "Footwear"},
        {"_id": "c2", "name": "jackets", "description": "Outerwear"},
    ]


@pytest.fixture
def sample_brands() -> list[dict[str, Any]]:
    """Create sample brand records."""
    return [
        {"_id": "b1", "name": "Acme"},
        {"id": "b2", "name": "Northwind"},
        {"_id": "b3", "name": "Summit"},
    ]
