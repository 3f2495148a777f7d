"""Pytest configuration and fixtures for tests.

Provides a controllable clock, an in-memory fake of the FreeAgent API wired
in by patching ``httpx.AsyncClient.request``, and a fake ``redis.asyncio``
client.
"""

import fnmatch
from typing import Any, Dict, List, Optional, Tuple, Union
from unittest.mock import patch
from urllib.parse import urlsplit

import httpx
import pytest
import pytest_asyncio

from freeagent.cache import InMemoryCacheStore
from freeagent.services import FreeAgentClient


BASE_URL = "https://api.sandbox.freeagent.com"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


RouteResponse = Union[httpx.Response, Exception]


class FakeFreeAgentAPI:
    """Stand-in for the FreeAgent API.

    Routes map ``(method, path)`` to a response (or an exception to raise).
    Unrouted requests get a 404. Every request is logged.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], RouteResponse] = {}
        self.calls: List[Dict[str, Any]] = []

    def add(self, method: str, path: str, response: RouteResponse) -> None:
        self.routes[(method, path)] = response

    def json(self, method: str, path: str, body: Any, status_code: int = 200) -> None:
        self.add(method, path, httpx.Response(status_code, json=body))

    def count(self, method: str, path: str) -> int:
        return sum(1 for c in self.calls if c["method"] == method and c["path"] == path)

    def last_call(self, method: str, path: str) -> Optional[Dict[str, Any]]:
        matching = [c for c in self.calls if c["method"] == method and c["path"] == path]
        return matching[-1] if matching else None

    async def __call__(self, *args, **kwargs) -> httpx.Response:
        method = kwargs["method"]
        path = urlsplit(kwargs["url"]).path.lstrip("/")
        self.calls.append({
            "method": method,
            "path": path,
            "url": kwargs["url"],
            "params": kwargs.get("params"),
            "json": kwargs.get("json"),
        })

        response = self.routes.get((method, path))
        if response is None:
            return httpx.Response(404, json={"errors": {"error": {"message": "Not found"}}})
        if isinstance(response, Exception):
            raise response
        return response


class FakeRedis:
    """Mock Redis client for testing the Redis cache store."""

    def __init__(self):
        self._store: Dict[str, bytes] = {}
        self.ttls: Dict[str, int] = {}
        self._call_log: List[Dict[str, Any]] = []

    async def get(self, name: str) -> Optional[bytes]:
        self._call_log.append({"method": "get", "key": name})
        return self._store.get(name)

    async def set(self, name: str, value: bytes, px: Optional[int] = None) -> None:
        self._call_log.append({"method": "set", "key": name, "px": px})
        self._store[name] = value
        if px is not None:
            self.ttls[name] = px

    async def delete(self, *names: str) -> int:
        deleted = 0
        for name in names:
            self._call_log.append({"method": "delete", "key": name})
            if self._store.pop(name, None) is not None:
                deleted += 1
        return deleted

    async def scan_iter(self, match: str = "*"):
        for key in list(self._store):
            if fnmatch.fnmatch(key, match):
                yield key

    def expire_all(self) -> None:
        """Simulate every key reaching its TTL."""
        self._store.clear()

    def get_call_count(self, method: str) -> int:
        return sum(1 for call in self._call_log if call["method"] == method)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    """A fresh in-memory cache store driven by the fake clock."""
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def fake_api():
    """Patch httpx so every request is answered by a FakeFreeAgentAPI."""
    api = FakeFreeAgentAPI()
    with patch.object(httpx.AsyncClient, "request", side_effect=api.__call__):
        yield api


@pytest_asyncio.fixture
async def client(store: InMemoryCacheStore, fake_api: FakeFreeAgentAPI):
    """A FreeAgentClient talking to the fake API through the fake-clock store."""
    client = FreeAgentClient(
        access_token="test-access-token",
        base_url=BASE_URL,
        cache=store,
        cache_ttl=300,
    )
    yield client
    await client.close()
