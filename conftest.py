"""
Shared pytest fixtures for the Coolify access client.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest
from prometheus_client import CollectorRegistry

from coolify_client.app.caching import TTLCache
from coolify_client.app.resources import CoolifyClient
from coolify_client.app.transport import VersionFallbackExecutor
from shared.metrics import MetricsCollector


BASE_URL = "https://coolify.example.com"
TOKEN = "test-token"

Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedUpstream:
    """httpx handler that answers from a route table and records every request.

    Routes are keyed by ``(method, path)`` where path includes the
    ``/api/<version>`` prefix. Unrouted requests get a 404, which is what a
    Coolify server does for a version it does not serve.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Responder] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None, responder: Optional[Responder] = None):
        if responder is None:
            content = body if isinstance(body, (bytes, str)) else json.dumps(body if body is not None else {})
            responder = httpx.Response(status, content=content)
        self.routes[(method.upper(), path)] = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, text='{"message":"Not found."}')
        if callable(responder):
            return responder(request)
        return httpx.Response(responder.status_code, content=responder.content)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def reset(self) -> None:
        self.requests.clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def metrics(registry):
    return MetricsCollector("coolify", registry)


@pytest.fixture
def upstream():
    return ScriptedUpstream()


@pytest.fixture
def http_client(upstream):
    client = httpx.Client(transport=httpx.MockTransport(upstream))
    yield client
    client.close()


@pytest.fixture
def executor(http_client, metrics):
    return VersionFallbackExecutor(
        BASE_URL,
        TOKEN,
        api_version="v4",
        fallback_versions=["v4", "v3", "v2"],
        http_client=http_client,
        metrics=metrics,
    )


@pytest.fixture
def cache(clock):
    return TTLCache(default_ttl=30, clock=clock)


@pytest.fixture
def coolify(executor, cache, metrics):
    return CoolifyClient(executor, cache=cache, cache_ttl=30, metrics=metrics)
