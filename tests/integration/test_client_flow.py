"""
Integration tests for the assembled client against a scripted Coolify server.
"""

import threading

import httpx
import pytest

from coolify_client import build_client
from shared.config import ClientSettings
from shared.errors import NotFound


class LegacyCoolify:
    """A v3-only Coolify install that serves bare arrays and counts calls."""

    def __init__(self, applications):
        self.applications = {app["uuid"]: app for app in applications}
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, request):
        with self._lock:
            self.calls.append((request.method, request.url.path))

        parts = request.url.path.strip("/").split("/")
        if parts[:2] != ["api", "v3"]:
            return httpx.Response(404, json={"message": "Not found."})

        route = parts[2:]
        if route == ["applications"]:
            page = int(request.url.params.get("page", 1))
            per_page = int(request.url.params.get("per_page", 100))
            apps = list(self.applications.values())
            return httpx.Response(200, json=apps[(page - 1) * per_page:page * per_page])

        if len(route) == 2 and route[0] == "applications":
            app = self.applications.get(route[1])
            if app is None:
                return httpx.Response(404, json={"message": "Application not found."})
            if request.method == "DELETE":
                del self.applications[route[1]]
                return httpx.Response(200, json={"message": "Application deletion request queued."})
            return httpx.Response(200, json=app)

        return httpx.Response(404, json={"message": "Not found."})


class TestClientFlow:
    """End-to-end flow through build_client."""

    @pytest.fixture
    def server(self):
        return LegacyCoolify([{"uuid": f"app-{i}", "name": f"app {i}", "status": "running"} for i in range(1, 8)])

    @pytest.fixture
    def client(self, server, registry):
        settings = ClientSettings(_env_file=None, api_url="https://coolify.example.com", api_token="secret")
        http_client = httpx.Client(transport=httpx.MockTransport(server))
        with build_client(settings, http_client=http_client, registry=registry) as client:
            yield client
        http_client.close()

    def test_negotiate_list_and_page(self, client, server):
        """Test version negotiation, caching and derived page numbers together."""
        first = client.list_applications(1, 5)
        last = client.list_applications(2, 5)
        again = client.list_applications(1, 5)

        assert client.api_version == "v3"
        assert (first.current_page, first.total_pages) == (1, 2)
        assert (last.current_page, last.total_pages) == (2, 2)
        assert [a.uuid for a in last.items] == ["app-6", "app-7"]
        assert again.items == first.items
        assert server.calls == [
            ("GET", "/api/v4/applications"),
            ("GET", "/api/v3/applications"),
            ("GET", "/api/v3/applications"),
        ]

    def test_delete_then_read(self, client, server):
        """Test a deleted application is refetched and reported missing."""
        client.get_application("app-2")
        client.list_applications(1, 5)

        client.delete_application("app-2")

        with pytest.raises(NotFound):
            client.get_application("app-2")
        listing = client.list_applications(1, 5)
        assert "app-2" not in [a.uuid for a in listing.items]

    def test_concurrent_readers(self, client, server):
        """Test many threads sharing one client get consistent results."""
        results = []
        errors = []
        start = threading.Barrier(8, timeout=5)

        def worker(n):
            try:
                start.wait()
                for _ in range(10):
                    results.append(client.get_application(f"app-{n % 7 + 1}").uuid)
                    client.list_applications(1, 5)
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert errors == []
        assert len(results) == 80
        assert client.api_version == "v3"
        # Every detail and the list page is fetched from v3 at most a few times.
        v3_detail_calls = [c for c in server.calls if c[1].startswith("/api/v3/applications/")]
        assert len(v3_detail_calls) <= 8
