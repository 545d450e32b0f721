"""
Version-fallback request executor for the Coolify API.
"""

from typing import Any, Dict, List, Optional, Sequence
import threading
import time

import httpx

from shared.config import DEFAULT_FALLBACK_VERSIONS, normalize_version
from shared.errors import (
    BadRequest,
    NotFound,
    TransportFailure,
    Unauthorized,
    UnexpectedStatus,
)
from shared.logging import get_logger
from shared.metrics import MetricsCollector


DEFAULT_API_VERSION = "v4"
DEFAULT_TIMEOUT_SECONDS = 15.0


class VersionFallbackExecutor:
    """Sends requests to ``/api/<version>/...`` across candidate versions.

    The primary version is tried first, then each fallback in order. A 404 is
    read as "this version does not serve the route" and moves on to the next
    candidate; any other failure stops immediately. The first version that
    answers with a 2xx is pinned as the new primary, so after one probe
    later calls go straight to it.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        api_version: str = "",
        fallback_versions: Optional[Sequence[str]] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        debug: bool = False,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.fallback_versions = tuple(DEFAULT_FALLBACK_VERSIONS if fallback_versions is None else fallback_versions)
        self.debug = debug
        self.metrics = metrics or MetricsCollector("coolify")
        self.logger = get_logger("coolify.transport")

        self._api_version = normalize_version(api_version) or DEFAULT_API_VERSION
        self._version_lock = threading.Lock()

        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    @property
    def api_version(self) -> str:
        """Currently pinned primary version."""
        with self._version_lock:
            return self._api_version

    def pin_version(self, version: str) -> None:
        """Make ``version`` the primary; only called after it succeeded."""
        with self._version_lock:
            previous = self._api_version
            self._api_version = version

        if previous != version:
            self.logger.info("Pinned API version", previous=previous, version=version)

    def candidate_versions(self) -> List[str]:
        """Primary version followed by the fallbacks, normalized and de-duplicated."""
        seen = set()
        versions: List[str] = []
        for raw in (self.api_version, *self.fallback_versions):
            version = normalize_version(raw)
            if not version or version in seen:
                continue
            seen.add(version)
            versions.append(version)
        return versions

    def build_url(self, version: str, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}/api/{version}{path}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> bytes:
        """Execute one logical call and return the raw response body.

        Raises the last candidate's ``NotFound`` only when every candidate
        answered 404; any other error is raised from the version that
        produced it.
        """
        versions = self.candidate_versions()

        for idx, version in enumerate(versions):
            url = self.build_url(version, path)
            try:
                body = self._send(method, url, version, params, json)
            except NotFound:
                if idx == len(versions) - 1:
                    raise
                self.metrics.record_fallback(version)
                if self.debug:
                    self.logger.info(
                        "Received 404, trying next API version",
                        version=version,
                        next_version=versions[idx + 1],
                        path=path,
                    )
                continue

            self.pin_version(version)
            return body

        raise NotFound(details={"path": path, "reason": "no API versions configured"})

    def _send(
        self,
        method: str,
        url: str,
        version: str,
        params: Optional[Dict[str, Any]],
        json: Optional[Any],
    ) -> bytes:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }
        if self.debug:
            self.logger.info("Coolify request", method=method, url=url, params=params)

        start = time.perf_counter()
        try:
            response = self.http_client.request(method, url, params=params or None, json=json, headers=headers)
        except httpx.HTTPError as exc:
            self.metrics.record_request(method, version, "transport_error", time.perf_counter() - start)
            self.logger.error("Coolify request failed", method=method, url=url, error=str(exc))
            raise TransportFailure(
                message=f"{method} {url}: {exc}",
                details={"error_type": type(exc).__name__},
            ) from exc

        duration = time.perf_counter() - start
        status = response.status_code

        if status == 401:
            self.metrics.record_request(method, version, "unauthorized", duration)
            raise Unauthorized()
        if status == 400:
            self.metrics.record_request(method, version, "bad_request", duration)
            raise BadRequest()
        if status == 404:
            self.metrics.record_request(method, version, "not_found", duration)
            raise NotFound(body=response.text.strip(), details={"version": version})
        if status >= 300:
            self.metrics.record_request(method, version, "unexpected_status", duration)
            body = response.text.strip()
            self.logger.error(
                "Coolify unexpected response",
                method=method,
                url=url,
                status_code=status,
                body=body,
            )
            raise UnexpectedStatus(status_code=status, body=body, reason=response.reason_phrase)

        self.metrics.record_request(method, version, "ok", duration)
        if self.debug:
            self.logger.info("Coolify response", method=method, url=url, status_code=status)
        return response.content

    def close(self) -> None:
        """Close the underlying HTTP client if this executor created it."""
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> "VersionFallbackExecutor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
