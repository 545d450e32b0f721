"""
Shared metrics configuration for the Coolify access client.
"""

from prometheus_client import Counter, Histogram, CollectorRegistry
from typing import Dict, Any, Optional


class MetricsCollector:
    """Centralized metrics collector for the client.

    Every metric is registered on ``registry``; pass a fresh
    ``CollectorRegistry`` per client in tests to avoid duplicate
    registration against the process-wide default registry.
    """

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up client metrics."""
        self._metrics["coolify_requests_total"] = Counter(
            "coolify_requests_total",
            "Total upstream API requests",
            ["method", "version", "outcome"],
            registry=self.registry
        )

        self._metrics["coolify_request_duration_seconds"] = Histogram(
            "coolify_request_duration_seconds",
            "Upstream API request duration in seconds",
            ["method"],
            registry=self.registry
        )

        self._metrics["coolify_version_fallbacks_total"] = Counter(
            "coolify_version_fallbacks_total",
            "Requests that fell through to the next API version",
            ["from_version"],
            registry=self.registry
        )

        self._metrics["coolify_cache_lookups_total"] = Counter(
            "coolify_cache_lookups_total",
            "Response cache lookups",
            ["result"],
            registry=self.registry
        )

        self._metrics["coolify_cache_invalidations_total"] = Counter(
            "coolify_cache_invalidations_total",
            "Cache prefix invalidations after mutations",
            ["prefix"],
            registry=self.registry
        )

    def record_request(self, method: str, version: str, outcome: str, duration: float):
        """Record one upstream request attempt."""
        self._metrics["coolify_requests_total"].labels(
            method=method,
            version=version,
            outcome=outcome
        ).inc()

        self._metrics["coolify_request_duration_seconds"].labels(method=method).observe(duration)

    def record_fallback(self, from_version: str):
        """Record a not-found response that moved on to the next version."""
        self._metrics["coolify_version_fallbacks_total"].labels(from_version=from_version).inc()

    def record_cache_lookup(self, hit: bool):
        """Record a cache hit or miss."""
        self._metrics["coolify_cache_lookups_total"].labels(result="hit" if hit else "miss").inc()

    def record_invalidation(self, prefix: str):
        """Record a prefix invalidation."""
        self._metrics["coolify_cache_invalidations_total"].labels(prefix=prefix).inc()

    def sample(self, metric_name: str, **labels) -> float:
        """Read the current value of a counter sample (0.0 when unset)."""
        value = self.registry.get_sample_value(metric_name, labels)
        return value or 0.0


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
