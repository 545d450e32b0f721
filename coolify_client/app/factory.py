"""
Client construction from settings.
"""

from typing import Optional

import httpx
from prometheus_client import CollectorRegistry

from shared.config import ClientSettings, get_settings
from shared.errors import ConfigurationError
from shared.logging import get_logger
from shared.metrics import get_metrics_collector
from .caching import TTLCache
from .resources import CoolifyClient
from .transport import VersionFallbackExecutor


def build_client(
    settings: Optional[ClientSettings] = None,
    *,
    http_client: Optional[httpx.Client] = None,
    registry: Optional[CollectorRegistry] = None,
) -> CoolifyClient:
    """Wire cache, transport and metrics into a ready ``CoolifyClient``.

    Build one per process and hand it to every handler; the client holds no
    global state of its own.

    Client metrics are registered on ``registry``. Pass the registry the host
    process already exposes (``prometheus_client.REGISTRY`` for a default
    ``start_http_server``) to have them scraped; without one they go to a
    private registry and are only readable through ``client.metrics``.
    """
    settings = settings or get_settings()
    if not settings.api_url or not settings.api_token:
        raise ConfigurationError(details={
            "api_url_set": bool(settings.api_url),
            "api_token_set": bool(settings.api_token),
        })

    metrics = get_metrics_collector("coolify", registry)
    executor = VersionFallbackExecutor(
        settings.api_url,
        settings.api_token,
        api_version=settings.api_version,
        fallback_versions=settings.fallback_versions,
        http_client=http_client,
        timeout=settings.http_timeout_seconds,
        debug=settings.debug_coolify,
        metrics=metrics,
    )
    cache = TTLCache(default_ttl=settings.cache_ttl_seconds)

    get_logger("coolify.factory").info(
        "Coolify client configured",
        api_url=settings.api_url,
        api_version=executor.api_version,
        fallback_versions=list(settings.fallback_versions),
        cache_ttl_seconds=settings.cache_ttl_seconds,
        debug=settings.debug_coolify,
    )
    return CoolifyClient(executor, cache=cache, cache_ttl=settings.cache_ttl_seconds, metrics=metrics)
