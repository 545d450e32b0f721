"""
Resource client for the Coolify API.

Each resource family gets thin list/get/action methods built from the same
pieces: a namespaced cache key, the version-fallback executor, and the
pagination reconciler. Reads are served from cache when possible; mutations
always go upstream and, once the upstream call succeeds, drop the affected
detail entry and list prefix.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from shared.errors import DecodeFailure
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..caching import TTLCache
from ..pagination import ListResult, Page, backfill_per_page, decode_page
from ..transport import VersionFallbackExecutor
from .models import (
    Application,
    ApplicationDetail,
    ApplicationLogs,
    Database,
    DeleteResponse,
    Deployment,
    Environment,
    EnvironmentVariable,
    MessageResponse,
    StartDeploymentResponse,
    StopResponse,
)


M = TypeVar("M", bound=BaseModel)

CachedValue = Union[Page[Any], ApplicationDetail, Deployment, Environment, Database]

APPS_LIST_PREFIX = "apps:list:"
APPS_DETAIL_PREFIX = "apps:detail:"
DEPLOYMENTS_PREFIX = "deployments:"
DEPLOYMENTS_LIST_PREFIX = "deployments:list:"
DEPLOYMENTS_APP_PREFIX = "deployments:app:"
DEPLOYMENTS_DETAIL_PREFIX = "deployments:detail:"
ENVIRONMENTS_LIST_PREFIX = "environments:list:"
ENVIRONMENTS_DETAIL_PREFIX = "environments:detail:"
DATABASES_LIST_PREFIX = "databases:list:"
DATABASES_DETAIL_PREFIX = "databases:detail:"


def page_query(page: int, per_page: int) -> Dict[str, str]:
    query: Dict[str, str] = {}
    if page > 0:
        query["page"] = str(page)
    if per_page > 0:
        query["per_page"] = str(per_page)
    return query


def decode_model(body: bytes, model: Type[M], allow_empty: bool = False) -> M:
    """Decode a single-object response body into ``model``."""
    if allow_empty and not body.strip():
        return model()
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeFailure(
            message=f"Response is not a valid {model.__name__}",
            details={"error": str(exc)},
        ) from exc


class CoolifyClient:
    """Cached, version-tolerant access to Coolify resources."""

    def __init__(
        self,
        executor: VersionFallbackExecutor,
        cache: Optional[TTLCache[CachedValue]] = None,
        cache_ttl: Optional[float] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.executor = executor
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.metrics = metrics or executor.metrics
        self.logger = get_logger("coolify.client")

    # Cache plumbing

    def _get_cached(self, key: str, expected: type) -> Optional[Any]:
        if self.cache is None:
            return None
        value, found = self.cache.get(key)
        hit = found and isinstance(value, expected)
        self.metrics.record_cache_lookup(hit)
        return value if hit else None

    def _cache_result(self, key: str, value: CachedValue) -> None:
        if self.cache is None:
            return
        self.cache.set(key, value, self.cache_ttl)

    def _invalidate(self, detail_key: Optional[str], *prefixes: str) -> None:
        if self.cache is None:
            return
        for prefix in prefixes:
            self.cache.delete_prefix(prefix)
            self.metrics.record_invalidation(prefix)
        if detail_key:
            self.cache.delete(detail_key)

    # Generic building blocks

    def _list_page(self, path: str, item_type: Type[M], cache_key: str, page: int, per_page: int) -> Page[M]:
        page_type = Page[item_type]
        cached = self._get_cached(cache_key, page_type)
        if cached is not None:
            return cached

        body = self.executor.request("GET", path, params=page_query(page, per_page))
        result = backfill_per_page(decode_page(body, item_type), per_page)

        self._cache_result(cache_key, result)
        return result

    def _list(self, path: str, item_type: Type[M], cache_key: str, page: int, per_page: int) -> ListResult[M]:
        result = self._list_page(path, item_type, cache_key, page, per_page)
        return ListResult.from_page(result, per_page, page)

    def _get_detail(self, path: str, model: Type[M], cache_key: str) -> M:
        cached = self._get_cached(cache_key, model)
        if cached is not None:
            return cached

        body = self.executor.request("GET", path)
        result = decode_model(body, model)

        self._cache_result(cache_key, result)
        return result

    # Applications

    def _invalidate_application(self, uuid: str, *extra_prefixes: str) -> None:
        self._invalidate(APPS_DETAIL_PREFIX + uuid if uuid else None, APPS_LIST_PREFIX, *extra_prefixes)

    def list_applications(self, page: int, per_page: int) -> ListResult[Application]:
        cache_key = f"{APPS_LIST_PREFIX}{page}:{per_page}"
        return self._list("/applications", Application, cache_key, page, per_page)

    def get_application(self, uuid: str) -> ApplicationDetail:
        return self._get_detail(f"/applications/{uuid}", ApplicationDetail, APPS_DETAIL_PREFIX + uuid)

    def delete_application(self, uuid: str) -> DeleteResponse:
        body = self.executor.request("DELETE", f"/applications/{uuid}")
        self._invalidate_application(uuid, f"{DEPLOYMENTS_APP_PREFIX}{uuid}:")
        self.logger.info("Application deleted", uuid=uuid)
        return decode_model(body, DeleteResponse, allow_empty=True)

    def start_application(self, uuid: str, force: bool = False, instant_deploy: bool = False) -> StartDeploymentResponse:
        """Trigger a deployment. ``force`` rebuilds without cache."""
        query = {}
        if force:
            query["force"] = "true"
        if instant_deploy:
            query["instant_deploy"] = "true"

        body = self.executor.request("GET", f"/applications/{uuid}/start", params=query)
        # A deployment was queued, so status and deployment listings are stale.
        self._invalidate_application(uuid, DEPLOYMENTS_PREFIX)
        return decode_model(body, StartDeploymentResponse, allow_empty=True)

    def stop_application(self, uuid: str) -> StopResponse:
        body = self.executor.request("GET", f"/applications/{uuid}/stop")
        self._invalidate_application(uuid)
        return decode_model(body, StopResponse, allow_empty=True)

    def restart_application(self, uuid: str) -> StartDeploymentResponse:
        body = self.executor.request("GET", f"/applications/{uuid}/restart")
        self._invalidate_application(uuid, DEPLOYMENTS_PREFIX)
        return decode_model(body, StartDeploymentResponse, allow_empty=True)

    def get_application_logs(self, uuid: str, lines: int = -1) -> str:
        """Fetch application logs; ``lines=-1`` asks for everything."""
        body = self.executor.request("GET", f"/applications/{uuid}/logs", params={"lines": str(lines)})
        return decode_model(body, ApplicationLogs).logs

    def get_application_envs(self, uuid: str) -> List[EnvironmentVariable]:
        body = self.executor.request("GET", f"/applications/{uuid}/envs")
        return decode_page(body, EnvironmentVariable).results()

    # Deployments

    def list_deployments(self, page: int, per_page: int) -> ListResult[Deployment]:
        cache_key = f"{DEPLOYMENTS_LIST_PREFIX}{page}:{per_page}"
        return self._list("/deployments", Deployment, cache_key, page, per_page)

    def list_application_deployments(self, uuid: str, page: int, per_page: int) -> ListResult[Deployment]:
        cache_key = f"{DEPLOYMENTS_APP_PREFIX}{uuid}:{page}:{per_page}"
        return self._list(f"/applications/{uuid}/deployments", Deployment, cache_key, page, per_page)

    def get_deployment(self, uuid: str) -> Deployment:
        return self._get_detail(f"/deployments/{uuid}", Deployment, DEPLOYMENTS_DETAIL_PREFIX + uuid)

    # Environments

    def list_environments(self, page: int, per_page: int) -> ListResult[Environment]:
        cache_key = f"{ENVIRONMENTS_LIST_PREFIX}{page}:{per_page}"
        return self._list("/environments", Environment, cache_key, page, per_page)

    def get_environment(self, uuid: str) -> Environment:
        return self._get_detail(f"/environments/{uuid}", Environment, ENVIRONMENTS_DETAIL_PREFIX + uuid)

    # Databases

    def _invalidate_database(self, uuid: str) -> None:
        self._invalidate(DATABASES_DETAIL_PREFIX + uuid if uuid else None, DATABASES_LIST_PREFIX)

    def list_databases(self, page: int, per_page: int) -> ListResult[Database]:
        cache_key = f"{DATABASES_LIST_PREFIX}{page}:{per_page}"
        return self._list("/databases", Database, cache_key, page, per_page)

    def get_database(self, uuid: str) -> Database:
        return self._get_detail(f"/databases/{uuid}", Database, DATABASES_DETAIL_PREFIX + uuid)

    def start_database(self, uuid: str) -> MessageResponse:
        body = self.executor.request("GET", f"/databases/{uuid}/start")
        self._invalidate_database(uuid)
        return decode_model(body, MessageResponse, allow_empty=True)

    def stop_database(self, uuid: str) -> MessageResponse:
        body = self.executor.request("GET", f"/databases/{uuid}/stop")
        self._invalidate_database(uuid)
        return decode_model(body, MessageResponse, allow_empty=True)

    def restart_database(self, uuid: str) -> MessageResponse:
        body = self.executor.request("GET", f"/databases/{uuid}/restart")
        self._invalidate_database(uuid)
        return decode_model(body, MessageResponse, allow_empty=True)

    def delete_database(self, uuid: str) -> DeleteResponse:
        body = self.executor.request("DELETE", f"/databases/{uuid}")
        self._invalidate_database(uuid)
        self.logger.info("Database deleted", uuid=uuid)
        return decode_model(body, DeleteResponse, allow_empty=True)

    # Lifecycle

    @property
    def api_version(self) -> str:
        return self.executor.api_version

    def close(self) -> None:
        self.executor.close()

    def __enter__(self) -> "CoolifyClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
