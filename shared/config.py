"""
Shared configuration management for the Coolify access client.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing_extensions import Annotated


DEFAULT_CACHE_TTL_SECONDS = 30
DEFAULT_FALLBACK_VERSIONS = ["v4", "v3", "v2", "v1"]


def sanitize_base_url(raw: str) -> str:
    """Reduce a user-supplied API URL to the bare host root.

    Accepts values like ``https://coolify.example.com/api/v4/`` and returns
    ``https://coolify.example.com``.
    """
    raw = raw.strip().rstrip("/")

    api_index = raw.lower().find("/api/")
    if api_index != -1:
        raw = raw[:api_index]

    if raw.lower().endswith("/api"):
        raw = raw[:-len("/api")]

    return raw.rstrip("/")


def normalize_version(version: Optional[str]) -> str:
    """Return ``version`` in ``vN`` form, or an empty string."""
    version = (version or "").strip().lstrip("/")
    if not version:
        return ""
    if not version.startswith("v"):
        version = "v" + version
    return version


class ClientSettings(BaseSettings):
    """Coolify client configuration, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Upstream API
    api_url: str = Field(default="")
    api_token: str = Field(default="")
    api_version: str = Field(default="")
    fallback_versions: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_FALLBACK_VERSIONS))

    # Transport
    http_timeout_seconds: float = Field(default=10.0)

    # Cache
    cache_ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS)

    # Observability
    debug_coolify: bool = Field(default=False)
    log_level: str = Field(default="info")

    @field_validator("api_url", mode="before")
    @classmethod
    def _sanitize_api_url(cls, value: Optional[str]) -> str:
        return sanitize_base_url(value or "")

    @field_validator("api_version", mode="before")
    @classmethod
    def _normalize_api_version(cls, value: Optional[str]) -> str:
        return normalize_version(value)

    @field_validator("fallback_versions", mode="before")
    @classmethod
    def _split_fallback_versions(cls, value):
        # FALLBACK_VERSIONS=v4,v3 in the environment
        if isinstance(value, str):
            value = value.split(",")
        versions = [normalize_version(v) for v in value]
        versions = [v for v in versions if v]
        return versions or list(DEFAULT_FALLBACK_VERSIONS)

    @field_validator("cache_ttl_seconds", mode="before")
    @classmethod
    def _positive_cache_ttl(cls, value) -> int:
        # Unparsable values such as "30s" keep the default
        try:
            value = int(str(value).strip())
        except (TypeError, ValueError):
            return DEFAULT_CACHE_TTL_SECONDS
        return value if value > 0 else DEFAULT_CACHE_TTL_SECONDS

    @field_validator("debug_coolify", mode="before")
    @classmethod
    def _parse_debug_flag(cls, value) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true")
        return bool(value)


def get_settings(**overrides) -> ClientSettings:
    """Get client settings, with keyword overrides taking precedence over env."""
    return ClientSettings(**overrides)
