"""
Transport package.

Wraps httpx with bearer-token auth, status-to-error mapping and API
version fallback. Only 404 is retried, and only against the next version.
"""

from .executor import VersionFallbackExecutor, DEFAULT_API_VERSION

__all__ = ["VersionFallbackExecutor", "DEFAULT_API_VERSION"]
