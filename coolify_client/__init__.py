"""
Coolify access client.

Import the pieces most callers need from here; see ``coolify_client.app``
for the package layout.
"""

from .app.factory import build_client
from .app.pagination import ListResult, Page, Pagination, decode_page, derive_page
from .app.resources import CoolifyClient
from .app.caching import TTLCache
from .app.transport import VersionFallbackExecutor

__all__ = [
    "build_client",
    "CoolifyClient",
    "ListResult",
    "Page",
    "Pagination",
    "TTLCache",
    "VersionFallbackExecutor",
    "decode_page",
    "derive_page",
]
