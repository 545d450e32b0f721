"""
Client caching package.

Holds decoded upstream responses for a short TTL so repeated menu
navigation does not hit the API. Mutating calls invalidate explicitly;
nothing here ever refreshes an entry on its own.
"""

from .ttl_cache import TTLCache, ReadWriteLock, DEFAULT_TTL_SECONDS

__all__ = ["TTLCache", "ReadWriteLock", "DEFAULT_TTL_SECONDS"]
