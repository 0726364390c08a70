"""Core interfaces (Protocol classes) for tagpurge."""

from tagpurge.core.interfaces.backend_client import IInvalidationClient
from tagpurge.core.interfaces.local_cache import ILocalCache, ILocalCacheRegistry
from tagpurge.core.interfaces.origin_tag_cache import IOriginTagCache

__all__ = [
    "ILocalCache",
    "ILocalCacheRegistry",
    "IOriginTagCache",
    "IInvalidationClient",
]
