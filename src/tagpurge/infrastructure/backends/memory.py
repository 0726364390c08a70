"""In-memory local cache implementation."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from cachetools import TTLCache  # type: ignore[import-untyped]

from tagpurge.core.interfaces.local_cache import ILocalCache

logger = logging.getLogger(__name__)


class InMemoryLocalCache:
    """Worker-local cache for one content domain.

    Backed by a cachetools TTLCache, so entries age out on their own
    and the cache never grows past ``maxsize``. Revalidation drops all
    entries at once through :meth:`clear`.
    """

    def __init__(
        self,
        name: str,
        maxsize: int = 1000,
        default_ttl: float = 300.0,
    ) -> None:
        """Initialize the cache.

        Args:
            name: Domain name, used in logs.
            maxsize: Maximum number of items in the cache.
            default_ttl: TTL in seconds for items.
        """
        self._name = name
        self._maxsize = maxsize
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=maxsize, ttl=default_ttl)

    @property
    def name(self) -> str:
        return self._name

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(self, key: str, default: Any = None) -> Any:
        return self._cache.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._cache[key] = value

    def delete(self, key: str) -> bool:
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    def clear(self) -> None:
        """Drop all entries. Clearing an empty cache is a no-op."""
        dropped = len(self._cache)
        self._cache.clear()
        logger.debug("Cleared local cache %r (%d entries)", self._name, dropped)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)


class LocalCacheRegistry:
    """Process-lifetime store of named local caches.

    Created once at startup and passed to the orchestrator. Several names
    may point at the same cache object.
    """

    def __init__(self, caches: dict[str, ILocalCache] | None = None) -> None:
        self._caches: dict[str, ILocalCache] = dict(caches or {})

    @classmethod
    def with_defaults(
        cls,
        names: Iterable[str],
        maxsize: int = 1000,
        default_ttl: float = 300.0,
    ) -> "LocalCacheRegistry":
        """Create a registry with one InMemoryLocalCache per name."""
        return cls(
            {
                name: InMemoryLocalCache(name, maxsize=maxsize, default_ttl=default_ttl)
                for name in names
            }
        )

    def register(self, name: str, cache: ILocalCache) -> None:
        self._caches[name] = cache

    def get(self, name: str) -> ILocalCache | None:
        return self._caches.get(name)

    def __getitem__(self, name: str) -> ILocalCache:
        return self._caches[name]

    def __contains__(self, name: object) -> bool:
        return name in self._caches

    def __iter__(self) -> Iterator[str]:
        return iter(self._caches)

    def __len__(self) -> int:
        return len(self._caches)

    def close(self) -> None:
        """Clear every cache and forget them. Called at shutdown."""
        for name, cache in self._caches.items():
            try:
                cache.clear()
            except Exception:
                logger.exception("Failed to clear local cache %r during shutdown", name)
        self._caches.clear()
