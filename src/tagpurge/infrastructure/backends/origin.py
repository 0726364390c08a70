"""In-memory origin tag cache implementation."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from cachetools import TTLCache  # type: ignore[import-untyped]


class InMemoryTagCache:
    """Tag-scoped response cache for single-process deployments.

    Responses are stored with tags; expiring a tag drops every response
    stored under it and records when that happened. For multi-process
    deployments use ``tagpurge_redis.RedisTagCache``.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        default_ttl: float = 300.0,
    ) -> None:
        """Initialize the tag cache.

        Args:
            maxsize: Maximum number of cached responses.
            default_ttl: TTL in seconds for cached responses.
        """
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=maxsize, ttl=default_ttl)
        # Track tags separately for invalidation
        self._tags: dict[str, set[str]] = {}
        self._expired_at: dict[str, datetime] = {}

    async def get(self, key: str) -> Any | None:
        return self._cache.get(key)

    async def set(self, key: str, value: Any, tags: Iterable[str] = ()) -> None:
        """Store a response under ``key`` and index it by ``tags``.

        Keys the cache has already evicted (TTL or ``maxsize``) are
        dropped from each touched tag index.
        """
        self._cache[key] = value
        for tag in tags:
            index = self._tags.setdefault(tag, set())
            index.add(key)
            index.intersection_update([k for k in index if k in self._cache])

    def indexed_keys(self, tag: str) -> frozenset[str]:
        """Keys currently indexed under ``tag``."""
        return frozenset(self._tags.get(tag, ()))

    async def expire_tag(self, tag: str) -> None:
        """Drop every response stored under ``tag``."""
        for key in self._tags.pop(tag, set()):
            self._cache.pop(key, None)
        self._expired_at[tag] = datetime.now(timezone.utc)

    def expired_at(self, tag: str) -> datetime | None:
        """When ``tag`` was last expired, if ever."""
        return self._expired_at.get(tag)

    def __len__(self) -> int:
        return len(self._cache)
