"""Redis origin tag cache implementation."""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Optional

import redis.asyncio as redis


class RedisTagCache:
    """Tag-scoped response cache shared by every worker process.

    Layout, under ``key_prefix``:
        ``entry:<key>``    the cached response bytes
        ``tag:<tag>``      set of entry keys stored under the tag
        ``expired:<tag>``  ISO timestamp of the last expiry

    Tag sets carry no TTL. An entry may outlive any other entry under the
    same tag, so its index must live until the tag is expired, which
    drops the whole set.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "tagpurge",
        default_ttl: Optional[int] = 300,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis tag cache.

        Args:
            redis_url: Redis connection URL.
            key_prefix: Prefix for all keys.
            default_ttl: Default TTL in seconds.
            client: Optional pre-built client, used instead of ``redis_url``.
        """
        self._redis: redis.Redis = client if client is not None else redis.from_url(redis_url)  # type: ignore
        self._key_prefix = key_prefix
        self._default_ttl = default_ttl

    async def get(self, key: str) -> Optional[bytes]:
        """Retrieve a cached response by key."""
        return await self._redis.get(self._entry_key(key))

    async def set(
        self,
        key: str,
        value: bytes,
        tags: Iterable[str] = (),
        ttl: Optional[timedelta] = None,
    ) -> None:
        """Store a response and index it by tags.

        Args:
            key: The cache key.
            value: The response as bytes.
            tags: Tags the response belongs to.
            ttl: Optional time-to-live. If None, uses default.
        """
        seconds = int(ttl.total_seconds()) if ttl is not None else self._default_ttl
        entry_key = self._entry_key(key)

        if seconds is not None:
            await self._redis.setex(entry_key, seconds, value)
        else:
            await self._redis.set(entry_key, value)

        for tag in tags:
            await self._redis.sadd(self._tag_key(tag), entry_key)

    async def expire_tag(self, tag: str) -> None:
        """Drop every response stored under ``tag`` and record the expiry.

        The tag set is read and dropped in one transaction, so an entry
        indexed concurrently lands in a fresh set instead of being lost.
        The timestamp write happens after the entries are gone, so a
        failure there leaves the tag already expired.
        """
        tag_key = self._tag_key(tag)
        async with self._redis.pipeline(transaction=True) as pipe:
            await pipe.smembers(tag_key)
            await pipe.delete(tag_key)
            members, _ = await pipe.execute()
        keys = list(members)

        for start in range(0, len(keys), 100):
            await self._redis.delete(*keys[start:start + 100])

        await self._redis.set(
            self._expired_key(tag),
            datetime.now(timezone.utc).isoformat(),
        )

    async def expired_at(self, tag: str) -> Optional[datetime]:
        """When ``tag`` was last expired, if ever."""
        raw = await self._redis.get(self._expired_key(tag))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        return datetime.fromisoformat(raw)

    def _entry_key(self, key: str) -> str:
        return f"{self._key_prefix}:entry:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self._key_prefix}:tag:{tag}"

    def _expired_key(self, tag: str) -> str:
        return f"{self._key_prefix}:expired:{tag}"

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisTagCache":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
