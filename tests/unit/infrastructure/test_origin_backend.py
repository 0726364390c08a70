"""Tests for InMemoryTagCache."""

import asyncio

import pytest

from tagpurge.infrastructure.backends.origin import InMemoryTagCache


class TestInMemoryTagCache:
    """Tests for InMemoryTagCache."""

    @pytest.fixture
    def cache(self) -> InMemoryTagCache:
        return InMemoryTagCache(maxsize=100, default_ttl=300.0)

    async def test_set_and_get(self, cache: InMemoryTagCache) -> None:
        await cache.set("GET /api/places", {"data": [1]}, tags=["places"])
        assert await cache.get("GET /api/places") == {"data": [1]}

    async def test_expire_tag_drops_tagged_entries(self, cache: InMemoryTagCache) -> None:
        """Test that every entry under the tag is dropped."""
        await cache.set("GET /api/places", {"data": [1]}, tags=["places"])
        await cache.set("GET /api/places/1", {"id": 1}, tags=["places"])
        await cache.set("GET /api/cities", {"data": [2]}, tags=["cities"])

        await cache.expire_tag("places")

        assert await cache.get("GET /api/places") is None
        assert await cache.get("GET /api/places/1") is None
        assert await cache.get("GET /api/cities") == {"data": [2]}
        assert len(cache) == 1

    async def test_entry_with_several_tags(self, cache: InMemoryTagCache) -> None:
        await cache.set("GET /api/regions/options", [], tags=["regions", "regions:options"])

        await cache.expire_tag("regions:options")

        assert await cache.get("GET /api/regions/options") is None

    async def test_expire_unknown_tag(self, cache: InMemoryTagCache) -> None:
        """Expiring a tag with no entries still records the time."""
        assert cache.expired_at("categories") is None

        await cache.expire_tag("categories")

        assert cache.expired_at("categories") is not None

    async def test_expired_at_advances(self, cache: InMemoryTagCache) -> None:
        await cache.expire_tag("places")
        first = cache.expired_at("places")
        await cache.expire_tag("places")

        assert cache.expired_at("places") >= first

    async def test_evicted_keys_leave_the_index(self) -> None:
        """Keys evicted for size are pruned from the tag index on write."""
        cache = InMemoryTagCache(maxsize=2)
        for i in range(5):
            await cache.set(f"GET /api/places/{i}", i, tags=["places"])

        assert len(cache.indexed_keys("places")) <= 2
        assert "GET /api/places/4" in cache.indexed_keys("places")

    async def test_expired_keys_leave_the_index(self) -> None:
        cache = InMemoryTagCache(default_ttl=0.01)
        await cache.set("GET /api/places", 1, tags=["places"])
        await asyncio.sleep(0.05)

        await cache.set("GET /api/places/1", 2, tags=["places"])

        assert cache.indexed_keys("places") == frozenset({"GET /api/places/1"})
