"""Tests for InMemoryLocalCache and LocalCacheRegistry."""

import logging
from unittest.mock import MagicMock

import pytest

from tagpurge.infrastructure.backends.memory import InMemoryLocalCache, LocalCacheRegistry


class TestInMemoryLocalCache:
    """Tests for InMemoryLocalCache."""

    @pytest.fixture
    def cache(self) -> InMemoryLocalCache:
        """Create a cache for testing."""
        return InMemoryLocalCache("places", maxsize=100, default_ttl=300.0)

    def test_set_and_get(self, cache: InMemoryLocalCache) -> None:
        """Test basic set and get operations."""
        cache.set("list", ["Barcelona"])
        assert cache.get("list") == ["Barcelona"]

    def test_get_missing_key(self, cache: InMemoryLocalCache) -> None:
        """Test getting a missing key returns the default."""
        assert cache.get("nonexistent") is None
        assert cache.get("nonexistent", []) == []

    def test_delete(self, cache: InMemoryLocalCache) -> None:
        """Test deleting a key."""
        cache.set("list", ["Barcelona"])

        assert cache.delete("list") is True
        assert "list" not in cache
        assert cache.delete("list") is False

    def test_clear(self, cache: InMemoryLocalCache) -> None:
        """Test clearing all keys."""
        cache.set("list", ["Barcelona"])
        cache.set("detail:1", {"id": 1})

        cache.clear()

        assert len(cache) == 0
        assert cache.get("list") is None

    def test_clear_is_idempotent(self, cache: InMemoryLocalCache) -> None:
        """Clearing an empty cache is a no-op."""
        cache.clear()
        cache.clear()
        assert len(cache) == 0

    def test_maxsize_respected(self) -> None:
        """Test that maxsize is respected."""
        cache = InMemoryLocalCache("places", maxsize=3)
        for i in range(5):
            cache.set(f"key{i}", i)

        assert len(cache) <= 3
        assert cache.maxsize == 3

    def test_name(self, cache: InMemoryLocalCache) -> None:
        assert cache.name == "places"


class TestLocalCacheRegistry:
    """Tests for LocalCacheRegistry."""

    def test_with_defaults(self) -> None:
        """One cache is created per name."""
        registry = LocalCacheRegistry.with_defaults(["places", "cities"], maxsize=10)

        assert list(registry) == ["places", "cities"]
        assert registry["places"].maxsize == 10
        assert registry["places"] is not registry["cities"]

    def test_get_missing(self) -> None:
        assert LocalCacheRegistry().get("places") is None

    def test_register_shared_handle(self) -> None:
        """Several names may point at the same cache."""
        shared = InMemoryLocalCache("regions")
        registry = LocalCacheRegistry()
        registry.register("regions", shared)
        registry.register("regions-options", shared)

        assert registry.get("regions") is registry.get("regions-options")
        assert len(registry) == 2
        assert "regions-options" in registry

    def test_close_clears_everything(self) -> None:
        registry = LocalCacheRegistry.with_defaults(["places"])
        places = registry["places"]
        places.set("list", [1])

        registry.close()

        assert len(places) == 0
        assert len(registry) == 0

    def test_close_survives_broken_cache(self, caplog) -> None:
        """A cache that fails to clear does not stop shutdown."""
        broken = MagicMock()
        broken.clear.side_effect = RuntimeError("boom")
        healthy = MagicMock()
        registry = LocalCacheRegistry({"broken": broken, "healthy": healthy})

        with caplog.at_level(logging.ERROR):
            registry.close()

        healthy.clear.assert_called_once_with()
        assert "broken" in caplog.text
