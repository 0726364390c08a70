"""Cache store implementations."""

from tagpurge.infrastructure.backends.memory import InMemoryLocalCache, LocalCacheRegistry
from tagpurge.infrastructure.backends.origin import InMemoryTagCache

__all__ = [
    "InMemoryLocalCache",
    "LocalCacheRegistry",
    "InMemoryTagCache",
]
