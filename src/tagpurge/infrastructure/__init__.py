"""Infrastructure layer implementations for tagpurge."""

from tagpurge.infrastructure.backends import (
    InMemoryLocalCache,
    InMemoryTagCache,
    LocalCacheRegistry,
)
from tagpurge.infrastructure.clients import (
    CloudflarePurgeClient,
    CloudFrontInvalidationClient,
)

__all__ = [
    "InMemoryLocalCache",
    "InMemoryTagCache",
    "LocalCacheRegistry",
    "CloudflarePurgeClient",
    "CloudFrontInvalidationClient",
]
