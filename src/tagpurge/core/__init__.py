"""Core domain layer for tagpurge."""

from tagpurge.core.entities import (
    AggregatedResponse,
    BackendResult,
    RevalidationConfig,
    RevalidationRequest,
    Tag,
)
from tagpurge.core.interfaces import (
    IInvalidationClient,
    ILocalCache,
    ILocalCacheRegistry,
    IOriginTagCache,
)
from tagpurge.core.services import RevalidationService

__all__ = [
    # Entities
    "Tag",
    "RevalidationConfig",
    "RevalidationRequest",
    "BackendResult",
    "AggregatedResponse",
    # Interfaces
    "ILocalCache",
    "ILocalCacheRegistry",
    "IOriginTagCache",
    "IInvalidationClient",
    # Services
    "RevalidationService",
]
