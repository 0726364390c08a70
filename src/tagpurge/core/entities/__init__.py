"""Domain entities for tagpurge."""

from tagpurge.core.entities.invalidation_job import InvalidationJob
from tagpurge.core.entities.request import RevalidationRequest
from tagpurge.core.entities.results import (
    AggregatedResponse,
    BackendOutcome,
    BackendResult,
    TagOutcome,
)
from tagpurge.core.entities.revalidation_config import RevalidationConfig
from tagpurge.core.entities.tag import ALLOWED_TAGS, TAG_REGISTRY_VERSION, Tag

__all__ = [
    "Tag",
    "ALLOWED_TAGS",
    "TAG_REGISTRY_VERSION",
    "RevalidationRequest",
    "RevalidationConfig",
    "InvalidationJob",
    "BackendOutcome",
    "BackendResult",
    "TagOutcome",
    "AggregatedResponse",
]
