"""Domain services for tagpurge."""

from tagpurge.core.services.aggregator import InvalidationAggregator
from tagpurge.core.services.authenticator import (
    AuditContext,
    AuditSampler,
    SecretAuthenticator,
)
from tagpurge.core.services.local_invalidator import LocalCacheInvalidator
from tagpurge.core.services.origin_invalidator import OriginTagInvalidator
from tagpurge.core.services.revalidation_service import RevalidationService
from tagpurge.core.services.tag_registry import (
    DEFAULT_LOCAL_CACHES,
    DEFAULT_TAG_MAPPINGS,
    TagMapping,
    TagRegistry,
    default_registry,
)
from tagpurge.core.services.validator import TagSetValidator, ValidationResult

__all__ = [
    "RevalidationService",
    # Tag registry
    "TagRegistry",
    "TagMapping",
    "DEFAULT_TAG_MAPPINGS",
    "DEFAULT_LOCAL_CACHES",
    "default_registry",
    # Inbound checks
    "SecretAuthenticator",
    "AuditSampler",
    "AuditContext",
    "TagSetValidator",
    "ValidationResult",
    # Invalidation steps
    "LocalCacheInvalidator",
    "OriginTagInvalidator",
    "InvalidationAggregator",
]
