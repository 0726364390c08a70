"""tagpurge - Tag-scoped cache revalidation across cache layers.

When origin content changes, a caller names the logical tags that
changed. tagpurge then brings three independent cache layers back to
freshness without letting one of them block or corrupt the others:

- worker-local in-process caches,
- the origin's tag-scoped response cache,
- remote edge caches (Cloudflare prefix purge and CloudFront path
  invalidation), called concurrently.

Example with FastAPI:
    from tagpurge import RevalidationConfig
    from tagpurge.adapters.fastapi import create_app

    config = RevalidationConfig()
    app = create_app(config, route_prefix="/api")

Driving the service directly:
    from tagpurge import RevalidationConfig, Tag, build_service
    from tagpurge import RevalidationRequest

    service = build_service(RevalidationConfig(secret="s3cret"))
    response = await service.revalidate(
        RevalidationRequest(tags=(Tag.PLACES, Tag.REGIONS))
    )
    print(response.to_dict())
"""

from tagpurge.core.entities import (
    ALLOWED_TAGS,
    TAG_REGISTRY_VERSION,
    AggregatedResponse,
    BackendOutcome,
    BackendResult,
    InvalidationJob,
    RevalidationConfig,
    RevalidationRequest,
    Tag,
    TagOutcome,
)
from tagpurge.core.interfaces import (
    IInvalidationClient,
    ILocalCache,
    ILocalCacheRegistry,
    IOriginTagCache,
)
from tagpurge.core.services import (
    AuditContext,
    AuditSampler,
    InvalidationAggregator,
    LocalCacheInvalidator,
    OriginTagInvalidator,
    RevalidationService,
    SecretAuthenticator,
    TagMapping,
    TagRegistry,
    TagSetValidator,
    ValidationResult,
    default_registry,
)
from tagpurge.factory import build_local_caches, build_service
from tagpurge.infrastructure import (
    CloudflarePurgeClient,
    CloudFrontInvalidationClient,
    InMemoryLocalCache,
    InMemoryTagCache,
    LocalCacheRegistry,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "Tag",
    "ALLOWED_TAGS",
    "TAG_REGISTRY_VERSION",
    "RevalidationConfig",
    "RevalidationRequest",
    "InvalidationJob",
    "BackendOutcome",
    "BackendResult",
    "TagOutcome",
    "AggregatedResponse",
    # Core interfaces
    "ILocalCache",
    "ILocalCacheRegistry",
    "IOriginTagCache",
    "IInvalidationClient",
    # Core services
    "RevalidationService",
    "TagRegistry",
    "TagMapping",
    "default_registry",
    "SecretAuthenticator",
    "AuditSampler",
    "AuditContext",
    "TagSetValidator",
    "ValidationResult",
    "LocalCacheInvalidator",
    "OriginTagInvalidator",
    "InvalidationAggregator",
    # Infrastructure implementations
    "InMemoryLocalCache",
    "LocalCacheRegistry",
    "InMemoryTagCache",
    "CloudflarePurgeClient",
    "CloudFrontInvalidationClient",
    # Wiring
    "build_service",
    "build_local_caches",
]
