"""Wiring of a RevalidationService from configuration."""

import logging

from tagpurge.core.entities.revalidation_config import RevalidationConfig
from tagpurge.core.interfaces.backend_client import IInvalidationClient
from tagpurge.core.interfaces.origin_tag_cache import IOriginTagCache
from tagpurge.core.services.authenticator import AuditSampler, SecretAuthenticator
from tagpurge.core.services.local_invalidator import LocalCacheInvalidator
from tagpurge.core.services.origin_invalidator import OriginTagInvalidator
from tagpurge.core.services.revalidation_service import RevalidationService
from tagpurge.core.services.tag_registry import (
    DEFAULT_LOCAL_CACHES,
    TagRegistry,
    default_registry,
)
from tagpurge.infrastructure.backends.memory import LocalCacheRegistry
from tagpurge.infrastructure.backends.origin import InMemoryTagCache
from tagpurge.infrastructure.clients.cloudflare import CloudflarePurgeClient
from tagpurge.infrastructure.clients.cloudfront import CloudFrontInvalidationClient

logger = logging.getLogger(__name__)


def build_local_caches(config: RevalidationConfig) -> LocalCacheRegistry:
    """Create the process-wide local cache store."""
    return LocalCacheRegistry.with_defaults(
        DEFAULT_LOCAL_CACHES,
        maxsize=config.local_cache_maxsize,
        default_ttl=config.local_cache_ttl,
    )


def build_service(
    config: RevalidationConfig,
    local_caches: LocalCacheRegistry | None = None,
    origin_cache: IOriginTagCache | None = None,
    registry: TagRegistry | None = None,
    prefix_client: IInvalidationClient | None = None,
    pattern_client: IInvalidationClient | None = None,
) -> RevalidationService:
    """Create a RevalidationService with default collaborators.

    Args:
        config: Resolved configuration.
        local_caches: Local cache store. Built from ``config`` if omitted.
        origin_cache: Origin tag cache. In-memory if omitted.
        registry: Tag registry. The reference registry if omitted.
        prefix_client: Prefix purge backend. Cloudflare if omitted.
        pattern_client: Pattern invalidation backend. CloudFront if omitted.

    Returns:
        A ready-to-use RevalidationService.
    """
    registry = registry or default_registry()
    local_caches = local_caches if local_caches is not None else build_local_caches(config)
    origin_cache = origin_cache if origin_cache is not None else InMemoryTagCache(
        maxsize=config.local_cache_maxsize,
        default_ttl=config.local_cache_ttl,
    )

    if not config.secret:
        logger.warning("REVALIDATE_SECRET is not set; every revalidation request will be rejected")

    if prefix_client is None:
        prefix_client = CloudflarePurgeClient(
            zone_id=config.cloudflare_zone_id,
            api_token=config.cloudflare_api_token,
            timeout=config.cloudflare_timeout,
        )
    if pattern_client is None:
        pattern_client = CloudFrontInvalidationClient(
            distribution_id=config.cloudfront_distribution_id,
            timeout=config.cloudfront_timeout,
            max_paths=config.cloudfront_max_paths,
            region_name=config.aws_region,
        )

    return RevalidationService(
        registry=registry,
        authenticator=SecretAuthenticator(
            config.secret,
            sampler=AuditSampler(config.audit_sample_rate),
        ),
        local_invalidator=LocalCacheInvalidator(registry, local_caches),
        origin_invalidator=OriginTagInvalidator(origin_cache),
        prefix_client=prefix_client,
        pattern_client=pattern_client,
    )
