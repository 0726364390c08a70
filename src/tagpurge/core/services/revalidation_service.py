"""Revalidation service - main orchestrator for tag invalidation."""

import asyncio
import logging

from tagpurge.core.entities.request import RevalidationRequest
from tagpurge.core.entities.results import AggregatedResponse, BackendResult
from tagpurge.core.interfaces.backend_client import IInvalidationClient
from tagpurge.core.interfaces.local_cache import ILocalCacheRegistry
from tagpurge.core.services.aggregator import InvalidationAggregator
from tagpurge.core.services.authenticator import SecretAuthenticator
from tagpurge.core.services.local_invalidator import LocalCacheInvalidator
from tagpurge.core.services.origin_invalidator import OriginTagInvalidator
from tagpurge.core.services.tag_registry import TagRegistry
from tagpurge.core.services.validator import TagSetValidator

logger = logging.getLogger(__name__)


class RevalidationService:
    """Domain service that drives every cache layer to freshness.

    This is the main entry point once a request is authenticated and
    validated. The cheap in-process steps run first and to completion;
    the remote backends are then called concurrently and joined.
    """

    def __init__(
        self,
        registry: TagRegistry,
        authenticator: SecretAuthenticator,
        local_invalidator: LocalCacheInvalidator,
        origin_invalidator: OriginTagInvalidator,
        prefix_client: IInvalidationClient,
        pattern_client: IInvalidationClient,
        aggregator: InvalidationAggregator | None = None,
        validator: TagSetValidator | None = None,
    ) -> None:
        """Initialize the revalidation service.

        Args:
            registry: Source of every tag mapping.
            authenticator: Shared-secret check for inbound calls.
            local_invalidator: Clears worker-local caches.
            origin_invalidator: Expires the origin tag cache.
            prefix_client: Prefix-based edge purge backend.
            pattern_client: Pattern-based CDN invalidation backend.
            aggregator: Optional aggregator. Uses a default if not provided.
            validator: Optional validator. Built from ``registry`` if not
                provided.
        """
        self._registry = registry
        self._authenticator = authenticator
        self._local_invalidator = local_invalidator
        self._origin_invalidator = origin_invalidator
        self._prefix_client = prefix_client
        self._pattern_client = pattern_client
        self._aggregator = aggregator or InvalidationAggregator()
        self._validator = validator or TagSetValidator(registry)

    @property
    def registry(self) -> TagRegistry:
        return self._registry

    @property
    def authenticator(self) -> SecretAuthenticator:
        return self._authenticator

    @property
    def validator(self) -> TagSetValidator:
        return self._validator

    @property
    def local_caches(self) -> ILocalCacheRegistry:
        return self._local_invalidator.caches

    @property
    def backends(self) -> tuple[IInvalidationClient, IInvalidationClient]:
        return self._prefix_client, self._pattern_client

    async def revalidate(self, request: RevalidationRequest) -> AggregatedResponse:
        """Invalidate every cache layer for the request's tags.

        Args:
            request: A validated request.

        Returns:
            The aggregated response. Backend failures appear as warnings;
            only programming errors propagate.
        """
        tags = request.unique_tags
        logger.debug("Revalidating tags: %s", ", ".join(tag.value for tag in tags))

        tag_outcomes = await self._origin_invalidator.invalidate(tags)
        cleared = self._local_invalidator.invalidate(tags)

        prefixes = self._registry.prefixes_for_tags(tags)
        patterns = self._registry.patterns_for_tags(tags)

        results: list[BackendResult] = list(
            await asyncio.gather(
                self._prefix_client.invalidate(prefixes),
                self._pattern_client.invalidate(patterns),
            )
        )

        return self._aggregator.aggregate(request, tag_outcomes, results, cleared)
