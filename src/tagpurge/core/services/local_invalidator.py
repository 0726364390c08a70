"""In-process cache invalidation."""

import logging
from collections.abc import Iterable

from tagpurge.core.entities.tag import Tag
from tagpurge.core.interfaces.local_cache import ILocalCacheRegistry
from tagpurge.core.services.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


class LocalCacheInvalidator:
    """Clears worker-local caches affected by a set of tags.

    Several tags may share one cache (``regions`` and ``regions:options``
    both live in the regions cache); each distinct cache is cleared once
    per call.
    """

    def __init__(self, registry: TagRegistry, caches: ILocalCacheRegistry) -> None:
        self._registry = registry
        self._caches = caches

    @property
    def caches(self) -> ILocalCacheRegistry:
        """The process-wide store this invalidator clears."""
        return self._caches

    def invalidate(self, tags: Iterable[Tag]) -> list[str]:
        """Clear every local cache reachable from ``tags``.

        Never raises: a broken cache is logged and skipped so the rest of
        the run can proceed.

        Args:
            tags: Validated tags.

        Returns:
            Names of the caches that were cleared.
        """
        cleared: list[str] = []
        seen: set[int] = set()

        for tag in tags:
            for name in sorted(self._registry.local_cache_handles_for(tag)):
                handle = self._caches.get(name)
                if handle is None:
                    logger.warning("No local cache registered as %r (tag %s)", name, tag.value)
                    continue
                if id(handle) in seen:
                    continue
                seen.add(id(handle))

                try:
                    handle.clear()
                except Exception:
                    logger.exception("Failed to clear local cache %r", name)
                    continue
                cleared.append(name)

        return cleared
