"""Origin tag cache invalidation."""

import logging
from collections.abc import Iterable

from tagpurge.core.entities.results import TagOutcome
from tagpurge.core.entities.tag import Tag
from tagpurge.core.interfaces.origin_tag_cache import IOriginTagCache

logger = logging.getLogger(__name__)


class OriginTagInvalidator:
    """Expires the origin's tag-scoped response cache, one tag at a time.

    A failure on one tag never stops the loop. The expiry itself is
    assumed to have taken effect even when the call raises, so the tag is
    still reported as revalidated and the failure becomes a warning.
    """

    def __init__(self, origin: IOriginTagCache) -> None:
        self._origin = origin

    async def invalidate(self, tags: Iterable[Tag]) -> list[TagOutcome]:
        """Expire each tag independently.

        Args:
            tags: Validated tags. Repeats are expired once.

        Returns:
            One TagOutcome per distinct tag, in first-seen order.
        """
        outcomes: list[TagOutcome] = []
        for tag in dict.fromkeys(tags):
            try:
                await self._origin.expire_tag(tag.value)
            except Exception as e:
                logger.exception("Failed to record revalidation for tag %s", tag.value)
                outcomes.append(TagOutcome(tag=tag, recorded=False, error=str(e) or type(e).__name__))
            else:
                outcomes.append(TagOutcome(tag=tag))
        return outcomes
