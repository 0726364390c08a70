"""Origin tag cache interface."""

from typing import Protocol


class IOriginTagCache(Protocol):
    """Contract for the origin's tag-scoped response cache.

    This is the cache of record: once a tag is expired here, the origin
    serves fresh content for it regardless of what edge caches hold.
    """

    async def expire_tag(self, tag: str) -> None:
        """Expire every entry associated with ``tag``.

        Args:
            tag: The tag to expire.

        Raises:
            Exception: Implementations may raise if bookkeeping fails.
                Callers treat this as non-fatal.
        """
        ...
