"""Local cache interface."""

from typing import Protocol


class ILocalCache(Protocol):
    """Contract for in-process caches cleared on revalidation.

    Each cache domain (places, regions, ...) lives in every worker
    process. Clearing must be idempotent and safe to call from
    concurrent requests.
    """

    def clear(self) -> None:
        """Drop every entry held by this cache."""
        ...


class ILocalCacheRegistry(Protocol):
    """Contract for the process-wide store of named local caches."""

    def get(self, name: str) -> ILocalCache | None:
        """Return the cache registered under ``name``, if any."""
        ...

    def close(self) -> None:
        """Clear every cache at shutdown."""
        ...

    def __len__(self) -> int:
        ...
