"""Remote invalidation client interface."""

from collections.abc import Iterable
from typing import Protocol

from tagpurge.core.entities.results import BackendResult


class IInvalidationClient(Protocol):
    """Contract for remote cache invalidation backends.

    Implementations must never raise for network or provider failures.
    Every call resolves to exactly one BackendResult.
    """

    name: str

    @property
    def configured(self) -> bool:
        """Whether this deployment has credentials for the backend."""
        ...

    async def invalidate(self, targets: Iterable[str]) -> BackendResult:
        """Ask the backend to drop cached content for ``targets``.

        Args:
            targets: Literal prefixes or path patterns, depending on
                the backend.

        Returns:
            Success, Skipped or Failed result.
        """
        ...
