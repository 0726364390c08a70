"""Invalidation job entity."""

import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from tagpurge.utils.paths import normalize_patterns, truncate


@dataclass(frozen=True)
class InvalidationJob:
    """Per-backend unit of work for one revalidation request.

    Created fresh for every call and never persisted. Only backends with
    a provider-side quota set a cap, so ``truncated`` and
    ``original_count`` stay at their defaults for the others.
    """

    backend: str
    targets: tuple[str, ...]
    idempotency_token: str
    truncated: bool = False
    original_count: int | None = None

    @property
    def size(self) -> int:
        """Number of targets that will be sent."""
        return len(self.targets)

    @classmethod
    def create(
        cls,
        backend: str,
        targets: Iterable[str],
        cap: int | None = None,
        normalize: Callable[[Iterable[str]], tuple[str, ...]] = normalize_patterns,
        token_factory: Callable[[], object] = uuid.uuid4,
    ) -> "InvalidationJob":
        """Factory method to create a job from raw targets.

        Args:
            backend: Name of the backend the job is for.
            targets: Raw targets, normalized here.
            cap: Optional hard limit on targets per request.
            normalize: Normalization applied before the cap.
            token_factory: Source of the per-call idempotency token.

        Returns:
            A new InvalidationJob instance.
        """
        normalized = normalize(targets)
        kept, truncated = (normalized, False) if cap is None else truncate(normalized, cap)

        return cls(
            backend=backend,
            targets=kept,
            idempotency_token=str(token_factory()),
            truncated=truncated,
            original_count=len(normalized) if truncated else None,
        )
