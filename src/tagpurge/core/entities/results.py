"""Outcome entities reported by invalidation steps."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from tagpurge.core.entities.invalidation_job import InvalidationJob
from tagpurge.core.entities.tag import Tag


class BackendOutcome(Enum):
    """Outcome of a single remote backend call.

    SKIPPED means the backend is not configured for this deployment (or
    had nothing to do). It is never an error.
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class BackendResult:
    """Result of one remote backend call.

    ``action_key`` and ``targets_key`` name the fields used when the
    result is rendered for HTTP callers, e.g. ``purged``/``prefixes``.
    """

    backend: str
    outcome: BackendOutcome
    detail: str | None = None
    job: InvalidationJob | None = None
    remote_id: str | None = None
    action_key: str = "purged"
    targets_key: str = "prefixes"

    @property
    def succeeded(self) -> bool:
        return self.outcome is BackendOutcome.SUCCESS

    @property
    def skipped(self) -> bool:
        return self.outcome is BackendOutcome.SKIPPED

    @property
    def failed(self) -> bool:
        return self.outcome is BackendOutcome.FAILED

    @property
    def truncated(self) -> bool:
        return self.job is not None and self.job.truncated

    @classmethod
    def success(
        cls, backend: str, job: InvalidationJob, remote_id: str | None = None, **keys: str
    ) -> "BackendResult":
        return cls(backend, BackendOutcome.SUCCESS, job=job, remote_id=remote_id, **keys)

    @classmethod
    def skip(
        cls,
        backend: str,
        detail: str,
        job: InvalidationJob | None = None,
        **keys: str,
    ) -> "BackendResult":
        return cls(backend, BackendOutcome.SKIPPED, detail=detail, job=job, **keys)

    @classmethod
    def failure(
        cls, backend: str, detail: str, job: InvalidationJob | None = None, **keys: str
    ) -> "BackendResult":
        return cls(backend, BackendOutcome.FAILED, detail=detail, job=job, **keys)

    def to_dict(self) -> dict[str, Any]:
        """Render the result in the shape returned to HTTP callers."""
        data: dict[str, Any] = {
            self.action_key: self.succeeded,
            self.targets_key: list(self.job.targets) if self.job else [],
            "skipped": self.skipped,
        }
        if self.failed:
            data["error"] = self.detail
        if self.remote_id is not None:
            data["invalidationId"] = self.remote_id
        if self.job is not None and self.action_key == "invalidated":
            data["truncated"] = self.job.truncated
            if self.job.original_count is not None:
                data["originalCount"] = self.job.original_count
        return data


@dataclass(frozen=True)
class TagOutcome:
    """Per-tag result of expiring the origin tag cache.

    The tag counts as revalidated either way. ``recorded`` is False when
    the bookkeeping write raised, and ``error`` carries its message.
    """

    tag: Tag
    recorded: bool = True
    error: str | None = None


@dataclass
class AggregatedResponse:
    """Combined report for one revalidation request."""

    tags: tuple[Tag, ...]
    tag_outcomes: list[TagOutcome] = field(default_factory=list)
    backends: list[BackendResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cleared_caches: list[str] = field(default_factory=list)
    revalidated: bool = True
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def failed_tags(self) -> list[Tag]:
        return [outcome.tag for outcome in self.tag_outcomes if not outcome.recorded]

    def backend(self, name: str) -> BackendResult | None:
        """Get the result reported by the named backend, if any."""
        for result in self.backends:
            if result.backend == name:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        """Render the HTTP 200 body."""
        data: dict[str, Any] = {
            "revalidated": self.revalidated,
            "tags": [tag.value for tag in self.tags],
        }
        for result in self.backends:
            data[result.backend] = result.to_dict()
        data["timestamp"] = self.timestamp.isoformat()
        if self.warnings:
            data["warning"] = "; ".join(self.warnings)
            data["warnings"] = list(self.warnings)
        return data
