"""Aggregation of per-step outcomes into one response."""

import logging
from collections.abc import Sequence

from tagpurge.core.entities.request import RevalidationRequest
from tagpurge.core.entities.results import AggregatedResponse, BackendResult, TagOutcome

logger = logging.getLogger("tagpurge")


class InvalidationAggregator:
    """Combines local, origin and remote outcomes.

    The response is always ``revalidated=True`` once the local steps have
    run: the cache of record is already correct at that point, and remote
    problems are reported as warnings instead.

    Warning order:
        1. Origin bookkeeping failures, one per tag.
        2. Truncation notice for capped backends.
        3. One line per failed remote backend.
    """

    def aggregate(
        self,
        request: RevalidationRequest,
        tag_outcomes: Sequence[TagOutcome],
        backend_results: Sequence[BackendResult],
        cleared_caches: Sequence[str] = (),
    ) -> AggregatedResponse:
        """Build the response and emit the summary log line.

        Args:
            request: The validated request.
            tag_outcomes: Per-tag results from the origin invalidator.
            backend_results: One result per remote backend.
            cleared_caches: Names of local caches that were cleared.

        Returns:
            The aggregated response.
        """
        warnings: list[str] = []

        for outcome in tag_outcomes:
            if not outcome.recorded:
                warnings.append(
                    f"Tag '{outcome.tag.value}' was revalidated but recording it failed: "
                    f"{outcome.error}"
                )

        for result in backend_results:
            job = result.job
            # A skipped backend sent nothing, so there is nothing to report.
            if result.skipped or job is None:
                continue
            if job.truncated and job.original_count is not None:
                warnings.append(
                    f"{result.backend} invalidation truncated to {job.size} of "
                    f"{job.original_count} paths; remaining paths were not invalidated"
                )

        for result in backend_results:
            if result.failed:
                warnings.append(f"{result.backend}: {result.detail}")

        response = AggregatedResponse(
            tags=request.unique_tags,
            tag_outcomes=list(tag_outcomes),
            backends=list(backend_results),
            warnings=warnings,
            cleared_caches=list(cleared_caches),
        )
        self._log_summary(response)
        return response

    def _log_summary(self, response: AggregatedResponse) -> None:
        backends = " | ".join(
            f"{result.backend}: {result.outcome.value}" for result in response.backends
        )
        logger.info(
            "[revalidate] Tags: %s | Failed tags: %s | %s",
            ", ".join(tag.value for tag in response.tags),
            ", ".join(tag.value for tag in response.failed_tags) or "none",
            backends or "no remote backends",
            extra={
                "revalidated_tags": [tag.value for tag in response.tags],
                "cleared_caches": response.cleared_caches,
                "warnings": response.warnings,
            },
        )
