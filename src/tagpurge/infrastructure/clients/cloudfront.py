"""CloudFront path invalidation client."""

import asyncio
import logging
import uuid
from collections.abc import Callable, Iterable
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from tagpurge.core.entities.invalidation_job import InvalidationJob
from tagpurge.core.entities.results import BackendResult
from tagpurge.core.entities.revalidation_config import DEFAULT_CLOUDFRONT_MAX_PATHS
from tagpurge.utils.paths import normalize_patterns

logger = logging.getLogger(__name__)


class CloudFrontInvalidationClient:
    """Creates CloudFront invalidations for wildcard path patterns.

    Paths are normalized and capped before sending. Each call gets a
    fresh caller reference so CloudFront never merges two logically
    distinct batches, even when their paths are identical.

    The boto3 call is blocking and runs in a worker thread. When the
    deadline passes the result is reported as failed, but the thread is
    not interrupted, so CloudFront may still accept the batch afterwards.
    """

    name = "cloudfront"

    def __init__(
        self,
        distribution_id: str | None,
        timeout: float = 10.0,
        max_paths: int = DEFAULT_CLOUDFRONT_MAX_PATHS,
        client: Any = None,
        region_name: str | None = None,
        token_factory: Callable[[], object] = uuid.uuid4,
    ) -> None:
        """Initialize the client.

        Args:
            distribution_id: Target distribution. None disables the client.
            timeout: Deadline in seconds for the whole call.
            max_paths: Hard cap on paths per invalidation batch.
            client: Optional pre-built boto3 CloudFront client.
            region_name: AWS region for the boto3 client.
            token_factory: Source of caller references.
        """
        self._distribution_id = distribution_id
        self._timeout = timeout
        self._max_paths = max_paths
        self._client = client
        self._region_name = region_name
        self._token_factory = token_factory

    @property
    def configured(self) -> bool:
        return bool(self._distribution_id)

    @property
    def max_paths(self) -> int:
        return self._max_paths

    def _result_keys(self) -> dict[str, str]:
        return {"action_key": "invalidated", "targets_key": "paths"}

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = boto3.client(
                "cloudfront",
                region_name=self._region_name,
                config=Config(
                    connect_timeout=self._timeout,
                    read_timeout=self._timeout,
                    retries={"total_max_attempts": 1, "mode": "standard"},
                ),
            )
        return self._client

    def build_job(self, targets: Iterable[str]) -> InvalidationJob:
        """Normalize, cap and tokenize ``targets`` into a job."""
        return InvalidationJob.create(
            self.name,
            targets,
            cap=self._max_paths,
            normalize=normalize_patterns,
            token_factory=self._token_factory,
        )

    async def invalidate(self, targets: Iterable[str]) -> BackendResult:
        """Create an invalidation for the given path patterns.

        Args:
            targets: Path patterns, ``*`` suffix allowed.

        Returns:
            Skipped if unconfigured or nothing to invalidate, Success with
            the invalidation id, or Failed with a readable message.
        """
        if not self.configured:
            return BackendResult.skip(self.name, "not configured", **self._result_keys())

        job = self.build_job(targets)
        if not job.targets:
            return BackendResult.skip(self.name, "no paths to invalidate", job=job, **self._result_keys())

        if job.truncated:
            logger.warning(
                "CloudFront invalidation truncated from %d to %d paths",
                job.original_count,
                job.size,
            )

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self._create_invalidation, job),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.error("CloudFront invalidation timed out after %.1fs", self._timeout)
            return BackendResult.failure(
                self.name,
                f"CloudFront invalidation timed out after {self._timeout:g}s; "
                "the batch may still be created",
                job=job,
                **self._result_keys(),
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("CloudFront invalidation error: %s", e)
            return BackendResult.failure(
                self.name, f"CloudFront invalidation failed: {e}", job=job, **self._result_keys()
            )

        invalidation_id = response.get("Invalidation", {}).get("Id")
        logger.info(
            "CloudFront invalidation %s created for %d paths", invalidation_id, job.size
        )
        return BackendResult.success(
            self.name, job, remote_id=invalidation_id, **self._result_keys()
        )

    def _create_invalidation(self, job: InvalidationJob) -> dict[str, Any]:
        return self._get_client().create_invalidation(
            DistributionId=self._distribution_id,
            InvalidationBatch={
                "Paths": {"Quantity": job.size, "Items": list(job.targets)},
                "CallerReference": job.idempotency_token,
            },
        )
