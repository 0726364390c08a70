"""Cloudflare prefix purge client."""

import asyncio
import logging
from collections.abc import Iterable

import httpx

from tagpurge.core.entities.invalidation_job import InvalidationJob
from tagpurge.core.entities.results import BackendResult
from tagpurge.utils.paths import normalize_prefixes

logger = logging.getLogger(__name__)

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4"


class CloudflarePurgeClient:
    """Purges Cloudflare's edge cache by literal URL prefix.

    Prefixes have no wildcard semantics. One call issues exactly one
    request with no retry; retry policy belongs to whoever called the
    revalidation endpoint.
    """

    name = "cloudflare"

    def __init__(
        self,
        zone_id: str | None,
        api_token: str | None,
        timeout: float = 10.0,
        api_base: str = CLOUDFLARE_API_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            zone_id: Cloudflare zone identifier. None disables the client.
            api_token: API token with cache purge permission. None
                disables the client.
            timeout: Deadline in seconds for the whole request.
            api_base: Base URL of the Cloudflare API.
            transport: Optional httpx transport, mainly for tests.
        """
        self._zone_id = zone_id
        self._api_token = api_token
        self._timeout = timeout
        self._api_base = api_base.rstrip("/")
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._zone_id and self._api_token)

    @property
    def purge_url(self) -> str:
        return f"{self._api_base}/zones/{self._zone_id}/purge_cache"

    def _result_keys(self) -> dict[str, str]:
        return {"action_key": "purged", "targets_key": "prefixes"}

    async def invalidate(self, targets: Iterable[str]) -> BackendResult:
        """Purge every URL under the given prefixes.

        Args:
            targets: Literal URL path prefixes.

        Returns:
            Skipped if unconfigured or nothing to purge, Success on 2xx,
            Failed otherwise.
        """
        job = InvalidationJob.create(self.name, targets, normalize=normalize_prefixes)

        if not self.configured:
            return BackendResult.skip(self.name, "not configured", job=job, **self._result_keys())
        if not job.targets:
            return BackendResult.skip(self.name, "no prefixes to purge", job=job, **self._result_keys())

        try:
            response = await asyncio.wait_for(self._send(job), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.error("Cloudflare purge timed out after %.1fs", self._timeout)
            return BackendResult.failure(
                self.name, f"Cloudflare purge timed out after {self._timeout:g}s",
                job=job, **self._result_keys(),
            )
        except (httpx.HTTPError, OSError) as e:
            logger.error("Cloudflare purge error: %s", e)
            return BackendResult.failure(
                self.name, str(e) or type(e).__name__, job=job, **self._result_keys()
            )

        if not response.is_success:
            error_msg = f"Cloudflare purge failed: {response.status_code}"
            logger.error("%s %s", error_msg, _error_body(response))
            return BackendResult.failure(self.name, error_msg, job=job, **self._result_keys())

        logger.info("Cloudflare purged %d prefixes", job.size)
        return BackendResult.success(self.name, job, **self._result_keys())

    async def _send(self, job: InvalidationJob) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        ) as client:
            return await client.post(
                self.purge_url,
                headers={
                    "Authorization": f"Bearer {self._api_token}",
                    "Content-Type": "application/json",
                },
                json={"prefixes": list(job.targets)},
            )


def _error_body(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return {}
