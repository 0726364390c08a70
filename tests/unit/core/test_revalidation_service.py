"""Tests for RevalidationService orchestration."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from botocore.exceptions import EndpointConnectionError

from conftest import make_boto_client, make_cloudflare_client, make_cloudfront_client
from tagpurge import (
    BackendOutcome,
    BackendResult,
    InMemoryLocalCache,
    RevalidationConfig,
    RevalidationRequest,
    Tag,
    build_service,
)


class SlowClient:
    """Client that records when it starts and finishes."""

    def __init__(self, name: str, events: list[str], delay: float = 0.05) -> None:
        self.name = name
        self.configured = True
        self._events = events
        self._delay = delay

    async def invalidate(self, targets):
        self._events.append(f"{self.name}:start")
        await asyncio.sleep(self._delay)
        self._events.append(f"{self.name}:end")
        return BackendResult.skip(self.name, "test")


class TestRevalidate:
    """Tests for the orchestration flow."""

    async def test_all_layers_invalidated(self, service_factory, local_caches, origin_cache):
        requests = []
        boto = make_boto_client()
        service = service_factory(
            cloudflare=make_cloudflare_client(requests=requests),
            cloudfront=make_cloudfront_client(boto),
        )
        local_caches["places"].set("list", [1, 2, 3])
        await origin_cache.set("GET /api/places", {"data": []}, tags=["places"])

        response = await service.revalidate(RevalidationRequest(tags=(Tag.PLACES,)))

        assert response.revalidated is True
        assert len(local_caches["places"]) == 0
        assert await origin_cache.get("GET /api/places") is None
        assert len(requests) == 1
        boto.create_invalidation.assert_called_once()
        assert response.backend("cloudflare").succeeded
        assert response.backend("cloudfront").remote_id == "I2J3K4L5M6"

    async def test_registry_drives_remote_targets(self, service_factory):
        prefix_client = MagicMock(name="cloudflare")
        prefix_client.invalidate = AsyncMock(return_value=BackendResult.skip("cloudflare", "x"))
        pattern_client = MagicMock(name="cloudfront")
        pattern_client.invalidate = AsyncMock(return_value=BackendResult.skip("cloudfront", "x"))
        service = service_factory(cloudflare=prefix_client, cloudfront=pattern_client)

        await service.revalidate(RevalidationRequest(tags=(Tag.REGIONS, Tag.REGIONS_OPTIONS)))

        prefix_client.invalidate.assert_awaited_once_with(["/api/regions", "/api/regions/options"])
        pattern_client.invalidate.assert_awaited_once_with(
            ["/api/regions*", "/api/regions/options*"]
        )

    async def test_remote_calls_run_concurrently(self, service_factory):
        events: list[str] = []
        service = service_factory(
            cloudflare=SlowClient("cloudflare", events),
            cloudfront=SlowClient("cloudfront", events),
        )

        await service.revalidate(RevalidationRequest(tags=(Tag.PLACES,)))

        # Both start before either finishes.
        assert events[:2] == ["cloudflare:start", "cloudfront:start"]

    async def test_local_steps_finish_before_network(self, service_factory, local_caches):
        order: list[str] = []

        class RecordingCache(InMemoryLocalCache):
            def clear(self) -> None:
                order.append("local")
                super().clear()

        local_caches.register("places", RecordingCache("places"))
        service = service_factory(
            cloudflare=SlowClient("cloudflare", order, delay=0),
            cloudfront=SlowClient("cloudfront", order, delay=0),
        )

        await service.revalidate(RevalidationRequest(tags=(Tag.PLACES,)))

        assert order[0] == "local"


class TestBackendIsolation:
    """A failing backend never stops the other one."""

    async def test_failing_prefix_client(self, service_factory):
        boto = make_boto_client()
        service = service_factory(
            cloudflare=make_cloudflare_client(status_code=500),
            cloudfront=make_cloudfront_client(boto),
        )

        response = await service.revalidate(RevalidationRequest(tags=(Tag.CITIES,)))

        assert response.backend("cloudflare").outcome is BackendOutcome.FAILED
        assert response.backend("cloudfront").outcome is BackendOutcome.SUCCESS
        boto.create_invalidation.assert_called_once()

    async def test_failing_pattern_client(self, service_factory):
        requests = []
        boto = make_boto_client(error=EndpointConnectionError(endpoint_url="https://cloudfront"))
        service = service_factory(
            cloudflare=make_cloudflare_client(requests=requests),
            cloudfront=make_cloudfront_client(boto),
        )

        response = await service.revalidate(RevalidationRequest(tags=(Tag.CITIES,)))

        assert response.backend("cloudfront").outcome is BackendOutcome.FAILED
        assert response.backend("cloudflare").outcome is BackendOutcome.SUCCESS
        assert len(requests) == 1

    async def test_origin_failure_does_not_block_remote(self, service_factory):
        origin = AsyncMock()
        origin.expire_tag.side_effect = RuntimeError("bookkeeping down")
        requests = []
        service = service_factory(
            cloudflare=make_cloudflare_client(requests=requests),
            origin=origin,
        )

        response = await service.revalidate(RevalidationRequest(tags=(Tag.PLACES,)))

        assert response.revalidated is True
        assert response.tags == (Tag.PLACES,)
        assert len(requests) == 1
        assert "bookkeeping down" in response.warnings[0]


class TestSkipVersusFail:
    """Unconfigured backends are skipped, never failed."""

    async def test_unconfigured_backends_are_skipped(self):
        service = build_service(RevalidationConfig(secret="s"))

        response = await service.revalidate(RevalidationRequest(tags=(Tag.PLACES,)))

        for name in ("cloudflare", "cloudfront"):
            result = response.backend(name)
            assert result.outcome is BackendOutcome.SKIPPED
            assert result.failed is False
        assert response.warnings == []
