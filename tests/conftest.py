"""Pytest configuration for tagpurge tests."""

from unittest.mock import MagicMock

import httpx
import pytest

from tagpurge import (
    CloudflarePurgeClient,
    CloudFrontInvalidationClient,
    InMemoryTagCache,
    LocalCacheRegistry,
    RevalidationConfig,
    build_service,
)
from tagpurge.core.services.tag_registry import DEFAULT_LOCAL_CACHES

SECRET = "test-revalidate-secret-12345678"

CONFIG_ENV_VARS = (
    "REVALIDATE_SECRET",
    "REVALIDATE_AUDIT_SAMPLE_RATE",
    "CLOUDFLARE_ZONE_ID",
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_PURGE_TIMEOUT_SECONDS",
    "CLOUDFRONT_DISTRIBUTION_ID",
    "CLOUDFRONT_INVALIDATION_TIMEOUT_SECONDS",
    "CLOUDFRONT_MAX_PATHS",
    "AWS_REGION",
    "LOCAL_CACHE_MAXSIZE",
    "LOCAL_CACHE_TTL_SECONDS",
)


def make_cloudflare_client(
    status_code: int = 200,
    error: Exception | None = None,
    requests: list[httpx.Request] | None = None,
    zone_id: str | None = "zone-123",
    api_token: str | None = "cf-token",
    timeout: float = 10.0,
) -> CloudflarePurgeClient:
    """Create a Cloudflare client whose HTTP traffic never leaves the process."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if error is not None:
            raise error
        return httpx.Response(status_code, json={"success": status_code < 400})

    return CloudflarePurgeClient(
        zone_id=zone_id,
        api_token=api_token,
        timeout=timeout,
        transport=httpx.MockTransport(handler),
    )


def make_boto_client(
    invalidation_id: str = "I2J3K4L5M6",
    error: Exception | None = None,
) -> MagicMock:
    """Create a stand-in for a boto3 CloudFront client."""
    boto = MagicMock()
    if error is not None:
        boto.create_invalidation.side_effect = error
    else:
        boto.create_invalidation.return_value = {
            "Invalidation": {"Id": invalidation_id, "Status": "InProgress"}
        }
    return boto


def make_cloudfront_client(
    boto: MagicMock | None = None,
    distribution_id: str | None = "E1ABCDEF",
    max_paths: int = 3000,
    timeout: float = 10.0,
) -> CloudFrontInvalidationClient:
    return CloudFrontInvalidationClient(
        distribution_id=distribution_id,
        timeout=timeout,
        max_paths=max_paths,
        client=boto if boto is not None else make_boto_client(),
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment out of RevalidationConfig."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> RevalidationConfig:
    return RevalidationConfig(
        secret=SECRET,
        audit_sample_rate=1.0,
        cloudflare_zone_id="zone-123",
        cloudflare_api_token="cf-token",
        cloudfront_distribution_id="E1ABCDEF",
    )


@pytest.fixture
def local_caches() -> LocalCacheRegistry:
    return LocalCacheRegistry.with_defaults(DEFAULT_LOCAL_CACHES)


@pytest.fixture
def origin_cache() -> InMemoryTagCache:
    return InMemoryTagCache()


@pytest.fixture
def service_factory(config, local_caches, origin_cache):
    """Build a RevalidationService with in-process remote backends."""

    def factory(
        cloudflare: CloudflarePurgeClient | None = None,
        cloudfront: CloudFrontInvalidationClient | None = None,
        origin=None,
    ):
        return build_service(
            config,
            local_caches=local_caches,
            origin_cache=origin if origin is not None else origin_cache,
            prefix_client=cloudflare or make_cloudflare_client(),
            pattern_client=cloudfront or make_cloudfront_client(),
        )

    return factory
