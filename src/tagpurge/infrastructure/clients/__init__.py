"""Remote invalidation clients."""

from tagpurge.infrastructure.clients.cloudflare import CloudflarePurgeClient
from tagpurge.infrastructure.clients.cloudfront import CloudFrontInvalidationClient

__all__ = [
    "CloudflarePurgeClient",
    "CloudFrontInvalidationClient",
]
