"""Redis-backed origin tag cache for tagpurge.

Example:
    from tagpurge import RevalidationConfig, build_service
    from tagpurge_redis import RedisTagCache

    origin = RedisTagCache(redis_url="redis://localhost:6379")
    service = build_service(RevalidationConfig(), origin_cache=origin)
"""

from tagpurge_redis.backend import RedisTagCache

__all__ = ["RedisTagCache"]
