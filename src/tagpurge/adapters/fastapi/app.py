"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from tagpurge.adapters.fastapi.router import create_revalidate_router
from tagpurge.core.entities.revalidation_config import RevalidationConfig
from tagpurge.core.interfaces.local_cache import ILocalCacheRegistry
from tagpurge.core.services.revalidation_service import RevalidationService
from tagpurge.factory import build_local_caches, build_service

logger = logging.getLogger(__name__)


def create_app(
    config: RevalidationConfig | None = None,
    service: RevalidationService | None = None,
    local_caches: ILocalCacheRegistry | None = None,
    route_prefix: str = "",
) -> FastAPI:
    """Create an ASGI application serving the revalidation endpoint.

    The local cache store is created here, shared by every request for
    the life of the process, and torn down on shutdown.

    Args:
        config: Configuration. Read from the environment if omitted.
        service: Pre-built service. Built from ``config`` if omitted.
        local_caches: Local cache store. Taken from ``service`` when one
            is given, otherwise built from ``config``.
        route_prefix: Prefix for every route, e.g. ``"/api"``.

    Returns:
        The FastAPI application.

    Raises:
        ValueError: If ``local_caches`` is not the store ``service`` clears.
    """
    config = config or RevalidationConfig()
    if service is None:
        if local_caches is None:
            local_caches = build_local_caches(config)
        service = build_service(config, local_caches=local_caches)
    elif local_caches is None:
        local_caches = service.local_caches
    elif local_caches is not service.local_caches:
        raise ValueError("local_caches must be the store the service clears")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Revalidation ready: %d local caches, cloudflare=%s, cloudfront=%s",
            len(local_caches),
            "on" if config.cloudflare_configured else "skipped",
            "on" if config.cloudfront_configured else "skipped",
        )
        yield
        logger.info("Tearing down local caches")
        local_caches.close()

    app = FastAPI(
        title="tagpurge",
        description="Tag-scoped cache revalidation across local, origin and edge caches",
        lifespan=lifespan,
    )
    app.state.revalidation_service = service
    app.state.local_caches = local_caches

    app.include_router(create_revalidate_router(service), prefix=route_prefix)

    @app.get(f"{route_prefix}/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "secret_configured": service.authenticator.configured,
            "backends": {
                backend.name: "configured" if backend.configured else "skipped"
                for backend in service.backends
            },
        }

    return app
