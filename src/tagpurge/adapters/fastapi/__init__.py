"""FastAPI adapter for tagpurge.

Example:
    from tagpurge import RevalidationConfig
    from tagpurge.adapters.fastapi import create_app

    app = create_app(RevalidationConfig(), route_prefix="/api")

    # POST /api/revalidate
    #   x-revalidate-secret: <secret>
    #   {"tags": ["places", "regions"]}
"""

from tagpurge.adapters.fastapi.app import create_app
from tagpurge.adapters.fastapi.router import SECRET_HEADER, create_revalidate_router

__all__ = [
    "create_app",
    "create_revalidate_router",
    "SECRET_HEADER",
]
