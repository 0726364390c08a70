"""FastAPI route for the revalidation endpoint."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from tagpurge.core.services.authenticator import AuditContext
from tagpurge.core.services.revalidation_service import RevalidationService

logger = logging.getLogger(__name__)

SECRET_HEADER = "x-revalidate-secret"
METHOD_NOT_ALLOWED = {"error": "Method not allowed. Use POST."}
GENERIC_ERROR = "Failed to revalidate cache"


def create_revalidate_router(
    service: RevalidationService,
    path: str = "/revalidate",
) -> APIRouter:
    """Create the router exposing ``POST {path}``.

    Only authentication (401) and validation (400) failures produce
    non-200 responses under normal operation. Anything else that escapes
    the pipeline is logged and answered with a generic 500.

    Args:
        service: The revalidation service to drive.
        path: Route path.

    Returns:
        An APIRouter ready to be included in an application.
    """
    router = APIRouter()

    @router.post(path)
    async def revalidate(request: Request) -> JSONResponse:
        try:
            context = AuditContext(
                path=request.url.path,
                headers=dict(request.headers),
                client_host=request.client.host if request.client else None,
            )
            if not service.authenticator.authenticate(
                request.headers.get(SECRET_HEADER), context
            ):
                return JSONResponse({"error": "Unauthorized"}, status_code=401)

            validation = service.validator.parse_body(await request.body())
            if validation.request is None:
                return JSONResponse({"error": validation.error}, status_code=400)

            response = await service.revalidate(validation.request)
            return JSONResponse(response.to_dict(), status_code=200)
        except Exception:
            logger.exception("%s error", path)
            return JSONResponse({"error": GENERIC_ERROR}, status_code=500)

    @router.api_route(path, methods=["GET", "PUT", "DELETE"], include_in_schema=False)
    async def method_not_allowed() -> JSONResponse:
        return JSONResponse(METHOD_NOT_ALLOWED, status_code=405, headers={"Allow": "POST"})

    return router
