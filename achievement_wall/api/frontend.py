"""
Client bundle hosting and fallback routes
"""

from fastapi import APIRouter, status
from fastapi.responses import FileResponse, JSONResponse
import os

from achievement_wall.core.exceptions import error_response
from achievement_wall.core.paths import resolve_inside

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_fallback_router(api_prefix: str, static_dir: str) -> APIRouter:
    """Routes that must be registered after every API router and mount.

    Unknown API paths get a JSON 404 for any method. Any other GET path is a
    file from the bundle when one exists, else the bundle's index.html so the
    client-side router can take over.
    """
    router = APIRouter(include_in_schema=False)

    @router.api_route(api_prefix + "/{rest:path}", methods=ALL_METHODS)
    async def unknown_api_route(rest: str) -> JSONResponse:
        return error_response(status.HTTP_404_NOT_FOUND, "API endpoint not found")

    @router.api_route("/{full_path:path}", methods=["GET", "HEAD"])
    async def serve_frontend(full_path: str):
        if full_path:
            file_path = resolve_inside(static_dir, full_path)
            if file_path and os.path.isfile(file_path):
                return FileResponse(file_path)

        index_path = os.path.join(static_dir, "index.html")
        if os.path.isfile(index_path):
            return FileResponse(index_path)
        return error_response(status.HTTP_404_NOT_FOUND, "Not found")

    @router.api_route("/{full_path:path}", methods=["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def unknown_route(full_path: str) -> JSONResponse:
        return error_response(status.HTTP_404_NOT_FOUND, "Not found")

    return router
