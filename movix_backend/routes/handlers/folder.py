"""
Folder browse endpoint.
"""
from aiohttp import web

from movix_backend.shared import get_logger

from ..core import _error_response, _json_response, _require_services

logger = get_logger(__name__)


def register_folder_routes(routes: web.RouteTableDef) -> None:
    """Register folder browsing routes."""

    @routes.get("/api/folder")
    @routes.get("/api/folder/{path:.*}")
    async def browse_folder(request: web.Request):
        """
        List the immediate subfolders and direct files of a folder.

        An empty path is the scan root. Unknown folders come back empty.
        """
        services, error = _require_services(request)
        if error:
            return _error_response(error, "Services are unavailable")

        result = await services["browser"].resolve(request.match_info.get("path", ""))
        if not result.ok:
            return _error_response(result, "Failed to list folder")
        return _json_response(result.data.to_payload())
