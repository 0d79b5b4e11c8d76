"""
Filename search endpoint.
"""
from aiohttp import web

from movix_backend.shared import get_logger

from ..core import _error_response, _json_response, _require_services

logger = get_logger(__name__)


def register_search_routes(routes: web.RouteTableDef) -> None:
    """Register search routes."""

    @routes.get("/api/search")
    @routes.get("/api/search/{name:.*}")
    async def search_files(request: web.Request):
        """Every indexed file whose name contains `name` (ASCII case-insensitive)."""
        services, error = _require_services(request)
        if error:
            return _error_response(error, "Services are unavailable")

        result = await services["searcher"].search_by_name(request.match_info.get("name", ""))
        if not result.ok:
            return _error_response(result, "Search failed")
        return _json_response({"results": [record.to_dict() for record in result.data or []]})
