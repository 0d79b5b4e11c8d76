"""
Single file lookup endpoint.
"""
from aiohttp import web

from ..core import _error_response, _json_response, _require_services


def register_file_routes(routes: web.RouteTableDef) -> None:
    """Register exact file-name lookup."""

    @routes.get("/api/file/{name}")
    async def get_file(request: web.Request):
        services, error = _require_services(request)
        if error:
            return _error_response(error, "Services are unavailable")

        result = await services["searcher"].find_by_name(request.match_info["name"])
        if not result.ok:
            return _error_response(result, "File lookup failed")
        return _json_response({"path": result.data.to_dict()})
