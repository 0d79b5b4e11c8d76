"""
Landing page.
"""
from pathlib import Path

from aiohttp import web

WEB_DIR = Path(__file__).resolve().parents[2] / "web"
INDEX_HTML = WEB_DIR / "index.html"


def register_page_routes(routes: web.RouteTableDef) -> None:
    @routes.get("/")
    async def index_page(_request: web.Request):
        return web.FileResponse(INDEX_HTML)
