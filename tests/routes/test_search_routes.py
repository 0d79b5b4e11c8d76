from pathlib import Path

import pytest
from aiohttp.test_utils import TestClient, TestServer

from movix_backend.app import create_app
from movix_backend.routes.core import APP_KEY_SERVICES
from fs_helpers import make_tree


@pytest.mark.asyncio
async def test_search_endpoint(tmp_path: Path):
    root = tmp_path / "media"
    make_tree(root, ["A/MyMovie.mp4", "B/clip.mkv", "B/My Movie 2.mkv"])
    app = create_app(scan_root=root, db_path=str(tmp_path / "movies.db"))

    client = TestClient(TestServer(app))
    await client.start_server()
    try:
        resp = await client.get("/api/search/mov")
        assert resp.status == 200
        payload = await resp.json()
        assert [r["FileName"] for r in payload["results"]] == ["MyMovie.mp4", "My Movie 2.mkv"]

        resp = await client.get("/api/search/My%20Movie")
        payload = await resp.json()
        assert [r["Path"] for r in payload["results"]] == ["B/My Movie 2.mkv"]

        resp = await client.get("/api/search/%20")
        payload = await resp.json()
        assert resp.status == 200
        assert [r["FileName"] for r in payload["results"]] == ["My Movie 2.mkv"]

        resp = await client.get("/api/search/nothing-here")
        assert resp.status == 200
        assert await resp.json() == {"results": []}
    finally:
        await client.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/search/", "/api/search"])
async def test_empty_search_is_400(tmp_path: Path, path: str):
    app = create_app(scan_root=tmp_path, db_path=str(tmp_path / "movies.db"))

    client = TestClient(TestServer(app))
    await client.start_server()
    try:
        resp = await client.get(path)
        assert resp.status == 400
        payload = await resp.json()
        assert set(payload) == {"error"}
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_search_store_failure_is_500(tmp_path: Path):
    app = create_app(scan_root=tmp_path, db_path=str(tmp_path / "movies.db"))

    client = TestClient(TestServer(app))
    await client.start_server()
    try:
        await app[APP_KEY_SERVICES]["db"].aclose()
        resp = await client.get("/api/search/mov")
        assert resp.status == 500
        assert "error" in await resp.json()
    finally:
        await client.close()
