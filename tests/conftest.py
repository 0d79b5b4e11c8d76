import sys
from pathlib import Path

import pytest
import pytest_asyncio

from fs_helpers import make_tree
from repo_root import REPO_ROOT

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def media_tree(tmp_path):
    root = tmp_path / "media"
    root.mkdir()

    def _build(relpaths: list[str]) -> Path:
        make_tree(root, relpaths)
        return root

    return _build


@pytest_asyncio.fixture
async def services(tmp_path):
    from movix_backend.deps import build_services, dispose_services

    db_path = str(tmp_path / "test_services.db")
    svc_res = await build_services(db_path)
    assert svc_res.ok, svc_res.error
    svc = svc_res.data
    try:
        yield svc
    finally:
        await dispose_services(svc)
