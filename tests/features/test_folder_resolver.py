import pytest

from movix_backend.features.browser import FolderTreeResolver, immediate_children
from movix_backend.features.index.entry_builder import record_from_relative


async def _seed(services, paths):
    res = await services["store"].upsert_if_absent([record_from_relative(p) for p in paths])
    assert res.ok, res.error


@pytest.mark.asyncio
async def test_resolve_root_lists_top_folders(services):
    await _seed(services, ["A/x.mp4", "B/y.mkv"])

    res = await services["browser"].resolve(".")

    assert res.ok
    node = res.data
    assert node.child_folders == ["A", "B"]
    assert node.files == []
    assert node.parent == "."
    assert node.cwd == "."


@pytest.mark.asyncio
async def test_resolve_folder_with_subfolder_and_file(services):
    await _seed(services, ["A/x.mp4", "A/C/z.mkv"])

    node = (await services["browser"].resolve("A")).data

    assert node.child_folders == ["C"]
    assert [f.file_name for f in node.files] == ["x.mp4"]
    assert node.parent == "."


@pytest.mark.asyncio
async def test_resolve_leaf_folder(services):
    await _seed(services, ["A/x.mp4", "A/C/z.mkv"])

    node = (await services["browser"].resolve("A/C")).data

    assert node.child_folders == []
    assert [f.file_name for f in node.files] == ["z.mkv"]
    assert node.parent == "A"


@pytest.mark.asyncio
async def test_root_level_files_do_not_appear_as_folder(services):
    await _seed(services, ["top.mp4", "A/x.mp4"])

    node = (await services["browser"].resolve("")).data

    assert node.child_folders == ["A"]
    assert [f.file_name for f in node.files] == ["top.mp4"]
    assert node.to_payload()["files"] == [{"FileName": "top.mp4", "Path": "top.mp4", "Folder": "."}]


@pytest.mark.asyncio
async def test_intermediate_folders_without_files_are_listed(services):
    await _seed(services, ["Movies/2020/Drama/a.mkv", "Movies/2021/b.mkv"])

    root = (await services["browser"].resolve(".")).data
    movies = (await services["browser"].resolve("/Movies/")).data

    assert root.child_folders == ["Movies"]
    assert movies.child_folders == ["2020", "2021"]
    assert movies.files == []
    assert movies.cwd == "Movies"


@pytest.mark.asyncio
async def test_sibling_prefix_is_not_a_child(services):
    await _seed(services, ["A/x.mp4", "AB/y.mp4"])

    node = (await services["browser"].resolve("A")).data

    assert node.child_folders == []
    assert [f.file_name for f in node.files] == ["x.mp4"]


@pytest.mark.asyncio
async def test_resolve_is_ascii_case_insensitive(services):
    await _seed(services, ["Anime/Show/e1.mkv", "Anime/e0.mkv"])

    node = (await services["browser"].resolve("anime")).data

    assert node.child_folders == ["Show"]
    assert [f.file_name for f in node.files] == ["e0.mkv"]


@pytest.mark.asyncio
async def test_unknown_folder_is_empty_node(services):
    await _seed(services, ["A/x.mp4"])

    res = await services["browser"].resolve("Nope/Deeper")

    assert res.ok
    assert res.data.to_payload() == {"folders": [], "files": [], "parent": "Nope", "cwd": "Nope/Deeper"}


@pytest.mark.asyncio
async def test_backslash_input_is_normalized(services):
    await _seed(services, ["A/C/z.mkv"])

    node = (await services["browser"].resolve("A\\C")).data

    assert node.cwd == "A/C"
    assert [f.file_name for f in node.files] == ["z.mkv"]


@pytest.mark.asyncio
async def test_store_failure_is_an_error(services):
    resolver = FolderTreeResolver(services["store"])
    await services["db"].aclose()

    res = await resolver.resolve("A")

    assert not res.ok
    assert res.code == "DB_ERROR"


def test_immediate_children_dedupes_and_sorts():
    values = ["A/C", "A/C/D", "A/B", "A", "A/B/E/F", "AB", "x"]
    assert immediate_children("A", values) == ["B", "C"]
    assert immediate_children(".", values + ["."]) == ["A", "AB", "x"]
