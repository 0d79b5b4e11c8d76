import pytest

from movix_backend.features.index.entry_builder import record_from_relative
from movix_backend.features.index.searcher import MAX_SEARCH_QUERY_LENGTH


async def _seed(services, paths):
    res = await services["store"].upsert_if_absent([record_from_relative(p) for p in paths])
    assert res.ok, res.error


@pytest.mark.asyncio
async def test_search_substring_case_insensitive(services):
    await _seed(services, ["A/MyMovie.mp4", "B/clip.mkv"])

    res = await services["searcher"].search_by_name("mov")

    assert res.ok
    assert [r.file_name for r in res.data] == ["MyMovie.mp4"]


@pytest.mark.asyncio
async def test_search_matches_across_folders(services):
    await _seed(services, ["A/trip.mp4", "B/C/trip2.mkv", "D/other.mp4"])

    res = await services["searcher"].search_by_name("TRIP")

    assert [r.path for r in res.data] == ["A/trip.mp4", "B/C/trip2.mkv"]


@pytest.mark.asyncio
async def test_search_no_match_is_empty(services):
    await _seed(services, ["A/trip.mp4"])

    res = await services["searcher"].search_by_name("zzz")

    assert res.ok
    assert res.data == []


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", None])
async def test_empty_search_is_invalid_input(services, query):
    res = await services["searcher"].search_by_name(query)

    assert not res.ok
    assert res.code == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_overlong_search_is_invalid_input(services):
    res = await services["searcher"].search_by_name("a" * (MAX_SEARCH_QUERY_LENGTH + 1))

    assert res.code == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_find_by_name(services):
    await _seed(services, ["A/x.mp4"])

    found = await services["searcher"].find_by_name("x.mp4")
    assert found.ok
    assert found.data.path == "A/x.mp4"

    missing = await services["searcher"].find_by_name("X.mp4")
    assert missing.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_whitespace_query_is_a_valid_substring(services):
    await _seed(services, ["A/My Movie.mp4", "A/clip.mkv"])

    res = await services["searcher"].search_by_name(" ")

    assert res.ok
    assert [r.file_name for r in res.data] == ["My Movie.mp4"]
