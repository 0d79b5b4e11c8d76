import logging

import pytest

from movix_shared import (
    ErrorCode,
    Result,
    get_logger,
    is_video_file,
    log_success,
    request_id_var,
    sanitize_error_message,
)
from movix_shared.log import SUCCESS_LEVEL, CorrelationFilter, EmojiFormatter


def test_result_ok_and_err():
    ok = Result.Ok([1, 2], source="test")
    assert ok.ok and ok.code == "OK" and ok.meta == {"source": "test"}
    assert ok.unwrap() == [1, 2]

    err = Result.Err(ErrorCode.DB_ERROR, "boom")
    assert not err.ok
    assert err.code == "DB_ERROR"
    assert err.unwrap_or([]) == []
    with pytest.raises(ValueError):
        err.unwrap()


def test_result_map_keeps_errors():
    assert Result.Ok(2).map(lambda v: v * 3).data == 6
    err = Result.Err("NOT_FOUND", "missing")
    assert err.map(lambda v: v * 3) is err


@pytest.mark.parametrize(
    "name, expected",
    [
        ("movie.mp4", True),
        ("MOVIE.MKV", True),
        ("clip.Mp4", True),
        ("notes.txt", False),
        ("archive.mp4.part", False),
        ("mp4", False),
    ],
)
def test_is_video_file(name, expected):
    assert is_video_file(name) is expected


def test_sanitize_error_message_masks_paths():
    msg = sanitize_error_message("unable to open /srv/media/movies.db", "Query failed")
    assert msg.startswith("Query failed: ")
    assert "/srv/media" not in msg
    assert "[path]" in msg


def test_sanitize_error_message_fallbacks():
    assert sanitize_error_message(None, "Search failed") == "Search failed"
    assert sanitize_error_message("", "") == "An error occurred"


def test_get_logger_strips_package_prefix():
    logger = get_logger("movix_backend.features.index.store")
    assert logger.name == "movix.features.index.store"
    assert logger.propagate is False
    assert any(isinstance(f, CorrelationFilter) for f in logger.filters)


def test_log_success_uses_success_level(caplog):
    logger = get_logger("tests.success")
    logger.propagate = True
    try:
        with caplog.at_level(logging.INFO, logger=logger.name):
            log_success(logger, "Seeded %d movies", 3)
    finally:
        logger.propagate = False
    assert any(r.levelno == SUCCESS_LEVEL and r.getMessage() == "Seeded 3 movies" for r in caplog.records)


def test_formatter_includes_request_id():
    record = logging.LogRecord("movix.test", logging.WARNING, __file__, 1, "hello", None, None)
    token = request_id_var.set("abc123")
    try:
        CorrelationFilter().filter(record)
    finally:
        request_id_var.reset(token)
    line = EmojiFormatter().format(record)
    assert "[abc123]" in line
    assert line.endswith("hello")
