"""
Configuration for the Movix video index.

Values are read from the environment once at import; the command line in
`movix_backend.__main__` can override the scan root, database, host and port.
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_float(default: float, *names: str, min_value: float | None = None, max_value: float | None = None) -> float:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid float for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


_BOOL_TRUE_VALUES = frozenset({"1", "true", "yes", "on", "enabled"})
_BOOL_FALSE_VALUES = frozenset({"0", "false", "no", "off", "disabled"})


def _env_bool(default: bool, *names: str) -> bool:
    raw = _env_raw(*names)
    if raw is None:
        return default
    value = raw.lower()
    if value in _BOOL_TRUE_VALUES:
        return True
    if value in _BOOL_FALSE_VALUES:
        return False
    logger.warning("Invalid boolean for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
    return default


def _resolve_scan_root() -> Path:
    env_path = _env_raw("MOVIX_SCAN_ROOT")
    if env_path:
        try:
            return Path(env_path).expanduser().resolve()
        except (OSError, RuntimeError):
            logger.warning("Failed to resolve MOVIX_SCAN_ROOT: %s, using working directory", env_path)
    return Path.cwd().resolve()


def _resolve_index_db() -> Path:
    env_path = _env_raw("MOVIX_INDEX_DB")
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / "movies.db"


# Paths
SCAN_ROOT = _resolve_scan_root()
INDEX_DB = str(_resolve_index_db())

# HTTP
HOST = _env_raw("MOVIX_HOST", default="0.0.0.0") or "0.0.0.0"
PORT = _env_int(800, "MOVIX_PORT", min_value=1, max_value=65535)
API_PREFIX = "/api/"
PUBLIC_PREFIX = "/public"

# Database
DB_TIMEOUT = _env_float(5.0, "MOVIX_DB_TIMEOUT", min_value=0.1)
DB_QUERY_TIMEOUT = _env_float(0.0, "MOVIX_DB_QUERY_TIMEOUT", min_value=0.0)
DB_MAX_CONNECTIONS = _env_int(8, "MOVIX_DB_MAX_CONNECTIONS", min_value=1, max_value=64)

# Observability
OBS_SLOW_MS = _env_float(750.0, "MOVIX_OBS_SLOW_MS", min_value=0.0)
OBS_LOG_ALL = _env_bool(False, "MOVIX_OBS_LOG_ALL")

# Search
SEARCH_MAX_QUERY_LENGTH = _env_int(256, "MOVIX_SEARCH_MAX_QUERY_LENGTH", min_value=1, max_value=4096)
