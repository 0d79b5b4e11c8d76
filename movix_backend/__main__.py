"""
Command line entry point: `python -m movix_backend`.
"""
import argparse
import sys

from aiohttp import web

from .app import StartupError, create_app
from .config import HOST, INDEX_DB, PORT, SCAN_ROOT
from .shared import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="movix",
        description="Index local video files and serve them over HTTP",
    )
    parser.add_argument("--root", default=str(SCAN_ROOT), help="Directory to scan (default: %(default)s)")
    parser.add_argument("--db", default=INDEX_DB, help="SQLite index file (default: %(default)s)")
    parser.add_argument("--host", default=HOST, help="Bind address (default: %(default)s)")
    parser.add_argument("--port", type=int, default=PORT, help="Listen port (default: %(default)s)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    app = create_app(scan_root=args.root, db_path=args.db)
    try:
        web.run_app(app, host=args.host, port=args.port, print=logger.info)
    except StartupError as exc:
        logger.critical("Startup failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
