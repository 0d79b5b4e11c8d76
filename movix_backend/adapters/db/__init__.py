"""Database adapters."""
from .schema import CURRENT_SCHEMA_VERSION, init_schema, migrate_schema
from .sqlite import Sqlite

__all__ = ["Sqlite", "init_schema", "migrate_schema", "CURRENT_SCHEMA_VERSION"]
