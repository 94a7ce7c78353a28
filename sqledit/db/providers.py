"""Canonical dialect registry.

This module is the single source of truth for:
- supported database kinds (db_type) and their aliases
- display names
- dialect classes (imported lazily)
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .dialects.base import SqlDialect


@dataclass(frozen=True)
class DialectSpec:
    db_type: str
    display_name: str
    dialect_path: tuple[str, str]


GENERIC_DB_TYPE = "generic"

PROVIDERS: dict[str, DialectSpec] = {
    "mysql": DialectSpec(
        db_type="mysql",
        display_name="MySQL",
        dialect_path=("sqledit.db.dialects.mysql", "MySQLDialect"),
    ),
    "postgres": DialectSpec(
        db_type="postgres",
        display_name="PostgreSQL",
        dialect_path=("sqledit.db.dialects.postgresql", "PostgreSQLDialect"),
    ),
    "mssql": DialectSpec(
        db_type="mssql",
        display_name="SQL Server",
        dialect_path=("sqledit.db.dialects.mssql", "SQLServerDialect"),
    ),
    "sqlite": DialectSpec(
        db_type="sqlite",
        display_name="SQLite",
        dialect_path=("sqledit.db.dialects.sqlite", "SQLiteDialect"),
    ),
    GENERIC_DB_TYPE: DialectSpec(
        db_type=GENERIC_DB_TYPE,
        display_name="Generic SQL",
        dialect_path=("sqledit.db.dialects.generic", "GenericDialect"),
    ),
}

ALIASES: dict[str, str] = {
    "postgresql": "postgres",
    "mariadb": "mysql",
    "sqlserver": "mssql",
    "sqlite3": "sqlite",
}


def normalize_db_type(db_type: str | None) -> str:
    """Map a database-kind tag (or alias) to its canonical registry key.

    Unknown tags map to the generic passthrough dialect.
    """
    key = (db_type or "").strip().lower()
    key = ALIASES.get(key, key)
    return key if key in PROVIDERS else GENERIC_DB_TYPE


def get_supported_db_types() -> list[str]:
    return [db_type for db_type in PROVIDERS if db_type != GENERIC_DB_TYPE]


def get_provider_spec(db_type: str | None) -> DialectSpec:
    return PROVIDERS[normalize_db_type(db_type)]


@lru_cache(maxsize=None)
def _load_dialect(db_type: str) -> SqlDialect:
    module_name, class_name = PROVIDERS[db_type].dialect_path
    module = import_module(module_name)
    dialect_class = getattr(module, class_name)
    return dialect_class()


def get_dialect(db_type: str | SqlDialect | None) -> SqlDialect:
    """Return the dialect instance for a database-kind tag.

    Dialect instances are passed through unchanged so callers can accept
    either form.
    """
    from .dialects.base import SqlDialect

    if isinstance(db_type, SqlDialect):
        return db_type
    return _load_dialect(normalize_db_type(db_type))
