"""SQL dialect rules: identifier quoting, literal escaping, table qualification."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqledit.db.providers import get_dialect

from .base import SqlDialect

if TYPE_CHECKING:
    DialectLike = str | SqlDialect | None


def quote_identifier(name: str, dialect: DialectLike) -> str:
    """Quote an identifier for the given dialect."""
    return get_dialect(dialect).quote_identifier(name)


def escape_value(value: Any, dialect: DialectLike) -> str:
    """Render a value as an inline SQL literal for the given dialect."""
    return get_dialect(dialect).escape_value(value)


def qualify_table(table: str, dialect: DialectLike, database: str | None = None) -> str:
    """Build the quoted, optionally database-qualified table name."""
    return get_dialect(dialect).qualify_table(table, database)


__all__ = [
    "SqlDialect",
    "escape_value",
    "get_dialect",
    "qualify_table",
    "quote_identifier",
]
