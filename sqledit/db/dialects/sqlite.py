"""SQLite dialect."""

from __future__ import annotations

from .base import SqlDialect


class SQLiteDialect(SqlDialect):
    """Dialect for SQLite.

    Identifiers are passed through unquoted and the database is the file the
    connection was opened on, so it never appears in statements.
    """

    @property
    def name(self) -> str:
        return "SQLite"

    @property
    def supports_database_prefix(self) -> bool:
        return False

    @property
    def has_database_concept(self) -> bool:
        return False

    def quote_identifier(self, name: str) -> str:
        return name
