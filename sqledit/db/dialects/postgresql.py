"""PostgreSQL dialect."""

from __future__ import annotations

from .base import SqlDialect


class PostgreSQLDialect(SqlDialect):
    """Dialect for PostgreSQL.

    Each PostgreSQL connection is bound to one database, and a two-part
    name means ``schema.table``, so tables are never database-qualified.
    """

    @property
    def name(self) -> str:
        return "PostgreSQL"

    @property
    def supports_database_prefix(self) -> bool:
        return False

    @property
    def true_literal(self) -> str:
        return "TRUE"

    @property
    def false_literal(self) -> str:
        return "FALSE"

    def quote_identifier(self, name: str) -> str:
        """Quote identifier using double quotes for PostgreSQL.

        Escapes embedded double quotes by doubling them.
        """
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def contains_predicate(self, column: str, pattern: str) -> str:
        return f"LOWER({column}::text) LIKE LOWER({pattern})"
