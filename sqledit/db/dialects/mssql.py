"""SQL Server dialect."""

from __future__ import annotations

from .base import SqlDialect


class SQLServerDialect(SqlDialect):
    """Dialect for Microsoft SQL Server."""

    @property
    def name(self) -> str:
        return "SQL Server"

    def quote_identifier(self, name: str) -> str:
        """Quote identifier using square brackets for SQL Server.

        Escapes embedded closing brackets by doubling them.
        """
        escaped = name.replace("]", "]]")
        return f"[{escaped}]"

    def contains_predicate(self, column: str, pattern: str) -> str:
        return f"{column} LIKE {pattern} COLLATE SQL_Latin1_General_CP1_CI_AS"
