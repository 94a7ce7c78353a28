"""MySQL / MariaDB dialect."""

from __future__ import annotations

from .base import SqlDialect


class MySQLDialect(SqlDialect):
    """Dialect for MySQL and MariaDB."""

    @property
    def name(self) -> str:
        return "MySQL"

    def quote_identifier(self, name: str) -> str:
        """Quote identifier using backticks for MySQL.

        Escapes embedded backticks by doubling them.
        """
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
