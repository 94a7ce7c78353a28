"""Base class for SQL dialects.

A dialect knows how to quote identifiers, render literals and qualify
table names for one family of databases. Values are always inlined as SQL
literals; nothing here produces bound parameters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from sqledit.shared.core.values import to_json_text


class SqlDialect(ABC):
    """Abstract base class for SQL dialects."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this dialect."""
        pass

    @property
    def supports_database_prefix(self) -> bool:
        """Whether ``database.table`` can be used in a statement.

        False for databases where the active database is bound to the
        connection rather than named in the statement.
        """
        return True

    @property
    def has_database_concept(self) -> bool:
        """Whether connections of this kind take a separate database name."""
        return True

    @property
    def true_literal(self) -> str:
        return "1"

    @property
    def false_literal(self) -> str:
        return "0"

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote an identifier (table name, column name, etc.)."""
        pass

    def escape_string(self, text: str) -> str:
        """Render text as a single-quoted literal, doubling embedded quotes."""
        escaped = text.replace("'", "''")
        return f"'{escaped}'"

    def escape_value(self, value: Any) -> str:
        """Render a cell value as a SQL literal."""
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return self.true_literal if value else self.false_literal
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, (dict, list, tuple)):
            return self.escape_string(to_json_text(value))
        return self.escape_string(str(value))

    def qualify_table(self, table: str, database: str | None = None) -> str:
        """Build a quoted, optionally database-qualified table name."""
        quoted_table = self.quote_identifier(table)
        if database and self.supports_database_prefix:
            return f"{self.quote_identifier(database)}.{quoted_table}"
        return quoted_table

    def contains_predicate(self, column: str, pattern: str) -> str:
        """Case-insensitive LIKE predicate for an already-quoted column and literal."""
        return f"LOWER({column}) LIKE LOWER({pattern})"
