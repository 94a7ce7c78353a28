"""Protocols for dependency injection in sqledit services.

This module defines Protocol classes for the collaborators the edit engine
talks to: the statement executor, the clipboard and the status notifier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqledit.domains.results.model import QueryResult


@runtime_checkable
class StatementExecutorProtocol(Protocol):
    """Protocol for the query execution capability.

    Used to run generated statements and to refresh the grid afterwards.
    """

    async def execute(self, connection_id: str, sql: str, database: str | None = None) -> QueryResult:
        """Execute a statement.

        Args:
            connection_id: Identifier of the connection to run on.
            sql: The SQL statement.
            database: Database to run against; empty string for databases
                without a separate database concept.

        Returns:
            The statement result (empty columns for non-queries).

        Raises:
            Any exception raised by the underlying driver.
        """
        ...


@runtime_checkable
class ClipboardProtocol(Protocol):
    """Protocol for clipboard access."""

    async def read_text(self) -> str:
        """Return the clipboard text."""
        ...

    async def write_text(self, text: str) -> None:
        """Replace the clipboard text."""
        ...


@runtime_checkable
class NotifierProtocol(Protocol):
    """Protocol for user-visible status messages."""

    def notify(self, message: str, *, severity: str = "information") -> None:
        """Show a status message.

        Args:
            message: The message text.
            severity: One of "information", "warning" or "error".
        """
        ...
