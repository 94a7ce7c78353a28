"""Errors raised while editing and saving a result grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app.save import BatchResult


class EditError(Exception):
    """Base class for editing errors."""


class ResolutionError(EditError):
    """The owning table cannot be derived from the originating statement."""

    def __init__(self, sql: str | None, reason: str | None = None) -> None:
        self.sql = sql
        message = reason or "Cannot determine the table to update; expected SELECT ... FROM <table>"
        super().__init__(message)


class StatementExecutionError(EditError):
    """A generated statement failed at the data source."""

    def __init__(self, statement: str, error: BaseException | str, *, database: str | None = None) -> None:
        self.statement = statement
        self.database = database
        self.error = error
        super().__init__(str(error))


class PartialSaveError(EditError):
    """Some statements of a save batch failed."""

    def __init__(self, batch: BatchResult) -> None:
        self.batch = batch
        super().__init__(
            f"Save incomplete: {batch.success_count} succeeded, {batch.failed_count} failed"
        )

    @property
    def success_count(self) -> int:
        return self.batch.success_count

    @property
    def failed_count(self) -> int:
        return self.batch.failed_count


class RefreshError(EditError):
    """Changes were saved but re-running the originating query failed."""


class ClipboardError(EditError):
    """Reading from or writing to the clipboard failed."""
