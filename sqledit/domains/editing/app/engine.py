"""Edit engine: spreadsheet-style editing over a query result.

The engine owns the baseline result, the edited grid, the modification
ledger, the undo history and the cell selection. Every mutation replaces the
grid and ledger wholesale, so a reader always sees a complete state.

Cells are addressed by their position in the original, unfiltered result;
use ``ResultView.original_row`` to translate display rows first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from sqledit.config import DEFAULT_DIALECT, EditorSettings, load_settings
from sqledit.db.providers import get_dialect
from sqledit.domains.editing.clipboard import MemoryClipboard, SystemClipboard, format_cells, parse_clipboard_text
from sqledit.domains.editing.exceptions import (
    ClipboardError,
    EditError,
    PartialSaveError,
    RefreshError,
    ResolutionError,
)
from sqledit.domains.editing.state.history import MAX_HISTORY_SIZE, EditHistory, HistoryEntry
from sqledit.domains.editing.state.ledger import CellCoordinate, CellModification, ModificationLedger
from sqledit.domains.editing.state.selection import CellSelection
from sqledit.domains.results.model import QueryResult
from sqledit.shared.core.notify import MessageLog
from sqledit.shared.core.values import cell_text, values_equal

from .save import BatchResult, BatchStatementExecutor
from .synthesis import (
    resolve_target,
    synthesize_inserts,
    synthesize_row_updates,
    synthesize_updates,
    target_database,
)

if TYPE_CHECKING:
    from sqledit.db.dialects.base import SqlDialect
    from sqledit.shared.core.protocols import (
        ClipboardProtocol,
        NotifierProtocol,
        StatementExecutorProtocol,
    )


def _text_to_value(text: str) -> str | None:
    return None if not text.strip() else text


class EditEngine:
    """Tracks cell edits against a baseline result and turns them into SQL.

    Usage:
        engine = EditEngine(result, "SELECT * FROM users", dialect="mysql")
        engine.enter_edit_mode()
        engine.begin_cell_edit(0, 1)
        engine.set_editing_value("Alice2")
        engine.commit_cell_edit(0, 1)
        await engine.save()
    """

    def __init__(
        self,
        result: QueryResult,
        sql: str | None = None,
        *,
        dialect: str | SqlDialect | None = DEFAULT_DIALECT,
        executor: StatementExecutorProtocol | None = None,
        connection_id: str | None = None,
        database: str | None = None,
        clipboard: ClipboardProtocol | None = None,
        notifier: NotifierProtocol | None = None,
        history_limit: int = MAX_HISTORY_SIZE,
    ) -> None:
        """Initialize the engine.

        Args:
            result: Baseline result of the originating query.
            sql: The originating query; needed to save and to refresh.
            dialect: Database-kind tag (``mysql``, ``postgres``, ``mssql``,
                ``sqlite``, ...) or a dialect instance.
            executor: Execution capability used by ``save``.
            connection_id: Connection the executor should run on.
            database: Currently selected database, used when the query does
                not name one.
            clipboard: Clipboard backend; an in-process buffer by default.
            notifier: Status message sink; a MessageLog by default.
            history_limit: Maximum number of undo entries.
        """
        self._dialect = get_dialect(dialect)
        self._sql = sql
        self._executor = executor
        self._connection_id = connection_id
        self._database = database
        self._clipboard: ClipboardProtocol = clipboard if clipboard is not None else MemoryClipboard()
        self._notifier: NotifierProtocol = notifier if notifier is not None else MessageLog()
        self._history = EditHistory(history_limit)
        self._selection = CellSelection()
        self._edit_mode = False
        self._saving = False
        self._reset_state(result)

    @classmethod
    def from_settings(
        cls,
        result: QueryResult,
        sql: str | None = None,
        *,
        settings: EditorSettings | None = None,
        **kwargs: Any,
    ) -> EditEngine:
        """Build an engine configured from editor settings.

        Explicit keyword arguments win over the settings.
        """
        if settings is None:
            settings = load_settings()
        kwargs.setdefault("dialect", settings.default_dialect)
        kwargs.setdefault("history_limit", settings.history_limit)
        if "clipboard" not in kwargs:
            kwargs["clipboard"] = SystemClipboard() if settings.use_system_clipboard else MemoryClipboard()
        if "notifier" not in kwargs:
            kwargs["notifier"] = MessageLog(settings.max_log_messages)
        return cls(result, sql, **kwargs)

    # State

    @property
    def baseline(self) -> QueryResult:
        return self._baseline

    @property
    def edited_grid(self) -> QueryResult:
        return self._edited

    @property
    def ledger(self) -> ModificationLedger:
        return dict(self._ledger)

    @property
    def modifications(self) -> list[CellModification]:
        return list(self._ledger.values())

    @property
    def has_changes(self) -> bool:
        return bool(self._ledger)

    @property
    def selection(self) -> CellSelection:
        return self._selection

    @property
    def history(self) -> EditHistory:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def dialect(self) -> SqlDialect:
        return self._dialect

    @property
    def sql(self) -> str | None:
        return self._sql

    @property
    def notifier(self) -> NotifierProtocol:
        return self._notifier

    @property
    def edit_mode(self) -> bool:
        return self._edit_mode

    @property
    def editing_cell(self) -> CellCoordinate | None:
        return self._editing_cell

    @property
    def editing_value(self) -> str:
        return self._editing_value

    @property
    def is_saving(self) -> bool:
        return self._saving

    def database_param(self, database: str | None) -> str | None:
        """Database argument for the executor.

        Empty string for dialects without a database concept, else the
        database name (or None when unknown).
        """
        if not self._dialect.has_database_concept:
            return ""
        return database or None

    # Lifecycle

    def load_result(self, result: QueryResult, sql: str | None = None) -> None:
        """Replace the baseline with a new result, discarding all edit state."""
        if sql is not None:
            self._sql = sql
        self._reset_state(result)

    def enter_edit_mode(self) -> None:
        if self._edit_mode:
            return
        self._reset_state(self._baseline)
        self._edit_mode = True

    def exit_edit_mode(self, discard: bool = False) -> bool:
        """Leave edit mode.

        Refuses (returns False) while unsaved modifications exist unless
        ``discard`` is set.
        """
        if self._save_in_progress():
            return False
        if self._ledger and not discard:
            self._notifier.notify(
                f"{len(self._ledger)} unsaved change(s); save or discard them first",
                severity="warning",
            )
            return False
        self._reset_state(self._baseline)
        self._edit_mode = False
        return True

    def reset_all(self) -> None:
        """Discard every modification and return to the baseline."""
        if self._save_in_progress():
            return
        self._reset_state(self._baseline)
        self._notifier.notify("All changes discarded")

    # Single-cell editing

    def begin_cell_edit(self, row: int, col: int) -> bool:
        if not self._edit_mode or not self._edited.contains(row, col):
            return False
        self._editing_cell = CellCoordinate(row, col)
        self._editing_value = cell_text(self._edited.rows[row][col])
        return True

    def set_editing_value(self, text: str) -> None:
        if self._editing_cell is not None:
            self._editing_value = text

    def cancel_cell_edit(self) -> None:
        self._editing_cell = None
        self._editing_value = ""

    def commit_cell_edit(self, row: int, col: int) -> bool:
        """Commit the pending edit of (row, col).

        Returns True when the cell changed. Committing the cell's current
        value is a no-op that writes neither history nor the ledger, and
        committing its baseline value drops its ledger entry. While a save
        is running the pending edit is kept and nothing is committed.
        """
        cell = CellCoordinate(row, col)
        if self._editing_cell != cell:
            return False
        if self._save_in_progress():
            return False
        new_value = _text_to_value(self._editing_value)
        self.cancel_cell_edit()
        if not self._edited.contains(row, col):
            return False
        if values_equal(self._edited.rows[row][col], new_value):
            return False

        self._push_history()
        self._apply({cell: new_value})
        column = self._edited.columns[col]
        self._notifier.notify(f"Modified: {column} = {'NULL' if new_value is None else new_value}")
        return True

    # Multi-cell editing

    def batch_edit(self, text: str, selection: CellSelection | None = None) -> int:
        """Type ``text`` into every selected cell.

        The first keystroke replaces the selected values; while every
        selected cell still holds the same edited value, later keystrokes
        append to it. Divergent values are replaced uniformly.

        Returns:
            Number of cells changed.
        """
        if self._save_in_progress():
            return 0
        cells = self._cells_in_range(self._selection if selection is None else selection)
        if not cells:
            return 0

        current_texts = []
        for cell in cells:
            current = self._edited.rows[cell.row][cell.col]
            if cell not in self._ledger and values_equal(current, self._baseline.rows[cell.row][cell.col]):
                current_texts.append("")
            else:
                current_texts.append(cell_text(current))

        prefix = ""
        if any(current_texts) and all(t == current_texts[0] for t in current_texts):
            prefix = current_texts[0]
        new_value = _text_to_value(prefix + text)

        changes = {
            cell: new_value
            for cell in cells
            if not values_equal(self._edited.rows[cell.row][cell.col], new_value)
        }
        if not changes:
            return 0

        self._push_history()
        self._apply(changes)
        self._notifier.notify(f"Batch edited {len(changes)} cell(s)")
        return len(changes)

    # Clipboard

    def copy_selection(self, selection: CellSelection | None = None) -> str:
        """Render the selected cells of the edited grid as clipboard text."""
        selection = self._selection if selection is None else selection
        if selection.is_empty:
            return ""
        return self._format_selection(selection)[0]

    async def copy_to_clipboard(self, selection: CellSelection | None = None) -> str:
        """Copy the selected cells to the clipboard.

        Returns the copied text, or an empty string when nothing was copied.
        """
        selection = self._selection if selection is None else selection
        if selection.is_empty:
            return ""
        text, row_count, col_count = self._format_selection(selection)
        try:
            await self._clipboard.write_text(text)
        except ClipboardError as e:
            self._notifier.notify(f"Copy failed: {e}", severity="error")
            return ""
        self._notifier.notify(f"Copied {row_count} row(s), {col_count} column(s)")
        return text

    def paste_text(self, text: str, selection: CellSelection | None = None) -> int:
        """Paste clipboard text into the selection.

        A single value is broadcast to every selected cell; a grid of values
        is mapped by offset from the selection's top-left corner.

        Returns:
            Number of cells changed.
        """
        if self._save_in_progress():
            return 0
        selection = self._selection if selection is None else selection
        if selection.is_empty:
            self._notifier.notify("Paste failed: no cells selected", severity="warning")
            return 0
        parsed = parse_clipboard_text(text or "")
        if not parsed:
            self._notifier.notify("Paste failed: clipboard is empty", severity="warning")
            return 0

        targets: dict[CellCoordinate, Any] = {}
        if len(parsed) == 1 and len(parsed[0]) == 1:
            value = _text_to_value(parsed[0][0].strip())
            for cell in selection:
                targets[cell] = value
        else:
            bounds = selection.bounding_range
            for cell in selection:
                row_offset = cell.row - bounds.start_row
                col_offset = cell.col - bounds.start_col
                if row_offset >= len(parsed) or col_offset >= len(parsed[row_offset]):
                    continue
                field = parsed[row_offset][col_offset].strip()
                if field:
                    targets[cell] = field

        changes: dict[CellCoordinate, Any] = {}
        for cell, value in targets.items():
            if not self._edited.contains(cell.row, cell.col):
                continue
            if values_equal(self._edited.rows[cell.row][cell.col], value):
                continue
            changes[cell] = value

        if not changes:
            self._notifier.notify("Paste complete, but no cell changed")
            return 0

        self._push_history()
        self._apply(changes)
        self._notifier.notify(f"Pasted {len(changes)} cell(s)")
        return len(changes)

    async def paste_from_clipboard(self, selection: CellSelection | None = None) -> int:
        """Read the clipboard and paste it into the selection."""
        selection = self._selection if selection is None else selection
        if selection.is_empty:
            self._notifier.notify("Paste failed: no cells selected", severity="warning")
            return 0
        try:
            text = await self._clipboard.read_text()
        except ClipboardError as e:
            self._notifier.notify(f"Paste failed: {e}", severity="error")
            return 0
        return self.paste_text(text, selection)

    # History

    def undo(self) -> bool:
        if self._save_in_progress():
            return False
        if not self._history.can_undo:
            self._notifier.notify("Nothing to undo")
            return False
        if not self._history.can_redo:
            # Undoing from the newest state; keep it so redo can return here
            self._redo_tip = HistoryEntry(edited_grid=self._edited.copy(), ledger=dict(self._ledger))
        entry = self._history.undo()
        self._restore(entry)
        self._notifier.notify("Undid last change")
        return True

    def redo(self) -> bool:
        if self._save_in_progress():
            return False
        entry = self._history.redo()
        if entry is None:
            self._notifier.notify("Nothing to redo")
            return False
        # Entries hold pre-mutation states, so the state to return to is the next one
        target = self._history.entry_at(self._history.index + 1) or self._redo_tip or entry
        self._restore(target)
        self._notifier.notify("Redid change")
        return True

    # SQL

    def update_statements(self) -> list[str]:
        """UPDATE statements for the current ledger.

        Raises:
            ResolutionError: The table cannot be derived from the query.
        """
        return synthesize_updates(self._ledger, self._sql, self._baseline, self._dialect, self._database)

    def insert_statement_for_rows(self, rows: Iterable[int]) -> str | None:
        """Multi-row INSERT duplicating the given rows of the edited grid."""
        return synthesize_inserts(rows, self._sql, self._edited, self._dialect, self._database)

    def update_statements_for_rows(self, rows: Iterable[int]) -> list[str]:
        """Full-row UPDATEs writing the edited values of the given rows."""
        return synthesize_row_updates(rows, self._sql, self._edited, self._baseline, self._dialect, self._database)

    async def save(self) -> BatchResult | None:
        """Apply the ledger to the database and refresh from the query.

        Statements run one at a time; a failed statement does not stop the
        rest. On any failure the ledger is kept so the save can be retried.

        Returns:
            The batch result, or None when nothing was saved (no changes or
            a save already running).

        Raises:
            ResolutionError: The table cannot be derived from the query.
            PartialSaveError: One or more statements failed.
            RefreshError: Changes were saved but the refresh query failed.
            EditError: No executor is configured.
        """
        if self._saving:
            self._notifier.notify("Save already in progress", severity="warning")
            return None
        if not self._ledger:
            self._notifier.notify("No changes to save")
            return None
        if self._executor is None:
            self._notifier.notify("Save failed: no connection selected", severity="error")
            raise EditError("No connection selected")

        self._saving = True
        try:
            try:
                reference = resolve_target(self._sql)
                statements = self.update_statements()
            except ResolutionError as e:
                self._notifier.notify(f"Save failed: {e}", severity="error")
                raise

            database = target_database(reference, self._database)
            db_param = self.database_param(database)
            self._notifier.notify(f"Saving {len(statements)} change(s)...")
            if database and self._dialect.has_database_concept:
                self._notifier.notify(f"Using database: {database}")

            batch = await BatchStatementExecutor(self._executor, self._connection_id or "", db_param).execute(
                statements
            )
            for error in batch.errors:
                self._notifier.notify(f"Save failed: {error}", severity="error")
            if batch.has_errors:
                failure = PartialSaveError(batch)
                self._notifier.notify(str(failure), severity="error")
                raise failure

            self._notifier.notify(f"Saved {batch.success_count} change(s)")
            self._baseline = self._edited.copy()
            self._ledger = {}
            self._history.reset()
            self._redo_tip = None

            self._notifier.notify("Refreshing data...")
            try:
                refreshed = await self._executor.execute(self._connection_id or "", self._sql, db_param)
            except Exception as e:
                self._notifier.notify(f"Refresh failed: {e}", severity="error")
                raise RefreshError(str(e)) from e
            self.load_result(refreshed)
            self._notifier.notify("Data refreshed")
            return batch
        finally:
            self._saving = False

    # Internals

    def _reset_state(self, result: QueryResult) -> None:
        self._baseline = result.copy()
        self._edited = self._baseline.copy()
        self._ledger: ModificationLedger = {}
        self._history.reset()
        self._selection.clear()
        self._editing_cell: CellCoordinate | None = None
        self._editing_value = ""
        self._redo_tip: HistoryEntry | None = None

    def _save_in_progress(self) -> bool:
        """Report and refuse a mutation while a save is running."""
        if self._saving:
            self._notifier.notify("Save in progress", severity="warning")
            return True
        return False

    def _format_selection(self, selection: CellSelection) -> tuple[str, int, int]:
        values = {cell: self._edited.cell(cell.row, cell.col) for cell in selection.cells}
        return format_cells(selection.cells, values)

    def _cells_in_range(self, selection: CellSelection) -> list[CellCoordinate]:
        return [cell for cell in selection if self._edited.contains(cell.row, cell.col)]

    def _push_history(self) -> None:
        self._history.save(self._edited, self._ledger)

    def _restore(self, entry: HistoryEntry) -> None:
        self._edited = entry.edited_grid.copy()
        self._ledger = dict(entry.ledger)

    def _apply(self, changes: Mapping[CellCoordinate, Any]) -> None:
        """Write values into a new grid and ledger, then swap both in."""
        rows = list(self._edited.rows)
        copied: set[int] = set()
        ledger = dict(self._ledger)
        columns = self._edited.columns
        for cell, value in changes.items():
            if cell.row not in copied:
                rows[cell.row] = list(rows[cell.row])
                copied.add(cell.row)
            rows[cell.row][cell.col] = value
            previous = ledger.get(cell)
            if previous is not None and values_equal(previous.old_value, value):
                # Back to the baseline value
                del ledger[cell]
            elif previous is not None:
                ledger[cell] = previous.with_new_value(value)
            else:
                ledger[cell] = CellModification(
                    row_index=cell.row,
                    column=columns[cell.col],
                    old_value=self._baseline.rows[cell.row][cell.col],
                    new_value=value,
                )
        self._edited = QueryResult(columns=list(columns), rows=rows)
        self._ledger = ledger
        self._redo_tip = None
