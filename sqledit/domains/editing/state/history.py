"""Bounded undo/redo history of edit-grid snapshots.

Callers save the state *before* applying a mutation. ``undo`` returns the
entry at the cursor (the state to restore) and moves the cursor back;
``redo`` moves the cursor forward and returns the entry there. A cursor of
-1 means nothing is left to undo.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqledit.config import DEFAULT_HISTORY_LIMIT
from sqledit.domains.results.model import QueryResult

from .ledger import ModificationLedger

MAX_HISTORY_SIZE = DEFAULT_HISTORY_LIMIT


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of the edited grid and its ledger."""

    edited_grid: QueryResult
    ledger: ModificationLedger


class EditHistory:
    """Undo/redo stack bounded to ``max_size`` entries (oldest evicted first)."""

    def __init__(self, max_size: int = MAX_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError("History size must be at least 1")
        self._max_size = max_size
        self._entries: list[HistoryEntry] = []
        self._index = -1

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def index(self) -> int:
        return self._index

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._index >= 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def save(self, edited_grid: QueryResult, ledger: ModificationLedger) -> None:
        """Record the pre-mutation state, dropping any redo entries."""
        entry = HistoryEntry(edited_grid=edited_grid.copy(), ledger=dict(ledger))
        entries = self._entries[: self._index + 1]
        entries.append(entry)
        if len(entries) > self._max_size:
            entries = entries[-self._max_size :]
        self._entries = entries
        self._index = len(entries) - 1

    def undo(self) -> HistoryEntry | None:
        if self._index < 0:
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> HistoryEntry | None:
        if self._index >= len(self._entries) - 1:
            return None
        self._index += 1
        return self._entries[self._index]

    def entry_at(self, index: int) -> HistoryEntry | None:
        """Return the entry at ``index`` without moving the cursor."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def reset(self) -> None:
        self._entries = []
        self._index = -1
