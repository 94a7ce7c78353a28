"""Unit tests for the bounded undo/redo history."""

from __future__ import annotations

import pytest


def _grid(value):
    from sqledit.domains.results.model import QueryResult

    return QueryResult(columns=["v"], rows=[[value]])


class TestEditHistory:
    """Tests for EditHistory cursor semantics."""

    def test_empty_history(self):
        """A new history has nothing to undo or redo."""
        from sqledit.domains.editing.state.history import EditHistory

        history = EditHistory()

        assert history.index == -1
        assert not history.can_undo
        assert not history.can_redo
        assert history.undo() is None
        assert history.redo() is None

    def test_undo_returns_entry_at_cursor(self):
        """undo should return the saved state and move the cursor back."""
        from sqledit.domains.editing.state.history import EditHistory

        history = EditHistory()
        history.save(_grid("a"), {})
        history.save(_grid("b"), {})

        entry = history.undo()

        assert entry.edited_grid.rows == [["b"]]
        assert history.index == 0
        assert history.can_redo

    def test_redo_advances_then_returns(self):
        """redo should move the cursor forward and return the entry there."""
        from sqledit.domains.editing.state.history import EditHistory

        history = EditHistory()
        history.save(_grid("a"), {})
        history.save(_grid("b"), {})
        history.undo()
        history.undo()

        entry = history.redo()

        assert entry.edited_grid.rows == [["a"]]
        assert history.index == 0

    def test_save_truncates_redo_entries(self):
        """Saving after undo should drop the redo branch."""
        from sqledit.domains.editing.state.history import EditHistory

        history = EditHistory()
        history.save(_grid("a"), {})
        history.save(_grid("b"), {})
        history.undo()
        history.save(_grid("c"), {})

        assert len(history) == 2
        assert not history.can_redo
        assert history.entry_at(1).edited_grid.rows == [["c"]]

    def test_save_copies_grid_and_ledger(self):
        """Later mutation of the caller's objects must not leak into history."""
        from sqledit.domains.editing.state.history import EditHistory
        from sqledit.domains.editing.state.ledger import CellCoordinate, CellModification

        grid = _grid("a")
        ledger = {CellCoordinate(0, 0): CellModification(0, "v", "a", "b")}
        history = EditHistory()
        history.save(grid, ledger)

        grid.rows[0][0] = "mutated"
        ledger.clear()

        entry = history.entry_at(0)
        assert entry.edited_grid.rows == [["a"]]
        assert len(entry.ledger) == 1

    def test_bounded_to_fifty_entries(self):
        """After 55 saves only the newest 50 remain."""
        from sqledit.domains.editing.state.history import MAX_HISTORY_SIZE, EditHistory

        history = EditHistory()
        for i in range(55):
            history.save(_grid(i), {})

        assert MAX_HISTORY_SIZE == 50
        assert len(history) == 50
        assert history.index == 49
        payloads = [entry.edited_grid.rows[0][0] for entry in history.entries]
        assert payloads[0] == 5
        assert 0 not in payloads

    def test_reset(self):
        """reset should empty the stack."""
        from sqledit.domains.editing.state.history import EditHistory

        history = EditHistory()
        history.save(_grid("a"), {})
        history.reset()

        assert len(history) == 0
        assert history.index == -1

    def test_invalid_size(self):
        """A size below one should be rejected."""
        from sqledit.domains.editing.state.history import EditHistory

        with pytest.raises(ValueError):
            EditHistory(0)
