"""Cell selection model for the edit grid.

Selections are arbitrary sets of cells (not necessarily rectangular) with a
cached bounding rectangle. An empty selection is represented as "no
selection": ``bounding_range`` is None and ``is_empty`` is True.
"""

from __future__ import annotations

from collections.abc import Iterable

from .ledger import CellCoordinate, SelectionRange


def _coord(cell: CellCoordinate | tuple[int, int]) -> CellCoordinate:
    return cell if isinstance(cell, CellCoordinate) else CellCoordinate(*cell)


class CellSelection:
    """Tracks selected cells plus their bounding rectangle."""

    def __init__(self, cells: Iterable[CellCoordinate | tuple[int, int]] = ()) -> None:
        self._cells: frozenset[CellCoordinate] = frozenset(_coord(c) for c in cells)
        self._range: SelectionRange | None = None
        self._drag_start: CellCoordinate | None = None
        self._recompute()

    @property
    def cells(self) -> frozenset[CellCoordinate]:
        return self._cells

    @property
    def bounding_range(self) -> SelectionRange | None:
        return self._range

    @property
    def is_empty(self) -> bool:
        return not self._cells

    @property
    def is_dragging(self) -> bool:
        return self._drag_start is not None

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self):
        return iter(sorted(self._cells))

    def __contains__(self, cell: object) -> bool:
        if isinstance(cell, tuple):
            cell = CellCoordinate(*cell)
        return cell in self._cells

    def contains(self, row: int, col: int) -> bool:
        return CellCoordinate(row, col) in self._cells

    def add_cell(self, row: int, col: int) -> None:
        """Add a cell to the selection."""
        self._replace(self._cells | {CellCoordinate(row, col)})

    def remove_cell(self, row: int, col: int) -> None:
        """Remove a cell; removing the last cell leaves no selection."""
        cell = CellCoordinate(row, col)
        if cell in self._cells:
            self._replace(self._cells - {cell})

    def toggle_cell(self, row: int, col: int) -> None:
        if self.contains(row, col):
            self.remove_cell(row, col)
        else:
            self.add_cell(row, col)

    def set_rectangle(
        self,
        a: CellCoordinate | tuple[int, int],
        b: CellCoordinate | tuple[int, int],
    ) -> None:
        """Replace the selection with every cell in the rectangle spanned by a and b."""
        a, b = _coord(a), _coord(b)
        rows = range(min(a.row, b.row), max(a.row, b.row) + 1)
        cols = range(min(a.col, b.col), max(a.col, b.col) + 1)
        self._replace(frozenset(CellCoordinate(r, c) for r in rows for c in cols))

    def clear(self) -> None:
        """Drop the selection and any drag in progress."""
        self._drag_start = None
        self._replace(frozenset())

    def begin_drag(self, row: int, col: int) -> None:
        """Start a drag selection anchored at (row, col)."""
        self._drag_start = CellCoordinate(row, col)
        self.set_rectangle(self._drag_start, self._drag_start)

    def drag_to(self, row: int, col: int) -> None:
        """Extend the drag selection to (row, col)."""
        if self._drag_start is None:
            return
        self.set_rectangle(self._drag_start, CellCoordinate(row, col))

    def end_drag(self) -> None:
        self._drag_start = None

    def handle_click_outside(self, *, is_cell: bool, is_input: bool) -> None:
        """Clear the selection unless the interaction hit a cell or the cell editor."""
        if not is_cell and not is_input:
            self.clear()

    def _replace(self, cells: frozenset[CellCoordinate]) -> None:
        # Replaced wholesale, never mutated in place
        self._cells = cells
        self._recompute()

    def _recompute(self) -> None:
        if not self._cells:
            self._range = None
            return
        rows = [c.row for c in self._cells]
        cols = [c.col for c in self._cells]
        self._range = SelectionRange(min(rows), max(rows), min(cols), max(cols))
