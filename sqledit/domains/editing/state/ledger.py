"""Cell coordinates and the modification ledger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, order=True)
class CellCoordinate:
    """Position of a cell in the original, unfiltered result."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row}-{self.col}"


@dataclass(frozen=True)
class CellModification:
    """Change recorded for one cell.

    ``old_value`` is the baseline value captured the first time the cell was
    touched and is kept across later edits of the same cell.
    """

    row_index: int
    column: str
    old_value: Any
    new_value: Any

    def with_new_value(self, new_value: Any) -> CellModification:
        return CellModification(self.row_index, self.column, self.old_value, new_value)


# Ledger: one entry per cell changed in the current editing session
ModificationLedger = dict[CellCoordinate, CellModification]


@dataclass(frozen=True)
class SelectionRange:
    """Bounding rectangle of a selection (inclusive)."""

    start_row: int
    end_row: int
    start_col: int
    end_col: int

    @property
    def row_count(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def col_count(self) -> int:
        return self.end_col - self.start_col + 1
