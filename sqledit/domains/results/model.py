"""Query result value object shared by execution, editing and synthesis."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

Row = list[Any]


@dataclass
class QueryResult:
    """Result of a SELECT-type query execution.

    Rows are normalized on construction so that every row has exactly one
    entry per column (short rows are padded with None, long rows cut).
    """

    columns: list[str]
    rows: list[Row] = field(default_factory=list)
    rows_affected: int | None = None

    def __post_init__(self) -> None:
        self.columns = list(self.columns)
        width = len(self.columns)
        normalized: list[Row] = []
        for row in self.rows:
            cells = list(row)
            if len(cells) < width:
                cells.extend([None] * (width - len(cells)))
            elif width and len(cells) > width:
                cells = cells[:width]
            normalized.append(cells)
        self.rows = normalized

    @classmethod
    def from_records(cls, columns: Sequence[str], records: Iterable[Sequence[Any]]) -> QueryResult:
        """Build a result from driver rows (tuples, sqlite3.Row, ...)."""
        return cls(columns=list(columns), rows=[list(record) for record in records])

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def cell(self, row: int, col: int) -> Any:
        """Return the value at (row, col), or None when out of range."""
        if 0 <= row < len(self.rows) and 0 <= col < len(self.columns):
            return self.rows[row][col]
        return None

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < len(self.rows) and 0 <= col < len(self.columns)

    def copy(self) -> QueryResult:
        """Return a copy with independent row lists."""
        return QueryResult(columns=list(self.columns), rows=[list(r) for r in self.rows], rows_affected=self.rows_affected)

    def to_dict(self) -> dict[str, Any]:
        return {"columns": list(self.columns), "rows": [list(r) for r in self.rows]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QueryResult:
        """Create from dictionary (``{"columns": [...], "rows": [[...], ...]}``)."""
        return cls(columns=list(data.get("columns") or []), rows=list(data.get("rows") or []))
