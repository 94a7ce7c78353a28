"""Client-side filtering and sorting over a query result.

The view never copies or reorders the underlying rows. It keeps a list of
original row positions in display order, so edits made through the view
always address rows of the unfiltered, unsorted result.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqledit.domains.query.app.view_sql import SortKey
from sqledit.shared.core.values import cell_text

from .model import QueryResult


def _sort_value(value: Any) -> tuple[int, Any]:
    # Numbers before text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, cell_text(value).lower())


class ResultView:
    """Filtered and sorted projection of a QueryResult."""

    def __init__(
        self,
        result: QueryResult,
        filters: Mapping[str, str] | None = None,
        sort: Sequence[SortKey] | None = None,
    ) -> None:
        self._result = result
        self._filters = dict(filters or {})
        self._sort = list(sort or [])
        self._order = self._compute_order()

    @property
    def result(self) -> QueryResult:
        return self._result

    @property
    def row_order(self) -> list[int]:
        """Original row positions in display order."""
        return list(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def original_row(self, display_index: int) -> int:
        """Map a display row index back to the original row position."""
        return self._order[display_index]

    def display_index(self, original_row: int) -> int | None:
        """Map an original row position to its display index, if visible."""
        try:
            return self._order.index(original_row)
        except ValueError:
            return None

    def rows(self) -> list[list[Any]]:
        """Rows in display order."""
        return [self._result.rows[i] for i in self._order]

    def update(
        self,
        result: QueryResult | None = None,
        filters: Mapping[str, str] | None = None,
        sort: Sequence[SortKey] | None = None,
    ) -> None:
        """Replace the result, filters or sort keys and recompute the order."""
        if result is not None:
            self._result = result
        if filters is not None:
            self._filters = dict(filters)
        if sort is not None:
            self._sort = list(sort)
        self._order = self._compute_order()

    def _compute_order(self) -> list[int]:
        columns = self._result.columns
        active = [
            (columns.index(name), needle.strip().lower())
            for name, needle in self._filters.items()
            if needle.strip() and name in columns
        ]
        order = [
            i
            for i, row in enumerate(self._result.rows)
            if all(needle in cell_text(row[col]).lower() for col, needle in active)
        ]
        # Stable sorts applied from the least significant key; NULLs stay last
        rows = self._result.rows
        for key in reversed(self._sort):
            if key.column not in columns:
                continue
            col = columns.index(key.column)
            present = [i for i in order if rows[i][col] is not None]
            missing = [i for i in order if rows[i][col] is None]
            present.sort(key=lambda i: _sort_value(rows[i][col]), reverse=key.direction == "desc")
            order = present + missing
        return order
