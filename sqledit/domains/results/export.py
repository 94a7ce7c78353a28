"""Export a query result as CSV or JSON text."""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from sqledit.shared.core.values import cell_text

from .model import QueryResult


def _csv_cell(value: Any) -> str:
    return "" if value is None else cell_text(value)


def to_csv_text(result: QueryResult) -> str:
    """Render a header row plus data rows; NULLs become empty fields."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(result.columns)
    for row in result.rows:
        writer.writerow(_csv_cell(v) for v in row)
    return buffer.getvalue().rstrip("\n")


def to_json_text(result: QueryResult, indent: int | None = 2) -> str:
    """Render rows as a JSON array of column -> value objects."""
    records = [dict(zip(result.columns, row)) for row in result.rows]
    return json.dumps(records, indent=indent, default=str, ensure_ascii=False)


EXPORTERS = {
    "csv": to_csv_text,
    "json": to_json_text,
}


def export_result(result: QueryResult, fmt: str) -> str:
    """Export a result in the named format."""
    try:
        exporter = EXPORTERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown export format: {fmt}") from None
    return exporter(result)
