"""Clipboard text format and clipboard backends.

Copy emits tab-separated fields and newline-separated rows. Paste accepts
tab-separated lines first, then comma-separated, else one field per line.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Iterable, Mapping

from sqledit.shared.core.values import cell_text

from .exceptions import ClipboardError
from .state.ledger import CellCoordinate

FIELD_SEPARATOR = "\t"
LINE_SEPARATOR = "\n"

_LINE_SPLIT = re.compile(r"\r?\n")


def format_cells(cells: Iterable[CellCoordinate], values: Mapping[CellCoordinate, object]) -> tuple[str, int, int]:
    """Render selected cells as clipboard text.

    Rows are sorted ascending; each row uses the union of selected columns
    (sorted ascending), with empty fields where a row has no selected cell
    in that column.

    Returns:
        Tuple of (text, row_count, column_count).
    """
    by_row: dict[int, dict[int, str]] = {}
    for cell in cells:
        by_row.setdefault(cell.row, {})[cell.col] = cell_text(values.get(cell))

    rows = sorted(by_row)
    cols = sorted({col for row_cells in by_row.values() for col in row_cells})
    lines = [FIELD_SEPARATOR.join(by_row[row].get(col, "") for col in cols) for row in rows]
    return LINE_SEPARATOR.join(lines), len(rows), len(cols)


def parse_clipboard_text(text: str) -> list[list[str]]:
    """Split clipboard text into lines of fields.

    Blank lines are dropped. Tab-separated fields are kept as-is;
    comma-separated fields are stripped.
    """
    parsed: list[list[str]] = []
    for line in _LINE_SPLIT.split(text):
        if not line.strip():
            continue
        if FIELD_SEPARATOR in line:
            parsed.append(line.split(FIELD_SEPARATOR))
        elif "," in line:
            parsed.append([field.strip() for field in line.split(",")])
        else:
            parsed.append([line])
    return parsed


class MemoryClipboard:
    """In-process clipboard buffer."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    async def read_text(self) -> str:
        return self.text

    async def write_text(self, text: str) -> None:
        self.text = text


class SystemClipboard:
    """System clipboard via pyperclip, run off the event loop.

    Writes are mirrored into an internal buffer; reads fall back to that
    buffer when the system clipboard cannot be read.
    """

    def __init__(self) -> None:
        self._internal = MemoryClipboard()

    async def read_text(self) -> str:
        import pyperclip

        try:
            text = await asyncio.to_thread(pyperclip.paste)
        except Exception as exc:
            if self._internal.text:
                return await self._internal.read_text()
            raise ClipboardError(f"Cannot read clipboard: {exc}") from exc
        return text or ""

    async def write_text(self, text: str) -> None:
        import pyperclip

        await self._internal.write_text(text)
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except Exception as exc:
            raise ClipboardError(f"Cannot write clipboard: {exc}") from exc
