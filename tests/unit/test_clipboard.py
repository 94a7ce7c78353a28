"""Unit tests for clipboard text handling and clipboard backends."""

from __future__ import annotations

from unittest.mock import patch

import pytest


class TestFormatCells:
    """Tests for rendering selected cells as clipboard text."""

    def test_rectangular_block(self):
        """A rectangle should render as tab/newline separated text."""
        from sqledit.domains.editing.clipboard import format_cells
        from sqledit.domains.editing.state.ledger import CellCoordinate as C

        values = {C(0, 0): 1, C(0, 1): "a", C(1, 0): 2, C(1, 1): None}
        text, rows, cols = format_cells(values.keys(), values)

        assert text == "1\ta\n2\t"
        assert (rows, cols) == (2, 2)

    def test_missing_intersections_are_empty(self):
        """Rows use the union of selected columns with blanks where unselected."""
        from sqledit.domains.editing.clipboard import format_cells
        from sqledit.domains.editing.state.ledger import CellCoordinate as C

        values = {C(0, 0): "x", C(2, 2): "y"}
        text, rows, cols = format_cells(values.keys(), values)

        assert text == "x\t\n\ty"
        assert (rows, cols) == (2, 2)

    def test_structured_values_render_as_json(self):
        """Dicts should be copied as JSON text."""
        from sqledit.domains.editing.clipboard import format_cells
        from sqledit.domains.editing.state.ledger import CellCoordinate as C

        values = {C(0, 0): {"a": 1}}
        text, _, _ = format_cells(values.keys(), values)

        assert text == '{"a":1}'


class TestParseClipboardText:
    """Tests for splitting pasted text into fields."""

    def test_tab_separated(self):
        """Tabs take precedence and fields are kept as-is."""
        from sqledit.domains.editing.clipboard import parse_clipboard_text

        assert parse_clipboard_text("a\tb, c\n1\t2") == [["a", "b, c"], ["1", "2"]]

    def test_comma_separated(self):
        """Without tabs, commas split and fields are stripped."""
        from sqledit.domains.editing.clipboard import parse_clipboard_text

        assert parse_clipboard_text("a, b ,c") == [["a", "b", "c"]]

    def test_single_field_lines(self):
        """Lines without separators are one field each; blank lines are dropped."""
        from sqledit.domains.editing.clipboard import parse_clipboard_text

        assert parse_clipboard_text("one\r\n\n  \ntwo\n") == [["one"], ["two"]]

    def test_empty(self):
        """Empty text should parse to nothing."""
        from sqledit.domains.editing.clipboard import parse_clipboard_text

        assert parse_clipboard_text("") == []


class TestMemoryClipboard:
    """Tests for the in-process clipboard."""

    @pytest.mark.asyncio
    async def test_round_trip(self):
        """Written text should be read back."""
        from sqledit.domains.editing.clipboard import MemoryClipboard

        clipboard = MemoryClipboard()
        await clipboard.write_text("hello")

        assert await clipboard.read_text() == "hello"


class TestSystemClipboard:
    """Tests for the pyperclip-backed clipboard."""

    @pytest.mark.asyncio
    async def test_reads_system_clipboard(self):
        """read_text should return the system clipboard contents."""
        from sqledit.domains.editing.clipboard import SystemClipboard

        with patch("pyperclip.paste", return_value="from system"):
            assert await SystemClipboard().read_text() == "from system"

    @pytest.mark.asyncio
    async def test_read_falls_back_to_internal_buffer(self):
        """A failed read should return the last text written through this clipboard."""
        from sqledit.domains.editing.clipboard import SystemClipboard

        clipboard = SystemClipboard()
        with patch("pyperclip.copy"):
            await clipboard.write_text("copied")
        with patch("pyperclip.paste", side_effect=RuntimeError("no display")):
            assert await clipboard.read_text() == "copied"

    @pytest.mark.asyncio
    async def test_read_failure_without_buffer_raises(self):
        """A failed read with nothing buffered should raise ClipboardError."""
        from sqledit.domains.editing.clipboard import SystemClipboard
        from sqledit.domains.editing.exceptions import ClipboardError

        with patch("pyperclip.paste", side_effect=RuntimeError("no display")):
            with pytest.raises(ClipboardError):
                await SystemClipboard().read_text()

    @pytest.mark.asyncio
    async def test_write_failure_raises(self):
        """A failed write should raise ClipboardError."""
        from sqledit.domains.editing.clipboard import SystemClipboard
        from sqledit.domains.editing.exceptions import ClipboardError

        with patch("pyperclip.copy", side_effect=RuntimeError("no display")):
            with pytest.raises(ClipboardError):
                await SystemClipboard().write_text("x")
