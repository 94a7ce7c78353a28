"""Helpers for rendering cell values as text."""

from __future__ import annotations

import json
from typing import Any


def to_json_text(value: Any) -> str:
    """Serialize a structured value to its canonical compact JSON text."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def cell_text(value: Any) -> str:
    """Render a cell value the way it is shown, copied and compared.

    None renders as an empty string, booleans as ``true``/``false``,
    integral floats without a fractional part, and dicts/lists as JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return to_json_text(value)
    return str(value)


def values_equal(left: Any, right: Any) -> bool:
    """Compare two cell values by their rendered text."""
    if left is None or right is None:
        return left is None and right is None
    return cell_text(left) == cell_text(right)
