"""Derive the owning table of a single-table SELECT statement.

Only the first ``FROM <ref>`` is inspected. Joins, subqueries and CTEs are
not resolved: ``FROM users u JOIN orders o`` yields ``users``, and
``FROM (SELECT ...)`` yields nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_COMMENT = re.compile(r"--[^\n]*|/\*.*?\*/", re.DOTALL)

# One name segment: `backtick`, "double quoted", [bracketed] or bare.
# Doubled delimiters inside quotes are escapes, not terminators.
_SEGMENT = (
    r"(?:"
    r"`(?:[^`]|``)+`"
    r'|"(?:[^"]|"")+"'
    r"|\[(?:[^\]]|\]\])+\]"
    r"|[^\s.,;()`\"\[\]]+"
    r")"
)
_SEGMENT_PATTERN = re.compile(_SEGMENT)
_FROM_KEYWORD = re.compile(r"\bFROM\b", re.IGNORECASE)
_FROM_PATTERN = re.compile(
    rf"\bFROM\s+({_SEGMENT}(?:\s*\.\s*{_SEGMENT})*)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class TableReference:
    """Table named by a statement, with the database when it was given."""

    table: str
    database: str | None = None


def strip_comments(sql: str) -> str:
    """Remove ``--`` line comments and ``/* */`` block comments."""
    return _COMMENT.sub("", sql).strip()


def _unquote(segment: str) -> str:
    if len(segment) >= 2:
        first, last = segment[0], segment[-1]
        if first == "`" and last == "`":
            return segment[1:-1].replace("``", "`")
        if first == '"' and last == '"':
            return segment[1:-1].replace('""', '"')
        if first == "[" and last == "]":
            return segment[1:-1].replace("]]", "]")
    return segment


def resolve_table_reference(sql: str | None) -> TableReference | None:
    """Parse ``SELECT ... FROM <ref>`` into a table reference.

    Args:
        sql: The originating statement.

    Returns:
        ``TableReference(table)`` for ``FROM t``,
        ``TableReference(table, database)`` for ``FROM db.t``, or None when
        no single- or two-part name follows the first ``FROM``.
    """
    if not sql or not sql.strip():
        return None
    text = strip_comments(sql)
    keyword = _FROM_KEYWORD.search(text)
    if keyword is None:
        return None
    match = _FROM_PATTERN.match(text, keyword.start())
    if match is None:
        return None

    segments = [_unquote(m.group(0)) for m in _SEGMENT_PATTERN.finditer(match.group(1))]
    segments = [s for s in segments if s.strip()]
    if len(segments) == 1:
        return TableReference(table=segments[0])
    if len(segments) == 2:
        return TableReference(table=segments[1], database=segments[0])
    return None


def extract_table_name(sql: str | None) -> str | None:
    """Return just the table name from a statement, if resolvable."""
    reference = resolve_table_reference(sql)
    return reference.table if reference else None
