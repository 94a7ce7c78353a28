"""Rewrite a SELECT statement with column filters and sort keys.

Used to push column filtering and sorting of a result grid back into the
originating query. Filters are case-insensitive substring matches.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqledit.db.providers import get_dialect

from .table_resolver import strip_comments

if TYPE_CHECKING:
    from sqledit.db.dialects.base import SqlDialect

_WHERE = re.compile(r"\bWHERE\b", re.IGNORECASE)
_ORDER_BY = re.compile(r"\bORDER\s+BY\b", re.IGNORECASE)
_WHERE_BOUNDARIES = (
    re.compile(r"\bGROUP\s+BY\b", re.IGNORECASE),
    re.compile(r"\bHAVING\b", re.IGNORECASE),
    _ORDER_BY,
    re.compile(r"\bLIMIT\b", re.IGNORECASE),
)
_ORDER_BOUNDARY = re.compile(r"\b(?:LIMIT|OFFSET|FETCH)\b", re.IGNORECASE)


@dataclass(frozen=True)
class SortKey:
    """One ORDER BY term."""

    column: str
    direction: Literal["asc", "desc"] = "asc"


def _filter_conditions(filters: Mapping[str, str], dialect: SqlDialect) -> list[str]:
    conditions = []
    for column, value in filters.items():
        if not value.strip():
            continue
        quoted = dialect.quote_identifier(column)
        pattern = dialect.escape_value(f"%{value}%")
        conditions.append(dialect.contains_predicate(quoted, pattern))
    return conditions


def _first_position(sql: str, patterns: Sequence[re.Pattern[str]], start: int = 0) -> int:
    positions = [m.start() for p in patterns if (m := p.search(sql, start))]
    return min(positions, default=len(sql))


def _apply_where(sql: str, conditions: list[str]) -> str:
    clause = " AND ".join(conditions)
    where = _WHERE.search(sql)
    if where:
        end = _first_position(sql, _WHERE_BOUNDARIES, where.end())
        existing = sql[where.end() : end].strip()
        rest = sql[end:]
        result = f"{sql[: where.end()]} ({clause}) AND ({existing})"
        return f"{result} {rest}" if rest else result
    insert_at = _first_position(sql, _WHERE_BOUNDARIES)
    return f"{sql[:insert_at].rstrip()} WHERE {clause} {sql[insert_at:]}".rstrip()


def _apply_order_by(sql: str, sort: Sequence[SortKey], dialect: SqlDialect) -> str:
    clause = ", ".join(f"{dialect.quote_identifier(key.column)} {key.direction.upper()}" for key in sort)
    order_by = _ORDER_BY.search(sql)
    if order_by:
        boundary = _ORDER_BOUNDARY.search(sql, order_by.end())
        end = boundary.start() if boundary else len(sql)
        return f"{sql[: order_by.start()]}ORDER BY {clause} {sql[end:]}".rstrip()
    insert_at = _first_position(sql, (_ORDER_BOUNDARY,))
    rest = sql[insert_at:]
    result = f"{sql[:insert_at].rstrip()} ORDER BY {clause}"
    return f"{result} {rest}" if rest else result


def build_filtered_and_sorted_sql(
    base_sql: str,
    filters: Mapping[str, str],
    sort: Sequence[SortKey],
    dialect: str | SqlDialect | None,
) -> str:
    """Add filter predicates and replace/insert ORDER BY in a SELECT.

    Args:
        base_sql: The originating statement.
        filters: Column name to substring; blank values are ignored.
        sort: Sort keys in priority order.
        dialect: Database-kind tag or dialect instance.

    Returns:
        The rewritten statement with comments removed, or ``base_sql``
        unchanged when there is nothing to apply.
    """
    if not base_sql:
        return base_sql
    rules = get_dialect(dialect)
    conditions = _filter_conditions(filters, rules)
    if not conditions and not sort:
        return base_sql

    sql = strip_comments(base_sql)
    if conditions:
        sql = _apply_where(sql, conditions)
    if sort:
        sql = _apply_order_by(sql, sort, rules)
    return sql


def build_filtered_sql(base_sql: str, filters: Mapping[str, str], dialect: str | SqlDialect | None) -> str:
    """Add filter predicates only."""
    return build_filtered_and_sorted_sql(base_sql, filters, (), dialect)
