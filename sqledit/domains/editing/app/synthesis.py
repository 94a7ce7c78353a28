"""Turn edits into UPDATE/INSERT statements.

Rows are located by full-row equality over every column of the baseline
row (``col IS NULL`` for NULLs), so no primary key is needed. Tables whose
baseline contains exact duplicate rows are ambiguous: an UPDATE may touch
every duplicate.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from sqledit.db.providers import get_dialect
from sqledit.domains.editing.exceptions import ResolutionError
from sqledit.domains.query.app.table_resolver import TableReference, resolve_table_reference

if TYPE_CHECKING:
    from sqledit.db.dialects.base import SqlDialect
    from sqledit.domains.editing.state.ledger import ModificationLedger
    from sqledit.domains.results.model import QueryResult


def resolve_target(sql: str | None) -> TableReference:
    """Resolve the table a statement reads from, or raise ResolutionError."""
    reference = resolve_table_reference(sql)
    if reference is None or not reference.table:
        raise ResolutionError(sql)
    return reference


def target_database(reference: TableReference, database_hint: str | None) -> str | None:
    """Database named in the statement, else the hint."""
    return reference.database or database_hint or None


def _qualified_table(sql: str | None, dialect: SqlDialect, database_hint: str | None) -> str:
    reference = resolve_target(sql)
    return dialect.qualify_table(reference.table, target_database(reference, database_hint))


def build_where_clause(columns: Sequence[str], row: Sequence[Any], dialect: SqlDialect) -> str:
    """Full-row equality predicate over every column of a baseline row."""
    conditions = []
    for column, value in zip(columns, row):
        quoted = dialect.quote_identifier(column)
        if value is None:
            conditions.append(f"{quoted} IS NULL")
        else:
            conditions.append(f"{quoted} = {dialect.escape_value(value)}")
    return " AND ".join(conditions)


def _set_clause(assignments: Iterable[tuple[str, Any]], dialect: SqlDialect) -> str:
    return ", ".join(f"{dialect.quote_identifier(col)} = {dialect.escape_value(val)}" for col, val in assignments)


def synthesize_updates(
    ledger: ModificationLedger,
    original_sql: str | None,
    baseline: QueryResult,
    dialect: str | SqlDialect | None,
    database_hint: str | None = None,
) -> list[str]:
    """Build one UPDATE per modified row.

    Args:
        ledger: Cell modifications keyed by coordinate.
        original_sql: The statement the baseline was produced by.
        baseline: The unedited result.
        dialect: Database-kind tag or dialect instance.
        database_hint: Currently selected database, used when the statement
            does not name one.

    Returns:
        UPDATE statements in ledger row-group order; empty when the ledger
        is empty.

    Raises:
        ResolutionError: The owning table cannot be derived from the
            statement. Nothing is generated in that case.
    """
    if not ledger:
        return []
    rules = get_dialect(dialect)
    table = _qualified_table(original_sql, rules, database_hint)

    # Row groups keep first-seen order; columns keep modification order
    row_changes: dict[int, dict[str, Any]] = {}
    for modification in ledger.values():
        row_changes.setdefault(modification.row_index, {})[modification.column] = modification.new_value

    statements = []
    for row_index, changes in row_changes.items():
        if not 0 <= row_index < len(baseline.rows):
            raise ResolutionError(original_sql, f"Row {row_index} is not part of the original result")
        set_clause = _set_clause(changes.items(), rules)
        where_clause = build_where_clause(baseline.columns, baseline.rows[row_index], rules)
        statements.append(f"UPDATE {table} SET {set_clause} WHERE {where_clause};")
    return statements


def synthesize_inserts(
    row_indices: Iterable[int],
    original_sql: str | None,
    edited: QueryResult,
    dialect: str | SqlDialect | None,
    database_hint: str | None = None,
) -> str | None:
    """Build a single multi-row INSERT duplicating the given rows.

    Rows are emitted in ascending order; indices past the end of the grid
    are skipped. Returns None when no row remains.
    """
    rows = sorted({i for i in row_indices if 0 <= i < len(edited.rows)})
    if not rows:
        return None
    rules = get_dialect(dialect)
    table = _qualified_table(original_sql, rules, database_hint)

    columns = ", ".join(rules.quote_identifier(col) for col in edited.columns)
    values = ",\n".join(
        "(" + ", ".join(rules.escape_value(v) for v in edited.rows[i]) + ")" for i in rows
    )
    return f"INSERT INTO {table} ({columns}) VALUES\n{values};"


def synthesize_row_updates(
    row_indices: Iterable[int],
    original_sql: str | None,
    edited: QueryResult,
    baseline: QueryResult,
    dialect: str | SqlDialect | None,
    database_hint: str | None = None,
) -> list[str]:
    """Build one UPDATE per selected row, setting every column.

    SET uses the edited row, WHERE matches the baseline row.
    """
    rows = sorted({i for i in row_indices if 0 <= i < len(edited.rows) and i < len(baseline.rows)})
    if not rows:
        return []
    rules = get_dialect(dialect)
    table = _qualified_table(original_sql, rules, database_hint)

    statements = []
    for i in rows:
        set_clause = _set_clause(zip(edited.columns, edited.rows[i]), rules)
        where_clause = build_where_clause(baseline.columns, baseline.rows[i], rules)
        statements.append(f"UPDATE {table} SET {set_clause} WHERE {where_clause};")
    return statements
