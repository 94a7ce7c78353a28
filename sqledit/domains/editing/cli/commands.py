"""CLI edit command handlers."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from sqledit.db.sqlite_executor import SQLiteExecutor
from sqledit.domains.editing.app.engine import EditEngine
from sqledit.domains.editing.exceptions import EditError, ResolutionError
from sqledit.domains.results.export import export_result
from sqledit.domains.results.model import QueryResult
from sqledit.shared.core.notify import ConsoleNotifier


def _read_query(args: Any) -> str | None:
    """Return the SQL from --query or --file, printing an error if neither works."""
    if args.query:
        return args.query
    if args.file:
        try:
            with open(args.file, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            print(f"Error: File '{args.file}' not found.")
            return None
        except OSError as e:
            print(f"Error reading file: {e}")
            return None
    print("Error: Either --query or --file must be provided.")
    return None


def parse_assignment(text: str) -> tuple[int, str, str]:
    """Parse ``ROW:COLUMN=VALUE`` into its parts.

    Raises:
        ValueError: The text is not in that form.
    """
    target, sep, value = text.partition("=")
    row_text, colon, column = target.partition(":")
    if not sep or not colon or not column.strip():
        raise ValueError(f"Invalid assignment '{text}'; expected ROW:COLUMN=VALUE")
    try:
        row = int(row_text)
    except ValueError:
        raise ValueError(f"Invalid row '{row_text}' in '{text}'") from None
    return row, column.strip(), value


def apply_edits(engine: EditEngine, edits: list[tuple[int, str, Any]]) -> None:
    """Commit each (row, column, value) edit through the engine.

    A None value sets the cell to NULL.

    Raises:
        ValueError: A row or column does not exist in the result.
    """
    engine.enter_edit_mode()
    columns = engine.edited_grid.columns
    for row, column, value in edits:
        if column not in columns:
            raise ValueError(f"Unknown column '{column}'")
        col = columns.index(column)
        if not engine.begin_cell_edit(row, col):
            raise ValueError(f"Row {row} is out of range")
        engine.set_editing_value("" if value is None else str(value))
        engine.commit_cell_edit(row, col)


def output_table(result: QueryResult) -> None:
    """Print a result as a plain text table."""
    max_col_width = 50
    columns = result.columns
    rows = result.rows

    col_widths = [min(len(col), max_col_width) for col in columns]
    for row in rows[:100]:
        for i, val in enumerate(row):
            val_str = str(val) if val is not None else "NULL"
            col_widths[i] = min(max_col_width, max(col_widths[i], len(val_str)))

    header = " | ".join(col[: col_widths[i]].ljust(col_widths[i]) for i, col in enumerate(columns))
    print(header)
    print("-" * len(header))
    for row in rows:
        parts = []
        for i, val in enumerate(row):
            val_str = str(val) if val is not None else "NULL"
            if len(val_str) > col_widths[i]:
                val_str = val_str[: col_widths[i] - 2] + ".."
            parts.append(val_str.ljust(col_widths[i]))
        print(" | ".join(parts))
    print(f"\n({len(rows)} row(s) returned)")


def cmd_sql(args: Any) -> int:
    """Print the UPDATE statements for a result snapshot and a list of edits."""
    query = _read_query(args)
    if query is None:
        return 1

    try:
        with open(args.result, encoding="utf-8") as f:
            result = QueryResult.from_dict(json.load(f))
        with open(args.edits, encoding="utf-8") as f:
            raw_edits = json.load(f)
    except FileNotFoundError as e:
        print(f"Error: File '{e.filename}' not found.")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading file: {e}")
        return 1

    engine = EditEngine(result, query, dialect=args.dialect, database=args.database)
    try:
        edits = [(int(e["row"]), str(e["column"]), e.get("value")) for e in raw_edits]
        apply_edits(engine, edits)
        statements = engine.update_statements()
    except (KeyError, TypeError, ValueError) as e:
        print(f"Error: Invalid edit: {e}")
        return 1
    except ResolutionError as e:
        print(f"Error: {e}")
        return 1

    for statement in statements:
        print(statement)
    return 0


def cmd_edit(args: Any) -> int:
    """Edit cells of a query result on a SQLite file and save them."""
    query = _read_query(args)
    if query is None:
        return 1

    try:
        edits = [parse_assignment(text) for text in args.set or []]
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    if not edits:
        print("Error: At least one --set ROW:COLUMN=VALUE is required.")
        return 1

    executor = SQLiteExecutor(args.file_path)
    try:
        result = asyncio.run(executor.execute("", query))
    except Exception as e:
        print(f"Error: {e}")
        return 1

    engine = EditEngine(result, query, dialect="sqlite", executor=executor, notifier=ConsoleNotifier())
    try:
        apply_edits(engine, [(row, column, value if value.strip() else None) for row, column, value in edits])
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.dry_run:
        try:
            statements = engine.update_statements()
        except ResolutionError as e:
            print(f"Error: {e}")
            return 1
        for statement in statements:
            print(statement)
        return 0

    try:
        asyncio.run(engine.save())
    except EditError:
        # Already reported through the notifier
        return 1

    output_table(engine.baseline)
    return 0


def cmd_export(args: Any) -> int:
    """Run a query on a SQLite file and print the result as CSV, JSON or a table."""
    query = _read_query(args)
    if query is None:
        return 1

    executor = SQLiteExecutor(args.file_path)
    try:
        result = asyncio.run(executor.execute("", query))
    except Exception as e:
        print(f"Error: {e}")
        return 1

    if not result.columns:
        print(f"Query executed successfully. Rows affected: {result.rows_affected}")
        return 0

    if args.format == "table":
        output_table(result)
    else:
        print(export_result(result, args.format))
    return 0
