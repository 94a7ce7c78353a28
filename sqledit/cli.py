#!/usr/bin/env python3
"""sqledit - Spreadsheet-style editing of SQL query results."""

from __future__ import annotations

import argparse
import sys

from .db.providers import get_supported_db_types
from .domains.results.export import EXPORTERS


def _add_query_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--query", "-q", help="SQL query whose result is edited")
    parser.add_argument("--file", "-f", help="SQL file containing the query")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqledit",
        description="Edit SQL query results like a spreadsheet and generate the UPDATE statements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    sql_parser = subparsers.add_parser("sql", help="Print UPDATE statements for a result snapshot and edits")
    _add_query_arguments(sql_parser)
    sql_parser.add_argument("--result", "-r", required=True, help="JSON file with {columns, rows}")
    sql_parser.add_argument("--edits", "-e", required=True, help="JSON file with a list of {row, column, value}")
    sql_parser.add_argument(
        "--dialect",
        default="sqlite",
        help=f"Database type ({', '.join(get_supported_db_types())}; default: sqlite)",
    )
    sql_parser.add_argument("--database", "-d", help="Database used when the query does not name one")

    edit_parser = subparsers.add_parser("edit", help="Edit cells of a query result on a SQLite file")
    edit_parser.add_argument("--file-path", required=True, help="SQLite database file")
    _add_query_arguments(edit_parser)
    edit_parser.add_argument(
        "--set",
        "-s",
        action="append",
        metavar="ROW:COLUMN=VALUE",
        help="Cell assignment (repeatable); an empty VALUE sets NULL",
    )
    edit_parser.add_argument("--dry-run", action="store_true", help="Print the statements without running them")

    export_parser = subparsers.add_parser("export", help="Run a query on a SQLite file and export the result")
    export_parser.add_argument("--file-path", required=True, help="SQLite database file")
    _add_query_arguments(export_parser)
    export_parser.add_argument(
        "--format",
        "-o",
        choices=["table", *EXPORTERS],
        default="table",
        help="Output format (default: table)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__

        print(f"sqledit {__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    from .domains.editing.cli.commands import cmd_edit, cmd_export, cmd_sql

    if args.command == "sql":
        return cmd_sql(args)
    if args.command == "edit":
        return cmd_edit(args)
    if args.command == "export":
        return cmd_export(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
