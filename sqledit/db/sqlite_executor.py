"""SQLite execution capability using built-in sqlite3."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from sqledit.domains.results.model import QueryResult


def resolve_file_path(path_str: str | Path) -> Path:
    """Resolve a database file path, expanding ``~``."""
    return Path(str(path_str).strip()).expanduser().resolve()


class SQLiteExecutor:
    """Runs statements against a SQLite file, one connection per statement.

    Each call runs in a worker thread; writes are committed before the
    connection closes. The ``connection_id`` and ``database`` arguments are
    accepted for interface compatibility and ignored (a SQLite file has no
    separate database concept).
    """

    def __init__(self, file_path: str | Path) -> None:
        self._file_path = resolve_file_path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def _connect(self) -> Any:
        import sqlite3

        return sqlite3.connect(self._file_path)

    def run(self, sql: str) -> QueryResult:
        """Execute one statement synchronously."""
        conn = self._connect()
        try:
            cursor = conn.cursor()
            cursor.execute(sql)
            if cursor.description:
                columns = [col[0] for col in cursor.description]
                return QueryResult.from_records(columns, cursor.fetchall())
            rowcount = int(cursor.rowcount)
            conn.commit()
            return QueryResult(columns=[], rows=[], rows_affected=rowcount)
        finally:
            conn.close()

    async def execute(self, connection_id: str, sql: str, database: str | None = None) -> QueryResult:
        return await asyncio.to_thread(self.run, sql)
