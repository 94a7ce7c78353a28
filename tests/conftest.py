"""Pytest fixtures for sqledit tests."""

from __future__ import annotations

import os
import sqlite3
import tempfile
from pathlib import Path

import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="sqledit-test-config-"))
os.environ.setdefault("SQLEDIT_CONFIG_DIR", str(_TEST_CONFIG_DIR))


@pytest.fixture
def users_result():
    """Three-row users result with a NULL email."""
    from sqledit.domains.results.model import QueryResult

    return QueryResult(
        columns=["id", "name", "email"],
        rows=[
            [1, "Alice", "a@x.com"],
            [2, "Bob", None],
            [3, "Carol", "c@x.com"],
        ],
    )


@pytest.fixture
def engine(users_result):
    """Edit engine over the users result, already in edit mode."""
    from sqledit.domains.editing.app.engine import EditEngine

    engine = EditEngine(users_result, "SELECT * FROM users", dialect="mysql")
    engine.enter_edit_mode()
    return engine


@pytest.fixture
def sqlite_db(tmp_path):
    """Temporary SQLite file with a populated users table."""
    db_path = tmp_path / "test.db"
    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE users (id INTEGER, name TEXT, email TEXT)")
    conn.executemany(
        "INSERT INTO users VALUES (?, ?, ?)",
        [(1, "Alice", "a@x.com"), (2, "Bob", None), (3, "Carol", "c@x.com")],
    )
    conn.commit()
    conn.close()
    return db_path
