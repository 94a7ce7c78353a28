"""Tests for the CLI commands."""

from __future__ import annotations

import json
import sqlite3


class TestParseAssignment:
    """Tests for --set ROW:COLUMN=VALUE parsing."""

    def test_valid(self):
        """Row, column and value should be split out."""
        from sqledit.domains.editing.cli.commands import parse_assignment

        assert parse_assignment("0:name=Al=ice") == (0, "name", "Al=ice")
        assert parse_assignment("2:email=") == (2, "email", "")

    def test_invalid(self):
        """Malformed assignments should raise ValueError."""
        import pytest

        from sqledit.domains.editing.cli.commands import parse_assignment

        for text in ("name=x", "0:=x", "a:name=x", "0:name"):
            with pytest.raises(ValueError):
                parse_assignment(text)


class TestOutputTable:
    """Tests for plain table output."""

    def test_long_text_truncated(self, capsys):
        """Values over 50 characters should be cut with '..'."""
        from sqledit.domains.editing.cli.commands import output_table
        from sqledit.domains.results.model import QueryResult

        output_table(QueryResult(columns=["id", "text"], rows=[[1, "A" * 100], [2, None]]))

        out = capsys.readouterr().out
        assert ".." in out
        assert "A" * 100 not in out
        assert "NULL" in out
        assert "(2 row(s) returned)" in out


class TestCli:
    """Tests for the sqledit entry point."""

    def test_sql_command(self, tmp_path, capsys):
        """sql should print UPDATE statements for a snapshot and edits."""
        from sqledit.cli import main

        result_file = tmp_path / "result.json"
        result_file.write_text(json.dumps({"columns": ["id", "name"], "rows": [[1, "Alice"], [2, None]]}))
        edits_file = tmp_path / "edits.json"
        edits_file.write_text(json.dumps([{"row": 1, "column": "name", "value": "Bob"}]))

        code = main(
            [
                "sql",
                "--query",
                "SELECT * FROM users",
                "--result",
                str(result_file),
                "--edits",
                str(edits_file),
                "--dialect",
                "mysql",
                "--database",
                "shop",
            ]
        )

        assert code == 0
        assert capsys.readouterr().out.strip() == (
            "UPDATE `shop`.`users` SET `name` = 'Bob' WHERE `id` = 2 AND `name` IS NULL;"
        )

    def test_sql_command_unknown_column(self, tmp_path, capsys):
        """Edits naming a missing column should fail."""
        from sqledit.cli import main

        result_file = tmp_path / "result.json"
        result_file.write_text(json.dumps({"columns": ["id"], "rows": [[1]]}))
        edits_file = tmp_path / "edits.json"
        edits_file.write_text(json.dumps([{"row": 0, "column": "nope", "value": "x"}]))

        code = main(["sql", "-q", "SELECT * FROM t", "-r", str(result_file), "-e", str(edits_file)])

        assert code == 1
        assert "Unknown column" in capsys.readouterr().out

    def test_sql_command_unresolvable(self, tmp_path, capsys):
        """A query without a table should fail with an error."""
        from sqledit.cli import main

        result_file = tmp_path / "result.json"
        result_file.write_text(json.dumps({"columns": ["x"], "rows": [[1]]}))
        edits_file = tmp_path / "edits.json"
        edits_file.write_text(json.dumps([{"row": 0, "column": "x", "value": 2}]))

        code = main(["sql", "-q", "SELECT 1 AS x", "-r", str(result_file), "-e", str(edits_file)])

        assert code == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_edit_dry_run(self, sqlite_db, capsys):
        """--dry-run should print statements and leave the file untouched."""
        from sqledit.cli import main

        code = main(
            ["edit", "--file-path", str(sqlite_db), "-q", "SELECT * FROM users", "--set", "0:name=Zed", "--dry-run"]
        )

        assert code == 0
        assert "UPDATE users SET name = 'Zed' WHERE id = 1" in capsys.readouterr().out
        conn = sqlite3.connect(sqlite_db)
        assert conn.execute("SELECT name FROM users WHERE id = 1").fetchone() == ("Alice",)
        conn.close()

    def test_edit_saves(self, sqlite_db, capsys):
        """edit should apply the assignments to the database."""
        from sqledit.cli import main

        code = main(["edit", "--file-path", str(sqlite_db), "-q", "SELECT * FROM users", "-s", "2:email="])

        assert code == 0
        conn = sqlite3.connect(sqlite_db)
        assert conn.execute("SELECT email FROM users WHERE id = 3").fetchone() == (None,)
        conn.close()
        assert "Carol" in capsys.readouterr().out

    def test_edit_requires_assignment(self, sqlite_db, capsys):
        """edit without --set should fail."""
        from sqledit.cli import main

        assert main(["edit", "--file-path", str(sqlite_db), "-q", "SELECT * FROM users"]) == 1

    def test_export_csv(self, sqlite_db, capsys):
        """export should print CSV."""
        from sqledit.cli import main

        code = main(
            ["export", "--file-path", str(sqlite_db), "-q", "SELECT id, email FROM users ORDER BY id", "-o", "csv"]
        )

        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["id,email", "1,a@x.com", "2,", "3,c@x.com"]

    def test_missing_query(self, sqlite_db, capsys):
        """Commands need --query or --file."""
        from sqledit.cli import main

        assert main(["export", "--file-path", str(sqlite_db)]) == 1
        assert "Either --query or --file" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        """Running without a command should print help and fail."""
        from sqledit.cli import main

        assert main([]) == 1
        assert "usage" in capsys.readouterr().out
