"""Unit tests for status message sinks and collaborator protocols."""

from __future__ import annotations

import io


class TestMessageLog:
    """Tests for the in-memory message log."""

    def test_records_messages(self):
        """Messages should be kept in order with their severity."""
        from sqledit.shared.core.notify import LogMessage, MessageLog

        log = MessageLog()
        log.notify("saved")
        log.notify("failed", severity="error")

        assert log.messages == [LogMessage("saved", "information"), LogMessage("failed", "error")]
        assert log.texts("error") == ["failed"]
        assert log.last.message == "failed"

    def test_bounded(self):
        """Old messages should be dropped past the limit."""
        from sqledit.shared.core.notify import MessageLog

        log = MessageLog(max_messages=2)
        for i in range(3):
            log.notify(str(i))

        assert log.texts() == ["1", "2"]

    def test_unknown_severity_is_information(self):
        """Unknown severities should be recorded as information."""
        from sqledit.shared.core.notify import MessageLog

        log = MessageLog()
        log.notify("x", severity="debug")

        assert log.last.severity == "information"

    def test_clear(self):
        """clear should drop every message."""
        from sqledit.shared.core.notify import MessageLog

        log = MessageLog()
        log.notify("x")
        log.clear()

        assert log.last is None


class TestConsoleNotifier:
    """Tests for the rich console notifier."""

    def test_prints_message_text(self):
        """Messages should be printed without interpreting markup."""
        from rich.console import Console

        from sqledit.shared.core.notify import ConsoleNotifier

        buffer = io.StringIO()
        notifier = ConsoleNotifier(Console(file=buffer, force_terminal=False, width=120))

        notifier.notify("Saved [2] change(s)", severity="warning")

        assert buffer.getvalue().strip() == "Saved [2] change(s)"


class TestProtocols:
    """Tests that the bundled collaborators satisfy the engine's protocols."""

    def test_clipboards(self):
        """Both clipboard backends should satisfy ClipboardProtocol."""
        from sqledit.domains.editing.clipboard import MemoryClipboard, SystemClipboard
        from sqledit.shared.core.protocols import ClipboardProtocol

        assert isinstance(MemoryClipboard(), ClipboardProtocol)
        assert isinstance(SystemClipboard(), ClipboardProtocol)

    def test_notifiers(self):
        """Both notifiers should satisfy NotifierProtocol."""
        from sqledit.shared.core.notify import ConsoleNotifier, MessageLog
        from sqledit.shared.core.protocols import NotifierProtocol

        assert isinstance(MessageLog(), NotifierProtocol)
        assert isinstance(ConsoleNotifier(), NotifierProtocol)

    def test_sqlite_executor(self, tmp_path):
        """SQLiteExecutor should satisfy StatementExecutorProtocol."""
        from sqledit.db.sqlite_executor import SQLiteExecutor
        from sqledit.shared.core.protocols import StatementExecutorProtocol

        assert isinstance(SQLiteExecutor(tmp_path / "x.db"), StatementExecutorProtocol)
