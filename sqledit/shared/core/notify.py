"""Status message sinks."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any

SEVERITIES = ("information", "warning", "error")

_SEVERITY_STYLES = {
    "information": "cyan",
    "warning": "yellow",
    "error": "bold red",
}


@dataclass(frozen=True)
class LogMessage:
    """A single status message."""

    message: str
    severity: str = "information"


class MessageLog:
    """Bounded in-memory log of status messages."""

    def __init__(self, max_messages: int = 200) -> None:
        self._messages: deque[LogMessage] = deque(maxlen=max_messages)

    def notify(self, message: str, *, severity: str = "information") -> None:
        if severity not in SEVERITIES:
            severity = "information"
        self._messages.append(LogMessage(message, severity))

    @property
    def messages(self) -> list[LogMessage]:
        return list(self._messages)

    @property
    def last(self) -> LogMessage | None:
        return self._messages[-1] if self._messages else None

    def texts(self, severity: str | None = None) -> list[str]:
        """Return message texts, optionally only those with the given severity."""
        return [m.message for m in self._messages if severity is None or m.severity == severity]

    def clear(self) -> None:
        self._messages.clear()


class ConsoleNotifier:
    """Render status messages to stderr with rich styling."""

    def __init__(self, console: Any | None = None) -> None:
        if console is None:
            from rich.console import Console

            console = Console(stderr=True)
        self._console = console

    def notify(self, message: str, *, severity: str = "information") -> None:
        from rich.markup import escape

        style = _SEVERITY_STYLES.get(severity, _SEVERITY_STYLES["information"])
        self._console.print(f"[{style}]{escape(message)}[/]")
