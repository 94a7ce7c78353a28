"""sqledit - Spreadsheet-style editing of SQL query results."""

from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "main",
    "EditEngine",
    "QueryResult",
]

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0.dev"

if TYPE_CHECKING:
    from sqledit.domains.editing.app.engine import EditEngine
    from sqledit.domains.results.model import QueryResult
    from .cli import main


def __getattr__(name: str) -> Any:
    """Lazy import for heavy modules to keep package import side-effect free."""
    if name == "main":
        from .cli import main

        return main
    if name == "EditEngine":
        from sqledit.domains.editing.app.engine import EditEngine

        return EditEngine
    if name == "QueryResult":
        from sqledit.domains.results.model import QueryResult

        return QueryResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
