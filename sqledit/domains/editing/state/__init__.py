"""State classes for the edit engine."""

from sqledit.domains.editing.state.history import EditHistory, HistoryEntry
from sqledit.domains.editing.state.ledger import CellCoordinate, CellModification, ModificationLedger, SelectionRange
from sqledit.domains.editing.state.selection import CellSelection

__all__ = [
    "CellCoordinate",
    "CellModification",
    "CellSelection",
    "EditHistory",
    "HistoryEntry",
    "ModificationLedger",
    "SelectionRange",
]
