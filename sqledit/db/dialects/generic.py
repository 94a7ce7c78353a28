"""Passthrough dialect used for unknown database types."""

from __future__ import annotations

from .base import SqlDialect


class GenericDialect(SqlDialect):
    """Dialect that leaves identifiers untouched."""

    @property
    def name(self) -> str:
        return "Generic SQL"

    def quote_identifier(self, name: str) -> str:
        return name
