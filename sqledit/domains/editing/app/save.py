"""Batch execution of generated statements.

Unlike ad-hoc query execution, a save batch keeps going after a failed
statement so that every independent row update gets its chance to land.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqledit.domains.editing.exceptions import StatementExecutionError

if TYPE_CHECKING:
    from sqledit.domains.results.model import QueryResult
    from sqledit.shared.core.protocols import StatementExecutorProtocol


@dataclass
class StatementResult:
    """Result from executing a single statement."""

    statement: str
    result: QueryResult | None
    success: bool
    error: StatementExecutionError | None = None


@dataclass
class BatchResult:
    """Result from executing a batch of statements."""

    results: list[StatementResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def has_errors(self) -> bool:
        return self.failed_count > 0

    @property
    def errors(self) -> list[StatementExecutionError]:
        return [r.error for r in self.results if r.error is not None]


class BatchStatementExecutor:
    """Executes statements one at a time, continuing past failures.

    Usage:
        batch = BatchStatementExecutor(executor, "conn-1", database="shop")
        outcome = await batch.execute(["UPDATE ...;", "UPDATE ...;"])
        print(outcome.success_count, outcome.failed_count)
    """

    def __init__(
        self,
        executor: StatementExecutorProtocol,
        connection_id: str,
        database: str | None = None,
    ) -> None:
        self._executor = executor
        self._connection_id = connection_id
        self._database = database

    async def execute(self, statements: Sequence[str]) -> BatchResult:
        """Execute statements sequentially in order.

        Args:
            statements: Statements to run; each one is awaited before the
                next starts.

        Returns:
            BatchResult with one StatementResult per statement.
        """
        results: list[StatementResult] = []
        for statement in statements:
            try:
                result = await self._executor.execute(self._connection_id, statement, self._database)
            except Exception as e:
                results.append(
                    StatementResult(
                        statement=statement,
                        result=None,
                        success=False,
                        error=StatementExecutionError(statement, e, database=self._database),
                    )
                )
                continue
            results.append(StatementResult(statement=statement, result=result, success=True))
        return BatchResult(results=results)
