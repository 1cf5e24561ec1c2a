from typing import Protocol, runtime_checkable

from sql_review.domain import Dialect, Dimension, DimensionResult


@runtime_checkable
class DimensionWorker(Protocol):
    """Protocol for per-dimension analysis workers.

    ``run`` must always return a result; failures are reported through
    ``DimensionResult.success`` rather than raised.
    """

    @property
    def dimension(self) -> Dimension:
        ...

    async def run(self, sql: str, dialect: Dialect) -> DimensionResult:
        ...
