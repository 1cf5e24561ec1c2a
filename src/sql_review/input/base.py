from typing import Protocol, Self, runtime_checkable

from sql_review.domain import Statement


@runtime_checkable
class StatementInput(Protocol):
    """Protocol for async statement sources."""

    def __aiter__(self) -> Self:
        ...

    async def __anext__(self) -> Statement:
        ...
