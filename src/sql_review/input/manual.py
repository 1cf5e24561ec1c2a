from collections.abc import Sequence

from sql_review.domain import Statement


class ManualInput:
    """Manual input source for programmatically feeding statements."""

    def __init__(self, statements: Sequence[Statement | str]) -> None:
        self._statements: tuple[Statement, ...] = tuple(
            s if isinstance(s, Statement) else Statement(sql=s, source="manual")
            for s in statements
        )
        self._index: int = 0

    def __aiter__(self) -> "ManualInput":
        return self

    async def __anext__(self) -> Statement:
        if self._index >= len(self._statements):
            raise StopAsyncIteration
        statement = self._statements[self._index]
        self._index += 1
        return statement
