from pathlib import Path

from sql_review.domain import Statement
from sql_review.input.sqlfile.splitter import SplitStatement, SqlStatementSplitter


class SqlFileInput:
    """Input adapter that yields each statement of a SQL script file."""

    def __init__(
        self,
        file_path: str | Path,
        splitter: SqlStatementSplitter | None = None,
    ) -> None:
        self._file_path = Path(file_path)
        self._splitter = splitter or SqlStatementSplitter()
        self._source = str(self._file_path)
        self._statements: list[SplitStatement] | None = None
        self._index: int = 0

    @classmethod
    def from_text(
        cls,
        text: str,
        source: str = "<text>",
        splitter: SqlStatementSplitter | None = None,
    ) -> "SqlFileInput":
        """Create adapter from an in-memory script."""
        instance = cls.__new__(cls)
        instance._file_path = Path("/dev/null")
        instance._splitter = splitter or SqlStatementSplitter()
        instance._source = source
        instance._statements = instance._splitter.split(text)
        instance._index = 0
        return instance

    def __aiter__(self) -> "SqlFileInput":
        return self

    async def __anext__(self) -> Statement:
        if self._statements is None:
            self._load_file()

        if self._index >= len(self._statements):  # type: ignore[arg-type]
            raise StopAsyncIteration

        split = self._statements[self._index]  # type: ignore[index]
        self._index += 1
        return Statement(sql=split.sql, source=self._source, line=split.line)

    def _load_file(self) -> None:
        if not self._file_path.exists():
            raise FileNotFoundError(f"SQL file not found: {self._file_path}")
        text = self._file_path.read_text(encoding="utf-8")
        self._statements = self._splitter.split(text)
