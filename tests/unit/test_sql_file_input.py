from pathlib import Path

import pytest

from sql_review.domain import Statement
from sql_review.input import SqlFileInput, SqlStatementSplitter, StatementInput
from sql_review.input.sqlfile import SplitStatement

SCRIPT = """SELECT 1;
SELECT 'a;b' FROM t;

-- only a comment
;
UPDATE t SET x = 1"""


@pytest.fixture
def splitter() -> SqlStatementSplitter:
    return SqlStatementSplitter()


class TestSqlStatementSplitter:
    def test_splits_on_semicolons_with_lines(self, splitter: SqlStatementSplitter) -> None:
        assert splitter.split(SCRIPT) == [
            SplitStatement(sql="SELECT 1", line=1),
            SplitStatement(sql="SELECT 'a;b' FROM t", line=2),
            SplitStatement(sql="UPDATE t SET x = 1", line=6),
        ]

    def test_empty_text(self, splitter: SqlStatementSplitter) -> None:
        assert splitter.split("") == []
        assert splitter.split(" ;\n ; ") == []

    def test_quoted_identifiers(self, splitter: SqlStatementSplitter) -> None:
        result = splitter.split('SELECT [a;b] FROM t; SELECT `c;d` FROM u; SELECT "e;f" FROM v')
        assert [s.sql for s in result] == [
            "SELECT [a;b] FROM t",
            "SELECT `c;d` FROM u",
            'SELECT "e;f" FROM v',
        ]

    def test_escaped_single_quote(self, splitter: SqlStatementSplitter) -> None:
        result = splitter.split("SELECT 'it''s; fine'; SELECT 2")
        assert [s.sql for s in result] == ["SELECT 'it''s; fine'", "SELECT 2"]

    def test_dashes_inside_string_are_not_comments(self, splitter: SqlStatementSplitter) -> None:
        result = splitter.split("SELECT '--x;' ; SELECT 2")
        assert [s.sql for s in result] == ["SELECT '--x;'", "SELECT 2"]

    def test_semicolon_in_line_comment(self, splitter: SqlStatementSplitter) -> None:
        result = splitter.split("SELECT 1 -- trailing; note\nFROM t;")
        assert [s.sql for s in result] == ["SELECT 1 -- trailing; note\nFROM t"]

    def test_semicolon_in_block_comment(self, splitter: SqlStatementSplitter) -> None:
        result = splitter.split("/* a; b */ SELECT 1; SELECT 2")
        assert result == [
            SplitStatement(sql="/* a; b */ SELECT 1", line=1),
            SplitStatement(sql="SELECT 2", line=1),
        ]

    def test_multiline_block_comment_advances_lines(self, splitter: SqlStatementSplitter) -> None:
        result = splitter.split("/*\nx;\n*/\nSELECT 1;")
        assert result[0].line == 4


class TestSqlFileInput:
    def test_implements_statement_input_protocol(self, tmp_path: Path) -> None:
        assert isinstance(SqlFileInput(tmp_path / "x.sql"), StatementInput)

    @pytest.mark.asyncio
    async def test_reads_statements_from_file(self, tmp_path: Path) -> None:
        script = tmp_path / "migration.sql"
        script.write_text(SCRIPT, encoding="utf-8")

        collected = [statement async for statement in SqlFileInput(script)]

        assert collected == [
            Statement(sql="SELECT 1", source=str(script), line=1),
            Statement(sql="SELECT 'a;b' FROM t", source=str(script), line=2),
            Statement(sql="UPDATE t SET x = 1", source=str(script), line=6),
        ]

    @pytest.mark.asyncio
    async def test_missing_file_raises_on_iteration(self, tmp_path: Path) -> None:
        adapter = SqlFileInput(tmp_path / "missing.sql")

        with pytest.raises(FileNotFoundError, match="SQL file not found"):
            async for _ in adapter:
                pass

    @pytest.mark.asyncio
    async def test_from_text(self) -> None:
        adapter = SqlFileInput.from_text("SELECT 1; SELECT 2")

        collected = [statement async for statement in adapter]

        assert [s.sql for s in collected] == ["SELECT 1", "SELECT 2"]
        assert all(s.source == "<text>" for s in collected)

    @pytest.mark.asyncio
    async def test_from_text_custom_source(self) -> None:
        adapter = SqlFileInput.from_text("SELECT 1", source="inline")
        statement = await adapter.__anext__()
        assert statement.source == "inline"
        assert statement.line == 1
