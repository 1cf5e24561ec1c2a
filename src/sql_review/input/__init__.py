from sql_review.input.base import StatementInput
from sql_review.input.manual import ManualInput
from sql_review.input.sqlfile import SqlFileInput, SqlStatementSplitter

__all__ = [
    "StatementInput",
    "ManualInput",
    "SqlFileInput",
    "SqlStatementSplitter",
]
