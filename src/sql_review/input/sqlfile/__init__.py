from sql_review.input.sqlfile.adapter import SqlFileInput
from sql_review.input.sqlfile.splitter import SplitStatement, SqlStatementSplitter

__all__ = ["SqlFileInput", "SplitStatement", "SqlStatementSplitter"]
