from sql_review.output.base import ReportOutput
from sql_review.output.console import ConsoleReportOutput
from sql_review.output.history import HistoryFileOutput
from sql_review.output.serialization import report_to_dict, report_to_json
from sql_review.output.sqs import SqsReportOutput

__all__ = [
    "ReportOutput",
    "ConsoleReportOutput",
    "HistoryFileOutput",
    "SqsReportOutput",
    "report_to_dict",
    "report_to_json",
]
