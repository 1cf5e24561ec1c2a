__version__ = "0.1.0"

from sql_review.cache import FingerprintCache, fingerprint
from sql_review.config import Settings, configure_logging, get_settings
from sql_review.core import OrchestrationEngine, ReportPipeline, merge
from sql_review.dialect import DialectIdentifier
from sql_review.dimensions import (
    DimensionWorker,
    JudgeDimensionWorker,
    PerformanceWorker,
    SecurityWorker,
    StandardsWorker,
    WorkerRegistry,
)
from sql_review.domain import (
    AnalysisRequest,
    BatchError,
    Dialect,
    DialectGuess,
    Dimension,
    DimensionPayload,
    DimensionResult,
    EngineStats,
    Issue,
    MergedReport,
    ParseStrategy,
    SecurityVeto,
    Severity,
    Statement,
    ValidationError,
)
from sql_review.input import ManualInput, SqlFileInput, StatementInput
from sql_review.judge import HttpJudge, Judge, JudgeResponse
from sql_review.knowledge import KnowledgeSource, Snippet
from sql_review.output import (
    ConsoleReportOutput,
    HistoryFileOutput,
    ReportOutput,
    SqsReportOutput,
)
from sql_review.parsing import ResultParser

__all__ = [
    "__version__",
    "OrchestrationEngine",
    "ReportPipeline",
    "merge",
    "DialectIdentifier",
    "ResultParser",
    "FingerprintCache",
    "fingerprint",
    "Settings",
    "get_settings",
    "configure_logging",
    "Judge",
    "JudgeResponse",
    "HttpJudge",
    "KnowledgeSource",
    "Snippet",
    "DimensionWorker",
    "JudgeDimensionWorker",
    "PerformanceWorker",
    "SecurityWorker",
    "StandardsWorker",
    "WorkerRegistry",
    "AnalysisRequest",
    "BatchError",
    "Dialect",
    "DialectGuess",
    "Dimension",
    "DimensionPayload",
    "DimensionResult",
    "EngineStats",
    "Issue",
    "MergedReport",
    "ParseStrategy",
    "SecurityVeto",
    "Severity",
    "Statement",
    "ValidationError",
    "StatementInput",
    "ManualInput",
    "SqlFileInput",
    "ReportOutput",
    "ConsoleReportOutput",
    "HistoryFileOutput",
    "SqsReportOutput",
]
