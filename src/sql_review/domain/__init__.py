"""Domain models for multi-dimension SQL analysis."""

from sql_review.domain.exceptions import SqlReviewError, ValidationError
from sql_review.domain.models import (
    ALL_DIMENSIONS,
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
    TaggedIssue,
    TaggedRecommendation,
    parse_dialect,
    parse_dimensions,
    score_label,
)

__all__ = [
    "ALL_DIMENSIONS",
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
    "SqlReviewError",
    "Statement",
    "TaggedIssue",
    "TaggedRecommendation",
    "ValidationError",
    "parse_dialect",
    "parse_dimensions",
    "score_label",
]
