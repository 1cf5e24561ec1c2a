"""Core domain models for multi-dimension SQL analysis."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import IntEnum, StrEnum
from typing import Any

from sql_review.domain.exceptions import ValidationError


class Dimension(StrEnum):
    """Independent analysis axes, in merge order."""

    PERFORMANCE = "performance"
    SECURITY = "security"
    STANDARDS = "standards"


ALL_DIMENSIONS: tuple[Dimension, ...] = tuple(Dimension)


class Dialect(StrEnum):
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLSERVER = "sqlserver"
    ORACLE = "oracle"
    GENERIC = "generic"


_DIALECT_ALIASES: dict[str, Dialect] = {
    "postgres": Dialect.POSTGRESQL,
    "pg": Dialect.POSTGRESQL,
    "mssql": Dialect.SQLSERVER,
    "tsql": Dialect.SQLSERVER,
    "mariadb": Dialect.MYSQL,
}


class Severity(IntEnum):
    """Issue severity levels, ordered for comparison (higher value = higher severity)."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def from_label(cls, label: Any) -> "Severity":
        """Map a judge-supplied label to a severity, defaulting to MEDIUM."""
        if isinstance(label, str):
            try:
                return cls[label.strip().upper()]
            except KeyError:
                return cls.MEDIUM
        return cls.MEDIUM


class ParseStrategy(StrEnum):
    STRUCTURED_PARSE = "structured_parse"
    RECOVERED_PARSE = "recovered_parse"
    FALLBACK = "fallback"


def parse_dimensions(names: Iterable[str | Dimension] | None) -> frozenset[Dimension]:
    """Convert dimension names to a set; an empty or missing selection means all."""
    if not names:
        return frozenset(ALL_DIMENSIONS)
    dimensions: set[Dimension] = set()
    for name in names:
        try:
            dimensions.add(Dimension(str(name).strip().lower()))
        except ValueError:
            supported = ", ".join(d.value for d in ALL_DIMENSIONS)
            raise ValidationError(
                f"Unsupported dimension {name!r}; expected one of: {supported}"
            ) from None
    return frozenset(dimensions)


def parse_dialect(name: str | Dialect | None) -> Dialect | None:
    if name is None:
        return None
    key = str(name).strip().lower()
    if not key:
        return None
    if key in _DIALECT_ALIASES:
        return _DIALECT_ALIASES[key]
    try:
        return Dialect(key)
    except ValueError:
        supported = ", ".join(d.value for d in Dialect)
        raise ValidationError(f"Unsupported dialect {name!r}; expected one of: {supported}") from None


@dataclass(frozen=True, slots=True)
class AnalysisRequest:
    """A single statement to analyze, with the caller's options."""

    sql: str
    dimensions: frozenset[Dimension] = frozenset()
    dialect_hint: Dialect | None = None
    max_concurrency: int | None = None
    timeout: float | None = None

    @classmethod
    def from_options(
        cls,
        sql: str,
        dimensions: Iterable[str | Dimension] | None = None,
        dialect_hint: str | Dialect | None = None,
        max_concurrency: int | None = None,
        timeout: float | None = None,
    ) -> "AnalysisRequest":
        return cls(
            sql=sql,
            dimensions=parse_dimensions(dimensions),
            dialect_hint=parse_dialect(dialect_hint),
            max_concurrency=max_concurrency,
            timeout=timeout,
        )

    @property
    def enabled_dimensions(self) -> tuple[Dimension, ...]:
        """Enabled dimensions in declaration order, never empty."""
        if not self.dimensions:
            return ALL_DIMENSIONS
        return tuple(d for d in ALL_DIMENSIONS if d in self.dimensions)

    def validate(self) -> None:
        if not isinstance(self.sql, str) or not self.sql.strip():
            raise ValidationError("SQL text must not be empty")
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValidationError("max_concurrency must be at least 1")
        if self.timeout is not None and self.timeout <= 0:
            raise ValidationError("timeout must be positive")


@dataclass(frozen=True, slots=True)
class DialectGuess:
    dialect: Dialect
    match_score: int = 0


@dataclass(frozen=True, slots=True)
class Issue:
    description: str
    severity: Severity = Severity.MEDIUM


@dataclass(frozen=True, slots=True)
class DimensionPayload:
    """Common envelope for every dimension's judgment.

    ``risk_level`` is only meaningful for security, ``metrics`` for
    performance and ``compliance_score`` for standards.
    """

    summary: str
    issues: tuple[Issue, ...] = ()
    recommendations: tuple[str, ...] = ()
    dimension_score: int | None = None
    risk_level: str | None = None
    metrics: dict[str, Any] | None = None
    compliance_score: int | None = None


@dataclass(frozen=True, slots=True)
class DimensionResult:
    dimension: Dimension
    success: bool
    payload: DimensionPayload
    confidence: float
    raw_text: str = ""
    strategy_used: ParseStrategy = ParseStrategy.FALLBACK
    duration_ms: int = 0
    error: str | None = None


@dataclass(frozen=True, slots=True)
class TaggedIssue:
    dimension: Dimension
    description: str
    severity: Severity


@dataclass(frozen=True, slots=True)
class TaggedRecommendation:
    dimension: Dimension
    text: str


@dataclass(frozen=True, slots=True)
class SecurityVeto:
    triggered: bool = False
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class MergedReport:
    """The single decision merged from every dimension's result."""

    success: bool
    summary: str
    overall_score: int
    sql: str = ""
    dialect: Dialect = Dialect.GENERIC
    all_issues: tuple[TaggedIssue, ...] = ()
    all_recommendations: tuple[TaggedRecommendation, ...] = ()
    security_veto: SecurityVeto = field(default_factory=SecurityVeto)
    per_dimension: dict[Dimension, DimensionResult] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def severity(self) -> Severity | None:
        """Return the highest severity among all issues."""
        if not self.all_issues:
            return None
        return max(issue.severity for issue in self.all_issues)


@dataclass(frozen=True, slots=True)
class BatchError:
    """Marks a batch slot whose statement could not be analyzed."""

    index: int
    error: str
    error_type: str = "ValidationError"


@dataclass(frozen=True, slots=True)
class EngineStats:
    total_calls: int = 0
    success_count: int = 0
    error_count: int = 0
    average_duration_ms: float = 0.0
    cache_hit_rate: float = 0.0


@dataclass(frozen=True, slots=True)
class Statement:
    """A SQL statement read from a source, with where it came from."""

    sql: str
    source: str | None = None
    line: int | None = None


_SCORE_LABELS: tuple[tuple[int, str], ...] = (
    (90, "excellent"),
    (80, "good"),
    (60, "fair"),
)


def score_label(score: int) -> str:
    for threshold, label in _SCORE_LABELS:
        if score >= threshold:
            return label
    return "needs improvement"
