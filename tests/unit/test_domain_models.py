import pytest

from sql_review.domain import (
    ALL_DIMENSIONS,
    AnalysisRequest,
    Dialect,
    Dimension,
    Issue,
    MergedReport,
    Severity,
    TaggedIssue,
    ValidationError,
    parse_dialect,
    parse_dimensions,
    score_label,
)


class TestSeverity:
    def test_severity_ordering(self) -> None:
        assert Severity.LOW < Severity.MEDIUM < Severity.HIGH < Severity.CRITICAL

    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("low", Severity.LOW),
            ("High", Severity.HIGH),
            (" CRITICAL ", Severity.CRITICAL),
            ("severe", Severity.MEDIUM),
            (None, Severity.MEDIUM),
            (3, Severity.MEDIUM),
        ],
    )
    def test_from_label(self, label: object, expected: Severity) -> None:
        assert Severity.from_label(label) is expected


class TestParseDimensions:
    def test_none_means_all(self) -> None:
        assert parse_dimensions(None) == frozenset(ALL_DIMENSIONS)

    def test_empty_means_all(self) -> None:
        assert parse_dimensions([]) == frozenset(ALL_DIMENSIONS)

    def test_names_are_case_insensitive(self) -> None:
        assert parse_dimensions(["Security", "PERFORMANCE"]) == {
            Dimension.SECURITY,
            Dimension.PERFORMANCE,
        }

    def test_unknown_dimension_raises(self) -> None:
        with pytest.raises(ValidationError, match="Unsupported dimension"):
            parse_dimensions(["style"])


class TestParseDialect:
    def test_none_and_blank(self) -> None:
        assert parse_dialect(None) is None
        assert parse_dialect("  ") is None

    def test_aliases(self) -> None:
        assert parse_dialect("postgres") is Dialect.POSTGRESQL
        assert parse_dialect("MSSQL") is Dialect.SQLSERVER

    def test_unknown_dialect_raises(self) -> None:
        with pytest.raises(ValidationError, match="Unsupported dialect"):
            parse_dialect("db2")


class TestAnalysisRequest:
    def test_enabled_dimensions_default_to_all(self) -> None:
        request = AnalysisRequest(sql="SELECT 1")
        assert request.enabled_dimensions == ALL_DIMENSIONS

    def test_enabled_dimensions_follow_declaration_order(self) -> None:
        request = AnalysisRequest.from_options("SELECT 1", dimensions=["standards", "performance"])
        assert request.enabled_dimensions == (Dimension.PERFORMANCE, Dimension.STANDARDS)

    def test_from_options_resolves_hint(self) -> None:
        request = AnalysisRequest.from_options("SELECT 1", dialect_hint="pg")
        assert request.dialect_hint is Dialect.POSTGRESQL

    def test_request_is_immutable(self) -> None:
        request = AnalysisRequest(sql="SELECT 1")
        with pytest.raises(AttributeError):
            request.sql = "SELECT 2"  # type: ignore[misc]

    @pytest.mark.parametrize("sql", ["", "   ", "\n\t"])
    def test_validate_rejects_blank_sql(self, sql: str) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            AnalysisRequest(sql=sql).validate()

    def test_validate_rejects_bad_knobs(self) -> None:
        with pytest.raises(ValidationError):
            AnalysisRequest(sql="SELECT 1", max_concurrency=0).validate()
        with pytest.raises(ValidationError):
            AnalysisRequest(sql="SELECT 1", timeout=0).validate()

    def test_validate_accepts_valid_request(self) -> None:
        AnalysisRequest(sql="SELECT 1", max_concurrency=2, timeout=5.0).validate()


class TestMergedReport:
    def test_severity_is_highest_issue(self) -> None:
        report = MergedReport(
            success=True,
            summary="",
            overall_score=50,
            all_issues=(
                TaggedIssue(Dimension.PERFORMANCE, "scan", Severity.LOW),
                TaggedIssue(Dimension.SECURITY, "injection", Severity.CRITICAL),
            ),
        )
        assert report.severity is Severity.CRITICAL

    def test_severity_none_without_issues(self) -> None:
        report = MergedReport(success=True, summary="", overall_score=100)
        assert report.severity is None

    def test_issue_default_severity(self) -> None:
        assert Issue(description="x").severity is Severity.MEDIUM


@pytest.mark.parametrize(
    ("score", "label"),
    [(100, "excellent"), (90, "excellent"), (89, "good"), (80, "good"), (60, "fair"), (59, "needs improvement"), (0, "needs improvement")],
)
def test_score_label(score: int, label: str) -> None:
    assert score_label(score) == label
