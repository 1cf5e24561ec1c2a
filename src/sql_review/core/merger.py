"""Merging of per-dimension results into a single report.

Merging is pure: no I/O, no judge calls, and identical inputs always give
identical issue ordering and score.
"""

from collections.abc import Iterable
from datetime import datetime

from sql_review.domain import (
    ALL_DIMENSIONS,
    Dialect,
    Dimension,
    DimensionResult,
    MergedReport,
    SecurityVeto,
    Severity,
    TaggedIssue,
    TaggedRecommendation,
    score_label,
)

VETO_SCORE_THRESHOLD = 40
VETO_SCORE_CAP = 30
VETO_RISK_LEVELS = frozenset({"high", "critical"})

ALL_FAILED_SUMMARY = "All analysis dimensions failed; no judgment is available for this statement."


def evaluate_security_veto(security: DimensionResult | None) -> SecurityVeto:
    if security is None:
        return SecurityVeto()
    score = security.payload.dimension_score
    risk = (security.payload.risk_level or "").strip().lower()
    if score is not None and score < VETO_SCORE_THRESHOLD:
        return SecurityVeto(
            triggered=True,
            reason=f"security score {score} is below {VETO_SCORE_THRESHOLD}",
        )
    if risk in VETO_RISK_LEVELS:
        return SecurityVeto(triggered=True, reason=f"security risk level is {risk}")
    return SecurityVeto()


def build_summary(
    issues: tuple[TaggedIssue, ...],
    recommendations: tuple[TaggedRecommendation, ...],
    overall_score: int,
    veto: SecurityVeto,
) -> str:
    severe = sum(1 for issue in issues if issue.severity >= Severity.HIGH)
    sentences = [
        f"Found {len(issues)} issue(s), {severe} of high or critical severity.",
        f"{len(recommendations)} recommendation(s) provided.",
        f"Overall score {overall_score}/100 ({score_label(overall_score)}).",
    ]
    if veto.triggered:
        sentences.append(f"Security veto applied: {veto.reason}.")
    return " ".join(sentences)


def merge(
    results: Iterable[DimensionResult],
    *,
    sql: str = "",
    dialect: Dialect = Dialect.GENERIC,
    created_at: datetime | None = None,
) -> MergedReport:
    by_dimension: dict[Dimension, DimensionResult] = {r.dimension: r for r in results}
    ordered = [by_dimension[d] for d in ALL_DIMENSIONS if d in by_dimension]

    issues = tuple(
        TaggedIssue(dimension=r.dimension, description=i.description, severity=i.severity)
        for r in ordered
        for i in r.payload.issues
    )
    recommendations = tuple(
        TaggedRecommendation(dimension=r.dimension, text=text)
        for r in ordered
        for text in r.payload.recommendations
    )

    veto = evaluate_security_veto(by_dimension.get(Dimension.SECURITY))
    if veto.triggered:
        security_score = by_dimension[Dimension.SECURITY].payload.dimension_score
        overall_score = min(VETO_SCORE_CAP, security_score or 0)
    else:
        scores = [r.payload.dimension_score for r in ordered if r.payload.dimension_score is not None]
        overall_score = round(sum(scores) / len(scores)) if scores else 0
    overall_score = max(0, min(100, overall_score))

    success = any(r.success for r in ordered)
    if success:
        summary = build_summary(issues, recommendations, overall_score, veto)
    else:
        summary = ALL_FAILED_SUMMARY

    extra = {"created_at": created_at} if created_at is not None else {}
    return MergedReport(
        success=success,
        summary=summary,
        overall_score=overall_score,
        sql=sql,
        dialect=dialect,
        all_issues=issues,
        all_recommendations=recommendations,
        security_veto=veto,
        per_dimension={r.dimension: r for r in ordered},
        **extra,
    )
