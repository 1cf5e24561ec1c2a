"""Best-effort parsing of judge responses into typed dimension results."""

import json
import logging
import math
from dataclasses import replace
from typing import Any, ClassVar

from sql_review.domain import (
    Dimension,
    DimensionPayload,
    DimensionResult,
    Issue,
    ParseStrategy,
    Severity,
)

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.3

FALLBACK_SUMMARIES: dict[Dimension, str] = {
    Dimension.PERFORMANCE: "Performance analysis is temporarily unavailable.",
    Dimension.SECURITY: "Security analysis is temporarily unavailable.",
    Dimension.STANDARDS: "Standards check is temporarily unavailable.",
}


def fallback_payload(dimension: Dimension) -> DimensionPayload:
    return DimensionPayload(
        summary=FALLBACK_SUMMARIES[dimension],
        risk_level="unknown" if dimension is Dimension.SECURITY else None,
    )


def fallback_result(
    dimension: Dimension,
    raw_text: str = "",
    error: str | None = None,
    duration_ms: int = 0,
) -> DimensionResult:
    """The degraded result substituted for a dimension that could not be evaluated."""
    return DimensionResult(
        dimension=dimension,
        success=False,
        payload=fallback_payload(dimension),
        confidence=FALLBACK_CONFIDENCE,
        raw_text=raw_text,
        strategy_used=ParseStrategy.FALLBACK,
        duration_ms=duration_ms,
        error=error,
    )


def find_balanced_object(text: str) -> str | None:
    """Return the first top-level ``{...}`` substring, or None if it never closes.

    Braces inside double-quoted strings do not count.
    """
    start = text.find("{")
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def coerce_number(value: Any) -> float | None:
    """Read a finite number from a number or numeric string; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
    elif not isinstance(value, int | float):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def coerce_score(value: Any) -> int | None:
    """Read a 0-100 score; a fraction strictly between 0 and 1 is scaled up."""
    number = coerce_number(value)
    if number is None:
        return None
    if 0 < number < 1:
        number *= 100
    return max(0, min(100, round(number)))


class ResultParser:
    """Turns free judge text into a ``DimensionResult``.

    Strategies are tried in order: strict JSON, then the first balanced
    object embedded in prose or a fenced block, then the canned fallback.
    Parsing never raises.
    """

    _issue_keys: ClassVar[dict[Dimension, tuple[str, ...]]] = {
        Dimension.PERFORMANCE: ("issues", "problems"),
        Dimension.SECURITY: ("issues", "vulnerabilities"),
        Dimension.STANDARDS: ("issues", "violations"),
    }

    _score_keys: ClassVar[dict[Dimension, tuple[str, ...]]] = {
        Dimension.PERFORMANCE: ("dimensionScore", "score", "performanceScore"),
        Dimension.SECURITY: ("dimensionScore", "score", "securityScore"),
        Dimension.STANDARDS: ("dimensionScore", "score", "standardsScore", "complianceScore"),
    }

    _completed_summaries: ClassVar[dict[Dimension, str]] = {
        Dimension.PERFORMANCE: "Performance analysis completed.",
        Dimension.SECURITY: "Security analysis completed.",
        Dimension.STANDARDS: "Standards check completed.",
    }

    def parse(self, raw_text: str, dimension: Dimension) -> DimensionResult:
        text = raw_text.strip() if isinstance(raw_text, str) else ""
        if not text:
            return fallback_result(dimension, raw_text=raw_text or "", error="empty response")

        for strategy, candidate in (
            (ParseStrategy.STRUCTURED_PARSE, text),
            (ParseStrategy.RECOVERED_PARSE, find_balanced_object(text)),
        ):
            if candidate is None:
                continue
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if not isinstance(data, dict):
                continue
            payload, confidence = self._normalize(data, dimension)
            logger.debug("Parsed %s response with %s", dimension, strategy)
            return DimensionResult(
                dimension=dimension,
                success=True,
                payload=payload,
                confidence=confidence,
                raw_text=raw_text,
                strategy_used=strategy,
            )

        logger.warning("Could not parse %s response, using fallback payload", dimension)
        return fallback_result(dimension, raw_text=raw_text, error="unparseable response")

    def _normalize(self, data: dict[str, Any], dimension: Dimension) -> tuple[DimensionPayload, float]:
        raw_summary = data.get("summary") or data.get("description")
        has_summary = bool(raw_summary)
        summary = str(raw_summary).strip() if has_summary else self._completed_summaries[dimension]

        issues = tuple(self._issue(item) for item in self._first_list(data, self._issue_keys[dimension]))
        recommendations = tuple(
            text
            for text in (
                self._recommendation(item)
                for item in self._first_list(data, ("recommendations", "suggestions"))
            )
            if text
        )

        score = None
        for key in self._score_keys[dimension]:
            score = coerce_score(data.get(key))
            if score is not None:
                break

        payload = DimensionPayload(
            summary=summary,
            issues=issues,
            recommendations=recommendations,
            dimension_score=score,
        )
        if dimension is Dimension.SECURITY:
            risk = data.get("riskLevel") or data.get("risk_level")
            payload = replace(payload, risk_level=str(risk).strip().lower() if risk else "unknown")
        elif dimension is Dimension.PERFORMANCE:
            metrics = data.get("metrics")
            payload = replace(payload, metrics=metrics if isinstance(metrics, dict) else None)
        elif dimension is Dimension.STANDARDS:
            payload = replace(payload, compliance_score=coerce_score(data.get("complianceScore")))

        confidence = coerce_number(data.get("confidence"))
        if confidence is None or not 0 <= confidence <= 1:
            completeness = (has_summary + bool(issues) + bool(recommendations)) / 3
            confidence = max(FALLBACK_CONFIDENCE, min(1.0, completeness))
        return payload, confidence

    @staticmethod
    def _first_list(data: dict[str, Any], keys: tuple[str, ...]) -> list[Any]:
        for key in keys:
            value = data.get(key)
            if isinstance(value, list):
                return value
        return []

    @staticmethod
    def _issue(item: Any) -> Issue:
        if isinstance(item, dict):
            description = next(
                (
                    str(item[key]).strip()
                    for key in ("description", "message", "issue", "title", "type")
                    if item.get(key)
                ),
                json.dumps(item, ensure_ascii=False),
            )
            label = item.get("severity") or item.get("level") or item.get("priority")
            return Issue(description=description, severity=Severity.from_label(label))
        return Issue(description=str(item).strip())

    @staticmethod
    def _recommendation(item: Any) -> str:
        if isinstance(item, dict):
            parts = [
                str(item[key]).strip()
                for key in ("action", "title", "description", "detail")
                if item.get(key)
            ]
            return ": ".join(parts) if parts else json.dumps(item, ensure_ascii=False)
        return str(item).strip()
