import logging
from collections.abc import Iterable, Sequence

from sql_review.core.engine import OrchestrationEngine
from sql_review.domain import (
    AnalysisRequest,
    Dialect,
    Dimension,
    ValidationError,
    parse_dialect,
    parse_dimensions,
)
from sql_review.input import StatementInput
from sql_review.output import ReportOutput

logger = logging.getLogger(__name__)


class ReportPipeline:
    def __init__(
        self,
        input_source: StatementInput,
        engine: OrchestrationEngine,
        outputs: Sequence[ReportOutput],
        dimensions: Iterable[str | Dimension] | None = None,
        dialect_hint: str | Dialect | None = None,
    ) -> None:
        self._input = input_source
        self._engine = engine
        self._outputs = tuple(outputs)
        self._dimensions = parse_dimensions(dimensions)
        self._dialect_hint = parse_dialect(dialect_hint)

    async def run(self) -> int:
        emitted = 0
        async for statement in self._input:
            request = AnalysisRequest(
                sql=statement.sql,
                dimensions=self._dimensions,
                dialect_hint=self._dialect_hint,
            )
            try:
                report = await self._engine.analyze_one(request)
            except ValidationError as exc:
                logger.warning("Skipping statement from %s line %s: %s", statement.source, statement.line, exc)
                continue
            for output in self._outputs:
                await output.send(report)
            emitted += 1
        return emitted
