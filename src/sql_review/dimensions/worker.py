import logging
import time
from dataclasses import replace
from typing import ClassVar

from sql_review.domain import Dialect, Dimension, DimensionResult
from sql_review.judge import Judge
from sql_review.knowledge import KnowledgeSource, Snippet
from sql_review.parsing import ResultParser, fallback_result

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


def elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class JudgeDimensionWorker:
    """Asks the judge for one dimension's verdict and parses the reply.

    Subclasses set ``dimension``, ``prompt_template`` and
    ``max_output_tokens``. The template receives ``{dialect}``, ``{sql}``
    and ``{context}``.
    """

    dimension: ClassVar[Dimension]
    prompt_template: ClassVar[str]
    max_output_tokens: ClassVar[int] = 2000

    def __init__(
        self,
        judge: Judge,
        parser: ResultParser | None = None,
        knowledge: KnowledgeSource | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        knowledge_top_k: int = 3,
    ) -> None:
        self._judge = judge
        self._parser = parser or ResultParser()
        self._knowledge = knowledge
        self._timeout = timeout
        self._knowledge_top_k = knowledge_top_k

    def build_prompt(self, sql: str, dialect: Dialect, snippets: list[Snippet]) -> str:
        context = ""
        if snippets:
            lines = "\n".join(f"- [{s.source_id}] {s.content}" for s in snippets)
            context = f"Reference material:\n{lines}\n\n"
        return self.prompt_template.format(dialect=dialect.value, sql=sql.strip(), context=context)

    async def run(self, sql: str, dialect: Dialect) -> DimensionResult:
        started = time.perf_counter()
        try:
            snippets = await self._lookup_knowledge(sql, dialect)
            prompt = self.build_prompt(sql, dialect, snippets)
            response = await self._judge.invoke(
                prompt,
                timeout_ms=int(self._timeout * 1000),
                max_output_tokens=self.max_output_tokens,
            )
        except Exception as exc:
            logger.warning("%s judge call failed: %s", self.dimension, exc)
            return fallback_result(
                self.dimension,
                error=f"{type(exc).__name__}: {exc}",
                duration_ms=elapsed_ms(started),
            )

        try:
            result = self._parser.parse(response.text, self.dimension)
        except Exception as exc:
            logger.warning("%s response could not be parsed: %s", self.dimension, exc)
            return fallback_result(
                self.dimension,
                raw_text=response.text,
                error=f"{type(exc).__name__}: {exc}",
                duration_ms=elapsed_ms(started),
            )
        return replace(result, duration_ms=elapsed_ms(started))

    async def _lookup_knowledge(self, sql: str, dialect: Dialect) -> list[Snippet]:
        if self._knowledge is None:
            return []
        query_text = f"{self.dimension.value} {dialect.value} {sql.strip()[:500]}"
        try:
            return list(await self._knowledge.query(query_text, self._knowledge_top_k))
        except Exception as exc:
            logger.warning("Knowledge lookup for %s failed: %s", self.dimension, exc)
            return []
