import json

import pytest

from sql_review.dimensions import (
    DimensionWorker,
    PerformanceWorker,
    SecurityWorker,
    StandardsWorker,
    WorkerRegistry,
)
from sql_review.domain import Dialect, Dimension, DimensionResult, ParseStrategy
from sql_review.judge import Judge, JudgeError, JudgeResponse
from sql_review.knowledge import KnowledgeSource, Snippet
from sql_review.parsing import ResultParser


class RecordingJudge:
    def __init__(self, text: str = '{"summary": "ok", "dimensionScore": 85}') -> None:
        self.text = text
        self.calls: list[dict] = []

    async def invoke(self, prompt: str, *, timeout_ms: int, max_output_tokens: int) -> JudgeResponse:
        self.calls.append(
            {"prompt": prompt, "timeout_ms": timeout_ms, "max_output_tokens": max_output_tokens}
        )
        return JudgeResponse(text=self.text)


class FailingJudge:
    async def invoke(self, prompt: str, *, timeout_ms: int, max_output_tokens: int) -> JudgeResponse:
        raise JudgeError("backend unavailable")


class StaticKnowledge:
    def __init__(self, snippets: list[Snippet]) -> None:
        self.snippets = snippets
        self.queries: list[tuple[str, int]] = []

    async def query(self, query_text: str, top_k: int) -> list[Snippet]:
        self.queries.append((query_text, top_k))
        return self.snippets[:top_k]


class BrokenKnowledge:
    async def query(self, query_text: str, top_k: int) -> list[Snippet]:
        raise ConnectionError("vector store down")


class TestProtocols:
    def test_fakes_satisfy_protocols(self) -> None:
        assert isinstance(RecordingJudge(), Judge)
        assert isinstance(StaticKnowledge([]), KnowledgeSource)

    def test_workers_satisfy_protocol(self) -> None:
        assert isinstance(SecurityWorker(RecordingJudge()), DimensionWorker)


class TestJudgeDimensionWorker:
    @pytest.mark.asyncio
    async def test_successful_run(self) -> None:
        judge = RecordingJudge()
        worker = PerformanceWorker(judge)

        result = await worker.run("SELECT * FROM orders", Dialect.POSTGRESQL)

        assert result.dimension is Dimension.PERFORMANCE
        assert result.success is True
        assert result.strategy_used is ParseStrategy.STRUCTURED_PARSE
        assert result.payload.dimension_score == 85
        assert result.duration_ms >= 0

    @pytest.mark.asyncio
    async def test_prompt_contains_sql_and_dialect(self) -> None:
        judge = RecordingJudge()
        await SecurityWorker(judge).run("  SELECT * FROM users WHERE id = 1  ", Dialect.MYSQL)

        prompt = judge.calls[0]["prompt"]
        assert "SELECT * FROM users WHERE id = 1" in prompt
        assert "mysql" in prompt
        assert "Reference material" not in prompt

    @pytest.mark.asyncio
    async def test_passes_timeout_and_token_limit(self) -> None:
        judge = RecordingJudge()
        await SecurityWorker(judge, timeout=2.5).run("SELECT 1", Dialect.GENERIC)

        assert judge.calls[0]["timeout_ms"] == 2500
        assert judge.calls[0]["max_output_tokens"] == SecurityWorker.max_output_tokens

    @pytest.mark.asyncio
    async def test_judge_failure_yields_fallback(self) -> None:
        result = await StandardsWorker(FailingJudge()).run("SELECT 1", Dialect.GENERIC)

        assert result.success is False
        assert result.strategy_used is ParseStrategy.FALLBACK
        assert result.error == "JudgeError: backend unavailable"

    @pytest.mark.asyncio
    async def test_garbage_reply_yields_fallback(self) -> None:
        result = await PerformanceWorker(RecordingJudge(text="I cannot help")).run("SELECT 1", Dialect.GENERIC)
        assert result.success is False
        assert result.raw_text == "I cannot help"

    @pytest.mark.asyncio
    async def test_knowledge_snippets_enrich_prompt(self) -> None:
        judge = RecordingJudge()
        knowledge = StaticKnowledge(
            [
                Snippet(content="Avoid SELECT *", source_id="std-1"),
                Snippet(content="Name tables in snake_case", source_id="std-2"),
                Snippet(content="Unused", source_id="std-3"),
            ]
        )
        worker = StandardsWorker(judge, knowledge=knowledge, knowledge_top_k=2)

        await worker.run("SELECT * FROM Users", Dialect.SQLSERVER)

        prompt = judge.calls[0]["prompt"]
        assert "Reference material:" in prompt
        assert "- [std-1] Avoid SELECT *" in prompt
        assert "- [std-2] Name tables in snake_case" in prompt
        assert "std-3" not in prompt
        query_text, top_k = knowledge.queries[0]
        assert top_k == 2
        assert "standards" in query_text
        assert "sqlserver" in query_text

    @pytest.mark.asyncio
    async def test_knowledge_failure_is_ignored(self) -> None:
        judge = RecordingJudge()
        result = await PerformanceWorker(judge, knowledge=BrokenKnowledge()).run("SELECT 1", Dialect.GENERIC)

        assert result.success is True
        assert len(judge.calls) == 1

    def test_templates_format_cleanly(self) -> None:
        for worker_cls in (PerformanceWorker, SecurityWorker, StandardsWorker):
            prompt = worker_cls(RecordingJudge()).build_prompt("SELECT 1", Dialect.ORACLE, [])
            assert "{sql}" not in prompt
            assert '"summary"' in prompt


class TestWorkerRegistry:
    def test_with_judge_registers_every_dimension(self) -> None:
        registry = WorkerRegistry.with_judge(RecordingJudge())
        assert registry.dimensions == (Dimension.PERFORMANCE, Dimension.SECURITY, Dimension.STANDARDS)
        assert [w.dimension for w in registry.workers] == list(registry.dimensions)

    def test_get_unregistered_returns_none(self) -> None:
        registry = WorkerRegistry()
        assert registry.get(Dimension.SECURITY) is None

    def test_register_replaces_existing(self) -> None:
        registry = WorkerRegistry()
        first = SecurityWorker(RecordingJudge())
        second = SecurityWorker(RecordingJudge())
        registry.register(first)
        registry.register(second)
        assert registry.get(Dimension.SECURITY) is second
        assert registry.dimensions == (Dimension.SECURITY,)

    @pytest.mark.asyncio
    async def test_shared_judge_receives_all_calls(self) -> None:
        judge = RecordingJudge(text=json.dumps({"summary": "fine"}))
        registry = WorkerRegistry.with_judge(judge)
        for worker in registry.workers:
            await worker.run("SELECT 1", Dialect.GENERIC)
        assert len(judge.calls) == 3


class RaisingParser(ResultParser):
    def parse(self, raw_text: str, dimension: Dimension) -> DimensionResult:
        raise ValueError("cannot read reply")


class TestWorkerParsing:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("literal", ["Infinity", "NaN", '"1e999"'])
    async def test_non_finite_score_still_succeeds(self, literal: str) -> None:
        judge = RecordingJudge(text=f'{{"summary": "ok", "dimensionScore": {literal}}}')

        result = await SecurityWorker(judge).run("SELECT 1", Dialect.GENERIC)

        assert result.success is True
        assert result.payload.dimension_score is None

    @pytest.mark.asyncio
    async def test_parser_failure_yields_fallback(self) -> None:
        judge = RecordingJudge(text='{"summary": "ok"}')

        result = await PerformanceWorker(judge, parser=RaisingParser()).run("SELECT 1", Dialect.GENERIC)

        assert result.success is False
        assert result.strategy_used is ParseStrategy.FALLBACK
        assert result.error == "ValueError: cannot read reply"
        assert result.raw_text == '{"summary": "ok"}'
