import asyncio
import logging
import time
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from sql_review.cache import FingerprintCache, fingerprint
from sql_review.core.merger import merge
from sql_review.dialect import DialectIdentifier
from sql_review.dimensions import DimensionWorker, WorkerRegistry
from sql_review.dimensions.worker import elapsed_ms
from sql_review.domain import (
    AnalysisRequest,
    BatchError,
    Dialect,
    Dimension,
    DimensionResult,
    EngineStats,
    MergedReport,
    ValidationError,
    parse_dialect,
    parse_dimensions,
)
from sql_review.judge import Judge
from sql_review.knowledge import KnowledgeSource
from sql_review.parsing import ResultParser, fallback_result

if TYPE_CHECKING:
    from sql_review.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 3
DEFAULT_TIMEOUT = 60.0
DEFAULT_BATCH_CONCURRENCY = 2
DEFAULT_MAX_BATCH_SIZE = 50


class OrchestrationEngine:
    """Runs every enabled dimension worker for a statement and merges the results.

    Dimension workers share one semaphore across all calls on this engine,
    so at most ``max_concurrency`` judge calls are in flight at once.
    Batches are limited by a separate, per-call statement semaphore.
    Reports with at least one successful dimension are cached by
    fingerprint; a total failure is never cached.
    """

    def __init__(
        self,
        registry: WorkerRegistry,
        identifier: DialectIdentifier | None = None,
        cache: FingerprintCache | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        timeout: float = DEFAULT_TIMEOUT,
        batch_concurrency: int = DEFAULT_BATCH_CONCURRENCY,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
    ) -> None:
        if max_concurrency < 1 or batch_concurrency < 1:
            raise ValueError("concurrency limits must be at least 1")
        self._registry = registry
        self._identifier = identifier or DialectIdentifier()
        self._cache = cache if cache is not None else FingerprintCache()
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._timeout = timeout
        self._batch_concurrency = batch_concurrency
        self._max_batch_size = max_batch_size

        self._total_calls = 0
        self._success_count = 0
        self._error_count = 0
        self._cache_hits = 0
        self._cache_misses = 0
        self._analyzed_count = 0
        self._total_duration_ms = 0

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        judge: Judge,
        knowledge: KnowledgeSource | None = None,
    ) -> "OrchestrationEngine":
        registry = WorkerRegistry.with_judge(
            judge,
            knowledge=knowledge,
            parser=ResultParser(),
            timeout=settings.worker_timeout,
            knowledge_top_k=settings.knowledge_top_k,
        )
        return cls(
            registry,
            cache=FingerprintCache(max_size=settings.cache_max_size),
            max_concurrency=settings.max_concurrency,
            timeout=settings.worker_timeout,
            batch_concurrency=settings.batch_concurrency,
            max_batch_size=settings.max_batch_size,
        )

    @property
    def cache(self) -> FingerprintCache:
        return self._cache

    async def analyze(
        self,
        sql: str,
        dimensions: Iterable[str | Dimension] | None = None,
        dialect_hint: str | Dialect | None = None,
    ) -> MergedReport:
        """Analyze one statement. Raises ``ValidationError`` for a malformed request."""
        try:
            request = AnalysisRequest.from_options(sql, dimensions=dimensions, dialect_hint=dialect_hint)
        except ValidationError:
            self._total_calls += 1
            self._error_count += 1
            raise
        return await self.analyze_one(request)

    async def analyze_one(self, request: AnalysisRequest) -> MergedReport:
        """Validate and analyze one request.

        The cache key uses the trimmed SQL, so statements that differ only in
        surrounding whitespace share one cached report, and that report keeps
        the ``sql`` text of the request that produced it.
        """
        self._total_calls += 1
        try:
            request.validate()
        except ValidationError:
            self._error_count += 1
            raise

        started = time.perf_counter()
        dimensions = request.enabled_dimensions
        missing = [d for d in dimensions if self._registry.get(d) is None]
        if missing:
            self._error_count += 1
            raise ValidationError(f"No worker registered for: {', '.join(missing)}")

        guess = self._identifier.resolve(request.sql, request.dialect_hint)
        key = fingerprint(request.sql, guess.dialect, dimensions)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key[:12])
            self._cache_hits += 1
            self._success_count += 1
            return cached
        self._cache_misses += 1

        timeout = request.timeout or self._timeout
        limiter = asyncio.Semaphore(request.max_concurrency) if request.max_concurrency else None
        results = await asyncio.gather(
            *(
                self._run_worker(d, request.sql, guess.dialect, timeout, limiter)
                for d in dimensions
            )
        )

        report = merge(results, sql=request.sql, dialect=guess.dialect)
        duration = elapsed_ms(started)
        self._analyzed_count += 1
        self._total_duration_ms += duration

        if report.success:
            self._success_count += 1
            self._cache.put(key, report)
        else:
            self._error_count += 1
            logger.warning("All %d dimension(s) failed; report not cached", len(dimensions))

        logger.info(
            "Analyzed statement (%s, dialect=%s) score=%d in %dms",
            ",".join(dimensions),
            guess.dialect,
            report.overall_score,
            duration,
        )
        return report

    async def _run_worker(
        self,
        dimension: Dimension,
        sql: str,
        dialect: Dialect,
        timeout: float,
        limiter: asyncio.Semaphore | None,
    ) -> DimensionResult:
        worker: DimensionWorker = self._registry.get(dimension)  # type: ignore[assignment]
        if limiter is None:
            return await self._guarded_run(worker, sql, dialect, timeout)
        async with limiter:
            return await self._guarded_run(worker, sql, dialect, timeout)

    async def _guarded_run(
        self,
        worker: DimensionWorker,
        sql: str,
        dialect: Dialect,
        timeout: float,
    ) -> DimensionResult:
        async with self._semaphore:
            started = time.perf_counter()
            try:
                async with asyncio.timeout(timeout):
                    return await worker.run(sql, dialect)
            except TimeoutError:
                logger.warning("%s worker timed out after %.1fs", worker.dimension, timeout)
                return fallback_result(
                    worker.dimension,
                    error=f"timed out after {timeout:g}s",
                    duration_ms=elapsed_ms(started),
                )
            except Exception as exc:
                logger.warning("%s worker failed: %s", worker.dimension, exc)
                return fallback_result(
                    worker.dimension,
                    error=f"{type(exc).__name__}: {exc}",
                    duration_ms=elapsed_ms(started),
                )

    async def analyze_batch(
        self,
        items: Sequence[str | AnalysisRequest],
        dimensions: Iterable[str | Dimension] | None = None,
        dialect_hint: str | Dialect | None = None,
        batch_concurrency: int | None = None,
    ) -> list[MergedReport | BatchError]:
        """Analyze many statements, one result per input in input order."""
        if len(items) > self._max_batch_size:
            raise ValidationError(
                f"Batch of {len(items)} statements exceeds the maximum of {self._max_batch_size}"
            )
        concurrency = batch_concurrency or self._batch_concurrency
        if concurrency < 1:
            raise ValidationError("batch_concurrency must be at least 1")

        selected = parse_dimensions(dimensions)
        hint = parse_dialect(dialect_hint)
        requests = [
            item
            if isinstance(item, AnalysisRequest)
            else AnalysisRequest(sql=item, dimensions=selected, dialect_hint=hint)
            for item in items
        ]

        limiter = asyncio.Semaphore(concurrency)

        async def run_one(index: int, request: AnalysisRequest) -> MergedReport | BatchError:
            async with limiter:
                try:
                    return await self.analyze_one(request)
                except ValidationError as exc:
                    return BatchError(index=index, error=str(exc))
                except Exception as exc:
                    logger.exception("Statement %d failed unexpectedly", index)
                    return BatchError(index=index, error=str(exc), error_type=type(exc).__name__)

        return list(await asyncio.gather(*(run_one(i, r) for i, r in enumerate(requests))))

    def get_stats(self) -> EngineStats:
        lookups = self._cache_hits + self._cache_misses
        return EngineStats(
            total_calls=self._total_calls,
            success_count=self._success_count,
            error_count=self._error_count,
            average_duration_ms=(
                round(self._total_duration_ms / self._analyzed_count, 2) if self._analyzed_count else 0.0
            ),
            cache_hit_rate=round(self._cache_hits / lookups, 4) if lookups else 0.0,
        )

    def clear_cache(self) -> None:
        self._cache.clear()
