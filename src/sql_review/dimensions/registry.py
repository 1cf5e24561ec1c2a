from sql_review.dimensions.base import DimensionWorker
from sql_review.dimensions.performance import PerformanceWorker
from sql_review.dimensions.security import SecurityWorker
from sql_review.dimensions.standards import StandardsWorker
from sql_review.dimensions.worker import DEFAULT_TIMEOUT
from sql_review.domain import ALL_DIMENSIONS, Dimension
from sql_review.judge import Judge
from sql_review.knowledge import KnowledgeSource
from sql_review.parsing import ResultParser


class WorkerRegistry:
    """Registry mapping each dimension to the worker that evaluates it."""

    def __init__(self) -> None:
        self._workers: dict[Dimension, DimensionWorker] = {}

    def register(self, worker: DimensionWorker) -> None:
        self._workers[worker.dimension] = worker

    def get(self, dimension: Dimension) -> DimensionWorker | None:
        return self._workers.get(dimension)

    @property
    def dimensions(self) -> tuple[Dimension, ...]:
        return tuple(d for d in ALL_DIMENSIONS if d in self._workers)

    @property
    def workers(self) -> tuple[DimensionWorker, ...]:
        return tuple(self._workers[d] for d in self.dimensions)

    @classmethod
    def with_judge(
        cls,
        judge: Judge,
        knowledge: KnowledgeSource | None = None,
        parser: ResultParser | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        knowledge_top_k: int = 3,
    ) -> "WorkerRegistry":
        """Registry with the standard worker for every dimension."""
        registry = cls()
        parser = parser or ResultParser()
        for worker_cls in (PerformanceWorker, SecurityWorker, StandardsWorker):
            registry.register(
                worker_cls(
                    judge,
                    parser=parser,
                    knowledge=knowledge,
                    timeout=timeout,
                    knowledge_top_k=knowledge_top_k,
                )
            )
        return registry
