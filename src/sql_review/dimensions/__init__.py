from sql_review.dimensions.base import DimensionWorker
from sql_review.dimensions.performance import PerformanceWorker
from sql_review.dimensions.registry import WorkerRegistry
from sql_review.dimensions.security import SecurityWorker
from sql_review.dimensions.standards import StandardsWorker
from sql_review.dimensions.worker import JudgeDimensionWorker

__all__ = [
    "DimensionWorker",
    "JudgeDimensionWorker",
    "WorkerRegistry",
    "PerformanceWorker",
    "SecurityWorker",
    "StandardsWorker",
]
