from sql_review.core.engine import OrchestrationEngine
from sql_review.core.merger import merge
from sql_review.core.pipeline import ReportPipeline

__all__ = ["OrchestrationEngine", "ReportPipeline", "merge"]
