from sql_review.dimensions.worker import JudgeDimensionWorker
from sql_review.domain import Dimension


class PerformanceWorker(JudgeDimensionWorker):
    dimension = Dimension.PERFORMANCE
    max_output_tokens = 2500

    prompt_template = """You are reviewing a {dialect} SQL statement for performance.

{context}```sql
{sql}
```

Look for: missing or unusable indexes, full table scans, SELECT *, non-sargable
predicates, inefficient joins and subqueries, unbounded result sets.

Respond with JSON only:
{{
  "summary": "one-sentence summary",
  "issues": [{{"description": "what is wrong", "severity": "low|medium|high|critical"}}],
  "recommendations": ["concrete fix"],
  "dimensionScore": 0-100,
  "metrics": {{"estimatedComplexity": "low|medium|high"}},
  "confidence": 0.0-1.0
}}"""
