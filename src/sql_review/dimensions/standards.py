from sql_review.dimensions.worker import JudgeDimensionWorker
from sql_review.domain import Dimension


class StandardsWorker(JudgeDimensionWorker):
    dimension = Dimension.STANDARDS
    max_output_tokens = 2000

    prompt_template = """You are checking a {dialect} SQL statement against coding standards.

{context}```sql
{sql}
```

Look for: naming conventions, keyword casing, explicit column lists, aliasing,
formatting, comments, portability problems.

Respond with JSON only:
{{
  "summary": "one-sentence summary",
  "issues": [{{"description": "violation", "severity": "low|medium|high|critical"}}],
  "recommendations": ["concrete fix"],
  "dimensionScore": 0-100,
  "complianceScore": 0-100,
  "confidence": 0.0-1.0
}}"""
