from sql_review.dimensions.worker import JudgeDimensionWorker
from sql_review.domain import Dimension


class SecurityWorker(JudgeDimensionWorker):
    dimension = Dimension.SECURITY
    max_output_tokens = 3000

    prompt_template = """You are auditing a {dialect} SQL statement for security.

{context}```sql
{sql}
```

Look for: SQL injection vectors, tautologies, stacked statements, excessive
privileges, sensitive data exposure, destructive statements without filters.

Respond with JSON only:
{{
  "summary": "one-sentence summary",
  "issues": [{{"description": "vulnerability", "severity": "low|medium|high|critical"}}],
  "recommendations": ["concrete fix"],
  "riskLevel": "low|medium|high|critical",
  "dimensionScore": 0-100,
  "confidence": 0.0-1.0
}}"""
