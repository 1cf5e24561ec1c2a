from sql_review.parsing.parser import (
    FALLBACK_CONFIDENCE,
    ResultParser,
    fallback_payload,
    fallback_result,
    find_balanced_object,
)

__all__ = [
    "FALLBACK_CONFIDENCE",
    "ResultParser",
    "fallback_payload",
    "fallback_result",
    "find_balanced_object",
]
