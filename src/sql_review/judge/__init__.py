from sql_review.judge.base import Judge, JudgeResponse
from sql_review.judge.client import HttpJudge
from sql_review.judge.exceptions import (
    AuthenticationError,
    JudgeError,
    RateLimitError,
)

__all__ = [
    "Judge",
    "JudgeResponse",
    "HttpJudge",
    "JudgeError",
    "RateLimitError",
    "AuthenticationError",
]
