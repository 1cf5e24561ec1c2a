class JudgeError(Exception):
    pass


class RateLimitError(JudgeError):
    def __init__(
        self, message: str = "Rate limit exceeded", retry_after: float | None = None
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class AuthenticationError(JudgeError):
    pass
