class SqlReviewError(Exception):
    pass


class ValidationError(SqlReviewError):
    """A malformed request, rejected before any judge call is made."""
