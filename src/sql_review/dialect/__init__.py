from sql_review.dialect.identifier import MIN_SIGNATURE_MATCHES, DialectIdentifier

__all__ = ["DialectIdentifier", "MIN_SIGNATURE_MATCHES"]
