from sql_review.cache.fingerprint import CacheEntry, FingerprintCache, fingerprint

__all__ = ["CacheEntry", "FingerprintCache", "fingerprint"]
