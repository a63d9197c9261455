"""In-memory read-through cache for provider results.

TTL-bounded, lost on restart. Nothing is persisted.
"""

from execomp.cache.caching_client import CachingCompanyInfoClient
from execomp.cache.ttl_cache import CacheEntry, CacheStats, TTLCache

__all__ = ["CacheEntry", "CacheStats", "CachingCompanyInfoClient", "TTLCache"]
