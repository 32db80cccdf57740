"""
Cache module for storing backend responses.

Provides an in-memory TTL cache and a no-op cache for disabling caching.
"""

from storefront_gateway.cache.memory import Cache, NullCache, TTLCache

__all__ = ["Cache", "NullCache", "TTLCache"]
