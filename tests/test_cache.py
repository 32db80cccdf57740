"""
Tests for the in-memory cache.
"""

import pytest

from storefront_gateway.cache.memory import Cache, NullCache, TTLCache


class TestTTLCache:
    """Tests for TTLCache."""

    def test_miss_on_empty(self, cache):
        """Test an unknown key is a miss."""
        assert cache.get("/products") is None
        assert cache.misses == 1

    def test_hit_within_ttl(self, cache, clock):
        """Test a stored value is returned while fresh."""
        payload = {"products": [1, 2, 3]}
        cache.set("/products", payload)
        clock.advance(299)

        assert cache.get("/products") is payload
        assert cache.hits == 1

    def test_expired_at_ttl(self, cache, clock):
        """Test an entry exactly TTL seconds old is treated as absent."""
        cache.set("/products", [1])
        clock.advance(300)

        assert cache.get("/products") is None

    def test_expired_entry_not_evicted(self, cache, clock):
        """Test expiry does not remove the entry until overwritten."""
        cache.set("/products", [1])
        clock.advance(301)
        cache.get("/products")

        assert len(cache) == 1

    def test_overwrite_resets_age(self, cache, clock):
        """Test a new set replaces the value and its timestamp."""
        cache.set("/brands", ["old"])
        clock.advance(400)
        cache.set("/brands", ["new"])
        clock.advance(100)

        assert cache.get("/brands") == ["new"]

    def test_falsy_values_are_hits(self, cache):
        """Test empty payloads are cached like any other value."""
        cache.set("/brands", [])

        assert cache.get("/brands") == []
        assert cache.hits == 1

    def test_custom_ttl(self, clock):
        """Test the TTL is configurable."""
        short = TTLCache(ttl=10, clock=clock)
        short.set("/a", 1)
        clock.advance(11)

        assert short.get("/a") is None

    def test_stats(self, cache, clock):
        """Test statistics distinguish valid and expired entries."""
        cache.set("/old", 1)
        clock.advance(400)
        cache.set("/new", 2)
        cache.get("/new")
        cache.get("/old")

        stats = cache.stats()

        assert stats["total_entries"] == 2
        assert stats["valid_entries"] == 1
        assert stats["expired_entries"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["ttl_seconds"] == 300

    def test_clear(self, cache):
        """Test clear removes everything."""
        cache.set("/a", 1)
        cache.set("/b", 2)

        assert cache.clear() == 2
        assert cache.get("/a") is None

    def test_default_ttl_is_five_minutes(self):
        """Test the default TTL."""
        assert TTLCache().ttl == 300


class TestNullCache:
    """Tests for NullCache."""

    def test_never_stores(self):
        """Test set is discarded."""
        cache = NullCache()
        cache.set("/products", [1])

        assert cache.get("/products") is None

    def test_is_a_cache(self):
        """Test both implementations share the interface."""
        assert isinstance(NullCache(), Cache)
        assert isinstance(TTLCache(), Cache)

    def test_interface_is_abstract(self):
        """Test the interface cannot be instantiated."""
        with pytest.raises(TypeError):
            Cache()
