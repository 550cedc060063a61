"""Unit tests for the translation cache."""

import threading

from flowloc.utils.cache import TranslationCache, get_shared_cache


class TestTranslationCache:
    """Test in-memory caching."""

    def test_miss_then_hit(self, memory_cache):
        assert memory_cache.get("google", "ja", "Hello") is None
        memory_cache.set("google", "ja", "Hello", "こんにちは")
        assert memory_cache.get("google", "ja", "Hello") == "こんにちは"

    def test_key_includes_engine_and_language(self, memory_cache):
        memory_cache.set("google", "ja", "Hello", "こんにちは")

        assert memory_cache.get("deepl", "ja", "Hello") is None
        assert memory_cache.get("google", "fr", "Hello") is None
        assert ("google", "ja", "Hello") in memory_cache

    def test_exact_text_match(self, memory_cache):
        memory_cache.set("google", "ja", "Hello", "こんにちは")
        assert memory_cache.get("google", "ja", "hello") is None
        assert memory_cache.get("google", "ja", "Hello ") is None

    def test_last_writer_wins(self, memory_cache):
        memory_cache.set("google", "ja", "Hello", "one")
        memory_cache.set("google", "ja", "Hello", "two")
        assert memory_cache.get("google", "ja", "Hello") == "two"
        assert len(memory_cache) == 1

    def test_unbounded_by_default(self, memory_cache):
        for i in range(500):
            memory_cache.set("mock", "ja", f"text {i}", f"テキスト {i}")
        assert len(memory_cache) == 500

    def test_lru_eviction(self):
        cache = TranslationCache(max_size=2)
        cache.set("mock", "ja", "a", "A")
        cache.set("mock", "ja", "b", "B")
        cache.get("mock", "ja", "a")
        cache.set("mock", "ja", "c", "C")

        assert cache.get("mock", "ja", "a") == "A"
        assert cache.get("mock", "ja", "b") is None
        assert cache.get("mock", "ja", "c") == "C"

    def test_stats(self, memory_cache):
        memory_cache.get("mock", "ja", "x")
        memory_cache.set("mock", "ja", "x", "X")
        memory_cache.get("mock", "ja", "x")
        stats = memory_cache.get_stats()

        assert stats["type"] == "memory"
        assert stats["size"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == "50.0%"

    def test_clear(self, memory_cache):
        memory_cache.set("mock", "ja", "x", "X")
        memory_cache.clear()
        assert len(memory_cache) == 0
        assert memory_cache.get_stats()["hits"] == 0

    def test_concurrent_writers(self, memory_cache):
        def writer(worker):
            for i in range(200):
                memory_cache.set("mock", "ja", f"{worker}-{i}", "x")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(memory_cache) == 800


class TestDiskCache:
    """Test diskcache persistence."""

    def test_persists_across_instances(self, tmp_path):
        first = TranslationCache(use_disk=True, cache_dir=str(tmp_path))
        first.set("google", "ja", "Hello", "こんにちは")

        second = TranslationCache(use_disk=True, cache_dir=str(tmp_path))
        assert second.get("google", "ja", "Hello") == "こんにちは"
        assert second.get_stats()["type"] == "disk"


def test_shared_cache_is_singleton():
    assert get_shared_cache() is get_shared_cache()
