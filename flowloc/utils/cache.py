"""Translation caching utilities."""

import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple

import diskcache

from flowloc.core.exceptions import CacheError

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str, str]


class TranslationCache:
    """
    Process-wide cache of translated strings.

    Keys are ``(engine, target_lang, text)`` with exact text matching.
    Safe for concurrent use from several in-flight jobs; on a key collision
    the last writer wins. Unbounded unless ``max_size`` is given, in which
    case the least recently used entry is evicted.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        use_disk: bool = False,
        cache_dir: str = ".cache/flowloc",
        fallback_to_memory: bool = True
    ):
        """
        Initialize cache.

        Args:
            max_size: Maximum number of in-memory entries (None = unbounded)
            use_disk: Persist entries with diskcache
            cache_dir: Directory for disk cache
            fallback_to_memory: Fallback to memory cache if disk cache fails
        """
        self.max_size = max_size
        self.cache_dir = Path(cache_dir)
        self.use_disk = False
        self._memory: "OrderedDict[CacheKey, str]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._cache_errors: List[str] = []
        self.disk_cache = None

        if use_disk:
            try:
                self.cache_dir.mkdir(parents=True, exist_ok=True)
                self.disk_cache = diskcache.Cache(str(self.cache_dir))
                self.use_disk = True
                logger.debug(f"Using disk cache at {self.cache_dir}")
            except Exception as e:
                error_msg = f"Failed to initialize disk cache: {e}"
                self._cache_errors.append(error_msg)
                if not fallback_to_memory:
                    raise CacheError(error_msg, cache_type="disk", operation="init") from e
                logger.warning(f"{error_msg}. Falling back to memory cache.")

    @staticmethod
    def make_key(engine: str, target_lang: str, text: str) -> CacheKey:
        """Generate cache key from parameters."""
        return (engine, target_lang, text)

    def get(self, engine: str, target_lang: str, text: str) -> Optional[str]:
        """
        Get cached translation.

        Returns:
            Cached translation or None (never raises)
        """
        key = self.make_key(engine, target_lang, text)
        with self._lock:
            if key in self._memory:
                self._memory.move_to_end(key)
                self._hits += 1
                return self._memory[key]

        if self.use_disk:
            try:
                value = self.disk_cache.get("\x1f".join(key))
            except Exception as e:
                self._record_error(f"Cache get failed: {e}")
                value = None
            if value is not None:
                self._store_memory(key, value)
                with self._lock:
                    self._hits += 1
                return value

        with self._lock:
            self._misses += 1
        return None

    def set(self, engine: str, target_lang: str, text: str, translation: str) -> None:
        """Cache a translation. Errors are logged, never raised."""
        key = self.make_key(engine, target_lang, text)
        self._store_memory(key, translation)
        if self.use_disk:
            try:
                self.disk_cache.set("\x1f".join(key), translation)
            except Exception as e:
                self._record_error(f"Cache set failed: {e}")

    def _store_memory(self, key: CacheKey, translation: str) -> None:
        with self._lock:
            self._memory[key] = translation
            self._memory.move_to_end(key)
            if self.max_size is not None:
                while len(self._memory) > self.max_size:
                    self._memory.popitem(last=False)

    def _record_error(self, error_msg: str) -> None:
        self._cache_errors.append(error_msg)
        logger.warning(f"{error_msg}. Continuing without cache.")

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._memory

    def __len__(self) -> int:
        with self._lock:
            return len(self._memory)

    def clear(self) -> None:
        """Clear all cache."""
        with self._lock:
            self._memory.clear()
            self._hits = 0
            self._misses = 0
        if self.use_disk:
            self.disk_cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            stats: Dict[str, Any] = {
                "type": "disk" if self.use_disk else "memory",
                "size": len(self._memory),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": f"{(self._hits / total if total else 0):.1%}",
                "errors": len(self._cache_errors),
            }
        if self.use_disk:
            stats["location"] = str(self.cache_dir)
        if self._cache_errors:
            stats["recent_errors"] = self._cache_errors[-5:]
        return stats


_shared_cache: Optional[TranslationCache] = None
_shared_lock = threading.Lock()


def get_shared_cache() -> TranslationCache:
    """Return the cache shared by every orchestrator in this process."""
    global _shared_cache
    with _shared_lock:
        if _shared_cache is None:
            _shared_cache = TranslationCache()
        return _shared_cache
