"""In-process evidence caches."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from cachetools import TTLCache

from civic_evidence.cache.base import CacheKey
from civic_evidence.data import EvidenceBundle

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30 * 60
DEFAULT_MAX_ENTRIES = 10_000


@dataclass
class CacheStats:
    """Hit/miss counters for a cache."""

    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class InMemoryEvidenceCache:
    """Evidence cache with a fixed time-to-live.

    Backed by ``cachetools.TTLCache``. An entry is stale once
    ``now - stored_at >= ttl_seconds``. Nothing sweeps in the background:
    stale entries are dropped when the cache is next written, and the least
    recently used entry is evicted once ``max_entries`` is reached.

    Args:
        ttl_seconds: Freshness window for each entry (default 30 minutes).
        max_entries: Upper bound on stored bundles.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._ttl = ttl_seconds
        self._entries: TTLCache[CacheKey, EvidenceBundle] = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=clock
        )
        self._stats = CacheStats()

    @property
    def ttl_seconds(self) -> float:
        """Freshness window in seconds."""
        return self._ttl

    @property
    def max_entries(self) -> int:
        """Maximum number of bundles held at once."""
        return int(self._entries.maxsize)

    @property
    def stats(self) -> CacheStats:
        """Hit/miss counters since construction."""
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: CacheKey) -> EvidenceBundle | None:
        bundle = self._entries.get(key)
        if bundle is not None:
            self._stats.hits += 1
            return bundle
        self._stats.misses += 1
        return None

    def set(self, key: CacheKey, bundle: EvidenceBundle) -> None:
        self._entries[key] = bundle

    def expire(self) -> int:
        """Drop every stale entry now.

        Returns:
            Number of entries removed.
        """
        return len(self._entries.expire())

    def clear(self) -> None:
        logger.debug("Clearing %d cached evidence bundles", len(self._entries))
        self._entries.clear()


class NullEvidenceCache:
    """Cache that never stores anything. Used when caching is disabled."""

    def get(self, key: CacheKey) -> EvidenceBundle | None:
        return None

    def set(self, key: CacheKey, bundle: EvidenceBundle) -> None:
        return None

    def clear(self) -> None:
        return None
