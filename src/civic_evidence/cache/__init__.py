"""Time-bounded caching of aggregated evidence."""

from civic_evidence.cache.base import CacheKey, EvidenceCache
from civic_evidence.cache.memory import (
    DEFAULT_MAX_ENTRIES,
    DEFAULT_TTL_SECONDS,
    CacheStats,
    InMemoryEvidenceCache,
    NullEvidenceCache,
)

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_TTL_SECONDS",
    "CacheKey",
    "CacheStats",
    "EvidenceCache",
    "InMemoryEvidenceCache",
    "NullEvidenceCache",
]
