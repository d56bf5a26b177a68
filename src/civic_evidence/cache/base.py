from typing import NamedTuple, Protocol

from civic_evidence.data import EvidenceBundle, Intent


class CacheKey(NamedTuple):
    """Composite cache key. Kept structured so no two (intent, query) pairs collide."""

    intent: Intent
    query: str


class EvidenceCache(Protocol):
    """Interface for stores of aggregated evidence bundles."""

    def get(self, key: CacheKey) -> EvidenceBundle | None:
        """Return the live bundle for ``key``, or None on a miss or expired entry."""
        ...

    def set(self, key: CacheKey, bundle: EvidenceBundle) -> None:
        """Store ``bundle`` under ``key``, replacing any previous entry."""
        ...

    def clear(self) -> None:
        """Drop every entry."""
        ...
