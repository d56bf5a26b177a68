from typing import Protocol

from civic_evidence.data import EvidenceItem


class EvidenceProvider(Protocol):
    """Interface for a single named public-data evidence source."""

    name: str

    async def fetch(self, query: str) -> EvidenceItem | None:
        """Fetch evidence for a query.

        Implementations must not raise: internal failures are logged and
        reported as ``None``.

        Args:
            query: Query text, exactly as received.

        Returns:
            One evidence item, or None if the source has nothing usable.
        """
        ...
