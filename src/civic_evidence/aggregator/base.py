"""Evidence aggregator protocol."""

from typing import Protocol

from civic_evidence.data import EvidenceBundle, Intent


class EvidenceAggregator(Protocol):
    """Interface for gathering and merging evidence for a classified query."""

    async def fetch_relevant_data(self, query: str, intent: Intent) -> EvidenceBundle:
        """Gather evidence for ``query`` from the sources relevant to ``intent``.

        Args:
            query: Query text, exactly as received.
            intent: Intent assigned to the query upstream.

        Returns:
            A well-formed bundle; the fallback bundle if nothing was found.
        """
        ...
