"""Pipeline protocol and result type for preparing civic queries."""

from dataclasses import dataclass
from typing import Protocol

from civic_evidence.context import EvidenceContext
from civic_evidence.data import CivicQuery, EvidenceBundle, FetchStats, Intent, Language


@dataclass(frozen=True)
class PipelineResult:
    """Everything the generation step needs to answer a query."""

    query: CivicQuery
    intent: Intent
    language: Language
    bundle: EvidenceBundle
    context: EvidenceContext
    stats: FetchStats


class Pipeline(Protocol):
    """Interface for classify-then-gather evidence pipelines."""

    async def run(self, query: CivicQuery, *, intent: Intent | None = None) -> PipelineResult:
        """Prepare evidence and context for a query.

        Args:
            query: The citizen query.
            intent: Forced intent; classified from the text when None.

        Returns:
            The prepared pipeline result.
        """
        ...
