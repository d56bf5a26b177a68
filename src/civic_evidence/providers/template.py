"""Placeholder providers that describe what a public source covers for a query."""

import logging

from civic_evidence.data import EvidenceItem

logger = logging.getLogger(__name__)


class TemplateEvidenceProvider:
    """Provider that formats a fixed description template with the query.

    Stands in for a real integration with the source: the same query always
    produces the same item. Subclasses set ``source``, ``url`` and
    ``template`` (a ``str.format`` string with a ``{query}`` field).

    Args:
        name: Registry key for this provider (defaults to ``default_name``).
    """

    default_name: str = "template"
    source: str = ""
    url: str = ""
    template: str = "{query}"

    def __init__(self, *, name: str | None = None) -> None:
        self.name = name or self.default_name

    async def fetch(self, query: str) -> EvidenceItem | None:
        try:
            return EvidenceItem(
                source=self.source,
                data=self.describe(query),
                url=self.url,
            )
        except Exception:
            logger.warning("%s fetch error for query %r", self.source, query, exc_info=True)
            return None

    def describe(self, query: str) -> str:
        """Render the evidence text for a query."""
        return self.template.format(query=query)
