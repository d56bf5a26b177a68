"""Named Indian public-data sources."""

from civic_evidence.providers.template import TemplateEvidenceProvider


class LegislativeResearchProvider(TemplateEvidenceProvider):
    """PRS Legislative Research: bills and legislative analysis."""

    default_name = "prs"
    source = "PRS Legislative Research"
    url = "https://prsindia.org"
    template = "Legislative analysis and bill information for: {query}"


class LegalCodeProvider(TemplateEvidenceProvider):
    """India Code: statutes, sections and amendments."""

    default_name = "india_code"
    source = "India Code"
    url = "https://indiacode.nic.in"
    template = "Legal acts, sections, and amendments related to: {query}"


class RepresentativeRegistryProvider(TemplateEvidenceProvider):
    """MyNeta (ADR): elected-official profiles, declared assets and cases."""

    default_name = "myneta"
    source = "MyNeta (ADR)"
    url = "https://myneta.info"
    template = "Representative profiles, criminal cases, and asset information for: {query}"


class ElectionCommissionProvider(TemplateEvidenceProvider):
    """Election Commission of India: constituency and electoral metadata."""

    default_name = "eci"
    source = "Election Commission of India"
    url = "https://eci.gov.in"
    template = "Electoral data and constituency information for: {query}"


class FactCheckProvider(TemplateEvidenceProvider):
    """PIB Fact Check: official verification releases."""

    default_name = "pib"
    source = "PIB Fact Check"
    url = "https://pib.gov.in"
    template = "Official government fact-check and verification for: {query}"


class OpenGovernmentDataProvider(TemplateEvidenceProvider):
    """Data.gov.in: schemes and public statistics. Catch-all for general queries."""

    default_name = "data_gov"
    source = "Data.gov.in"
    url = "https://data.gov.in"
    template = "Government schemes, statistics, and public data for: {query}"


CIVIC_PROVIDERS: tuple[type[TemplateEvidenceProvider], ...] = (
    LegislativeResearchProvider,
    LegalCodeProvider,
    RepresentativeRegistryProvider,
    ElectionCommissionProvider,
    FactCheckProvider,
    OpenGovernmentDataProvider,
)


def default_providers() -> dict[str, TemplateEvidenceProvider]:
    """Instantiate every named civic provider, keyed by registry name."""
    providers = [cls() for cls in CIVIC_PROVIDERS]
    return {p.name: p for p in providers}
