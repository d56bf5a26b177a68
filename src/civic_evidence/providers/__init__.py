from civic_evidence.providers.base import EvidenceProvider
from civic_evidence.providers.civic import (
    CIVIC_PROVIDERS,
    ElectionCommissionProvider,
    FactCheckProvider,
    LegalCodeProvider,
    LegislativeResearchProvider,
    OpenGovernmentDataProvider,
    RepresentativeRegistryProvider,
    default_providers,
)
from civic_evidence.providers.http import HttpEvidenceProvider
from civic_evidence.providers.template import TemplateEvidenceProvider

__all__ = [
    "CIVIC_PROVIDERS",
    "ElectionCommissionProvider",
    "EvidenceProvider",
    "FactCheckProvider",
    "HttpEvidenceProvider",
    "LegalCodeProvider",
    "LegislativeResearchProvider",
    "OpenGovernmentDataProvider",
    "RepresentativeRegistryProvider",
    "TemplateEvidenceProvider",
    "default_providers",
]
