"""Civic Evidence: evidence aggregation for citizen queries on Indian civic topics."""

from civic_evidence.aggregator import (
    DEFAULT_ROUTES,
    ConcurrentAggregator,
    EvidenceAggregator,
    RoutingError,
)
from civic_evidence.cache import (
    CacheKey,
    EvidenceCache,
    InMemoryEvidenceCache,
    NullEvidenceCache,
)
from civic_evidence.classify import (
    UnsupportedLanguageError,
    classify_intent,
    detect_language,
    resolve_language,
)
from civic_evidence.config import CivicEvidenceConfig, create_from_config, load_config
from civic_evidence.context import EvidenceContext, build_context
from civic_evidence.data import (
    CivicQuery,
    EvidenceBundle,
    EvidenceItem,
    FetchStats,
    Intent,
    Language,
    OutcomeStatus,
    ProviderOutcome,
)
from civic_evidence.pipeline import EvidencePipeline, Pipeline, PipelineResult
from civic_evidence.providers import (
    ElectionCommissionProvider,
    EvidenceProvider,
    FactCheckProvider,
    HttpEvidenceProvider,
    LegalCodeProvider,
    LegislativeResearchProvider,
    OpenGovernmentDataProvider,
    RepresentativeRegistryProvider,
    TemplateEvidenceProvider,
    default_providers,
)
from civic_evidence.run_logger import RunLogger

__all__ = [
    # Models
    "CivicQuery",
    "EvidenceBundle",
    "EvidenceContext",
    "EvidenceItem",
    "FetchStats",
    "Intent",
    "Language",
    "OutcomeStatus",
    "PipelineResult",
    "ProviderOutcome",
    # Functions
    "build_context",
    "classify_intent",
    "detect_language",
    "resolve_language",
    # Protocols
    "EvidenceAggregator",
    "EvidenceCache",
    "EvidenceProvider",
    "Pipeline",
    # Providers
    "ElectionCommissionProvider",
    "FactCheckProvider",
    "HttpEvidenceProvider",
    "LegalCodeProvider",
    "LegislativeResearchProvider",
    "OpenGovernmentDataProvider",
    "RepresentativeRegistryProvider",
    "TemplateEvidenceProvider",
    "default_providers",
    # Caches
    "CacheKey",
    "InMemoryEvidenceCache",
    "NullEvidenceCache",
    # Aggregation
    "DEFAULT_ROUTES",
    "ConcurrentAggregator",
    "RoutingError",
    # Pipelines
    "EvidencePipeline",
    # Errors
    "UnsupportedLanguageError",
    # Logging
    "RunLogger",
    # Config
    "CivicEvidenceConfig",
    "create_from_config",
    "load_config",
]
