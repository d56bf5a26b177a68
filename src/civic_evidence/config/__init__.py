"""Configuration module for Civic Evidence."""

from civic_evidence.config.factory import create_from_config
from civic_evidence.config.loader import get_default_config_path, load_config
from civic_evidence.config.models import (
    AggregatorConfig,
    CacheConfig,
    CivicEvidenceConfig,
    ElectionCommissionConfig,
    FactCheckConfig,
    HttpProviderConfig,
    LegalCodeConfig,
    LegislativeResearchConfig,
    LoggingConfig,
    OpenGovernmentDataConfig,
    PipelineConfig,
    ProviderConfig,
    RepresentativeRegistryConfig,
)

__all__ = [
    "AggregatorConfig",
    "CacheConfig",
    "CivicEvidenceConfig",
    "ElectionCommissionConfig",
    "FactCheckConfig",
    "HttpProviderConfig",
    "LegalCodeConfig",
    "LegislativeResearchConfig",
    "LoggingConfig",
    "OpenGovernmentDataConfig",
    "PipelineConfig",
    "ProviderConfig",
    "RepresentativeRegistryConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
