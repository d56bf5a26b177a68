"""Pydantic configuration models for Civic Evidence components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from civic_evidence.cache import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_SECONDS
from civic_evidence.context import DEFAULT_MAX_CHARS
from civic_evidence.data import Intent

# ============================================================
# Provider Configs
# ============================================================


class _NamedProviderConfig(BaseModel):
    """Shared fields for the built-in civic providers."""

    name: str | None = None

    model_config = {"frozen": True}


class LegislativeResearchConfig(_NamedProviderConfig):
    """Configuration for LegislativeResearchProvider (PRS)."""

    type: Literal["prs"] = "prs"


class LegalCodeConfig(_NamedProviderConfig):
    """Configuration for LegalCodeProvider (India Code)."""

    type: Literal["india_code"] = "india_code"


class RepresentativeRegistryConfig(_NamedProviderConfig):
    """Configuration for RepresentativeRegistryProvider (MyNeta)."""

    type: Literal["myneta"] = "myneta"


class ElectionCommissionConfig(_NamedProviderConfig):
    """Configuration for ElectionCommissionProvider (ECI)."""

    type: Literal["eci"] = "eci"


class FactCheckConfig(_NamedProviderConfig):
    """Configuration for FactCheckProvider (PIB)."""

    type: Literal["pib"] = "pib"


class OpenGovernmentDataConfig(_NamedProviderConfig):
    """Configuration for OpenGovernmentDataProvider (data.gov.in)."""

    type: Literal["data_gov"] = "data_gov"


class HttpProviderConfig(BaseModel):
    """Configuration for HttpEvidenceProvider."""

    type: Literal["http"] = "http"
    name: str
    source: str
    endpoint: str
    query_param: str = "q"
    data_field: str = "summary"
    url_field: str | None = "url"
    default_url: str = ""
    timeout: float = 10.0
    params: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


ProviderConfig = Annotated[
    LegislativeResearchConfig
    | LegalCodeConfig
    | RepresentativeRegistryConfig
    | ElectionCommissionConfig
    | FactCheckConfig
    | OpenGovernmentDataConfig
    | HttpProviderConfig,
    Field(discriminator="type"),
]


def _default_providers() -> list[ProviderConfig]:
    return [
        LegislativeResearchConfig(),
        LegalCodeConfig(),
        RepresentativeRegistryConfig(),
        ElectionCommissionConfig(),
        FactCheckConfig(),
        OpenGovernmentDataConfig(),
    ]


# ============================================================
# Cache / Aggregator / Pipeline Configs
# ============================================================


class CacheConfig(BaseModel):
    """Configuration for the evidence cache."""

    enabled: bool = True
    ttl_seconds: float = Field(default=DEFAULT_TTL_SECONDS, gt=0)
    max_entries: int = Field(default=DEFAULT_MAX_ENTRIES, gt=0)

    model_config = {"frozen": True}


class AggregatorConfig(BaseModel):
    """Configuration for ConcurrentAggregator."""

    provider_timeout: float | None = Field(default=10.0, gt=0)
    single_flight: bool = True
    routes: dict[Intent, list[str]] | None = None

    model_config = {"frozen": True}


class PipelineConfig(BaseModel):
    """Configuration for EvidencePipeline."""

    context_max_chars: int = Field(default=DEFAULT_MAX_CHARS, gt=10)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for intermediate pipeline logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class CivicEvidenceConfig(BaseModel):
    """Root configuration for Civic Evidence."""

    providers: list[ProviderConfig] = Field(default_factory=_default_providers)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    aggregator: AggregatorConfig = Field(default_factory=AggregatorConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}

    @field_validator("providers")
    @classmethod
    def provider_names_unique(cls, v: list[ProviderConfig]) -> list[ProviderConfig]:
        seen: set[str] = set()
        for provider in v:
            name = provider.name or provider.type
            if name in seen:
                raise ValueError(f"Duplicate provider name: {name}")
            seen.add(name)
        return v
