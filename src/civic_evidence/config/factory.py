"""Factory functions to create components from configuration."""

from pathlib import Path

from civic_evidence.aggregator.concurrent import ConcurrentAggregator
from civic_evidence.cache import EvidenceCache, InMemoryEvidenceCache, NullEvidenceCache
from civic_evidence.config.models import (
    AggregatorConfig,
    CacheConfig,
    CivicEvidenceConfig,
    ElectionCommissionConfig,
    FactCheckConfig,
    HttpProviderConfig,
    LegalCodeConfig,
    LegislativeResearchConfig,
    OpenGovernmentDataConfig,
    ProviderConfig,
    RepresentativeRegistryConfig,
)
from civic_evidence.pipeline.base import Pipeline
from civic_evidence.pipeline.evidence import EvidencePipeline
from civic_evidence.providers.base import EvidenceProvider
from civic_evidence.providers.civic import (
    ElectionCommissionProvider,
    FactCheckProvider,
    LegalCodeProvider,
    LegislativeResearchProvider,
    OpenGovernmentDataProvider,
    RepresentativeRegistryProvider,
)
from civic_evidence.providers.http import HttpEvidenceProvider
from civic_evidence.run_logger import RunLogger


def create_provider(config: ProviderConfig) -> EvidenceProvider:
    """Create an evidence provider from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, LegislativeResearchConfig):
        return LegislativeResearchProvider(name=config.name)
    if isinstance(config, LegalCodeConfig):
        return LegalCodeProvider(name=config.name)
    if isinstance(config, RepresentativeRegistryConfig):
        return RepresentativeRegistryProvider(name=config.name)
    if isinstance(config, ElectionCommissionConfig):
        return ElectionCommissionProvider(name=config.name)
    if isinstance(config, FactCheckConfig):
        return FactCheckProvider(name=config.name)
    if isinstance(config, OpenGovernmentDataConfig):
        return OpenGovernmentDataProvider(name=config.name)
    if isinstance(config, HttpProviderConfig):
        return HttpEvidenceProvider(
            name=config.name,
            source=config.source,
            endpoint=config.endpoint,
            query_param=config.query_param,
            data_field=config.data_field,
            url_field=config.url_field,
            default_url=config.default_url,
            timeout=config.timeout,
            params=config.params,
        )
    msg = f"Unknown provider config type: {type(config)}"
    raise ValueError(msg)


def create_cache(config: CacheConfig) -> EvidenceCache:
    """Create the evidence cache from config."""
    if not config.enabled:
        return NullEvidenceCache()
    return InMemoryEvidenceCache(
        ttl_seconds=config.ttl_seconds, max_entries=config.max_entries
    )


def create_aggregator(
    config: AggregatorConfig,
    providers: list[EvidenceProvider],
    cache: EvidenceCache,
) -> ConcurrentAggregator:
    """Create a concurrent aggregator over the given providers.

    Raises:
        RoutingError: If the configured routes are not total.
    """
    routes = None
    if config.routes is not None:
        routes = {intent: tuple(names) for intent, names in config.routes.items()}
    return ConcurrentAggregator(
        {p.name: p for p in providers},
        routes,
        cache=cache,
        provider_timeout=config.provider_timeout,
        single_flight=config.single_flight,
    )


def create_pipeline(
    config: CivicEvidenceConfig,
    run_logger: RunLogger | None = None,
) -> Pipeline:
    """Create an evidence pipeline from config."""
    providers = [create_provider(p) for p in config.providers]
    cache = create_cache(config.cache)
    aggregator = create_aggregator(config.aggregator, providers, cache)
    return EvidencePipeline(
        aggregator,
        context_max_chars=config.pipeline.context_max_chars,
        run_logger=run_logger,
    )


def create_from_config(
    config: CivicEvidenceConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[Pipeline, RunLogger | None]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (pipeline, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    pipeline = create_pipeline(config, run_logger=run_logger)
    return (pipeline, run_logger)
