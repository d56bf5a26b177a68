"""Evidence aggregation module."""

from civic_evidence.aggregator.base import EvidenceAggregator
from civic_evidence.aggregator.concurrent import ConcurrentAggregator
from civic_evidence.aggregator.routing import DEFAULT_ROUTES, RoutingError, validate_routes

__all__ = [
    "DEFAULT_ROUTES",
    "ConcurrentAggregator",
    "EvidenceAggregator",
    "RoutingError",
    "validate_routes",
]
