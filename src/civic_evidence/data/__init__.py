"""Data models for Civic Evidence."""

from civic_evidence.data.models import (
    FALLBACK_DATA,
    FALLBACK_SOURCE,
    CivicQuery,
    EvidenceBundle,
    EvidenceItem,
    FetchStats,
    Intent,
    Language,
    OutcomeStatus,
    ProviderOutcome,
)

__all__ = [
    "FALLBACK_DATA",
    "FALLBACK_SOURCE",
    "CivicQuery",
    "EvidenceBundle",
    "EvidenceItem",
    "FetchStats",
    "Intent",
    "Language",
    "OutcomeStatus",
    "ProviderOutcome",
]
