"""Core data models for Civic Evidence."""

from dataclasses import dataclass
from enum import StrEnum

FALLBACK_SOURCE = "System"
FALLBACK_DATA = "Verified public information is currently unavailable for this topic."


class Intent(StrEnum):
    """Coarse query category; decides which evidence providers are consulted."""

    LAW = "law"
    REPRESENTATIVE = "representative"
    FACT_CHECK = "fact-check"
    GRIEVANCE = "grievance"
    GENERAL = "general"


class Language(StrEnum):
    """Languages the assistant can answer in."""

    ENGLISH = "english"
    HINDI = "hindi"
    TAMIL = "tamil"
    MALAYALAM = "malayalam"
    TELUGU = "telugu"


class OutcomeStatus(StrEnum):
    """How a single provider call settled."""

    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class CivicQuery:
    """A citizen query, kept exactly as received.

    ``language`` is an explicit caller override; when unset the language is
    detected from ``text``.
    """

    text: str
    language: Language | None = None


@dataclass(frozen=True)
class EvidenceItem:
    """A single piece of evidence returned by one provider."""

    source: str
    data: str
    url: str = ""


@dataclass(frozen=True)
class EvidenceBundle:
    """Merged evidence from every provider that contributed to a query.

    ``data`` is never empty: when nothing contributed it holds the fallback
    sentence (see ``EvidenceBundle.fallback``).
    """

    sources: tuple[str, ...]
    data: str
    urls: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("EvidenceBundle.data must not be empty")

    @property
    def source(self) -> str:
        """Comma-joined names of the contributing sources."""
        return ", ".join(self.sources)

    @property
    def is_fallback(self) -> bool:
        """Whether this is the fixed no-evidence bundle."""
        return self.sources == (FALLBACK_SOURCE,) and self.data == FALLBACK_DATA

    @classmethod
    def fallback(cls) -> "EvidenceBundle":
        """Bundle returned when no provider yields usable evidence."""
        return cls(sources=(FALLBACK_SOURCE,), data=FALLBACK_DATA, urls=())

    @classmethod
    def merge(cls, items: list[EvidenceItem]) -> "EvidenceBundle":
        """Merge items in the given order, or fall back if there are none."""
        if not items:
            return cls.fallback()
        return cls(
            sources=tuple(item.source for item in items),
            data="\n\n".join(item.data for item in items),
            urls=tuple(item.url for item in items if item.url),
        )


@dataclass(frozen=True)
class ProviderOutcome:
    """Tagged result of one provider call.

    Only ``OutcomeStatus.OK`` outcomes carry an item and contribute evidence.
    """

    provider: str
    status: OutcomeStatus
    item: EvidenceItem | None = None
    error: str | None = None
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK


@dataclass
class FetchStats:
    """Accumulated counters for evidence retrieval."""

    cache_hits: int = 0
    cache_misses: int = 0
    provider_calls: int = 0
    provider_failures: int = 0
    provider_timeouts: int = 0
    fallbacks: int = 0

    def __add__(self, other: "FetchStats") -> "FetchStats":
        return FetchStats(
            cache_hits=self.cache_hits + other.cache_hits,
            cache_misses=self.cache_misses + other.cache_misses,
            provider_calls=self.provider_calls + other.provider_calls,
            provider_failures=self.provider_failures + other.provider_failures,
            provider_timeouts=self.provider_timeouts + other.provider_timeouts,
            fallbacks=self.fallbacks + other.fallbacks,
        )

    def __sub__(self, other: "FetchStats") -> "FetchStats":
        return FetchStats(
            cache_hits=self.cache_hits - other.cache_hits,
            cache_misses=self.cache_misses - other.cache_misses,
            provider_calls=self.provider_calls - other.provider_calls,
            provider_failures=self.provider_failures - other.provider_failures,
            provider_timeouts=self.provider_timeouts - other.provider_timeouts,
            fallbacks=self.fallbacks - other.fallbacks,
        )

    def __iadd__(self, other: "FetchStats") -> "FetchStats":
        self.cache_hits += other.cache_hits
        self.cache_misses += other.cache_misses
        self.provider_calls += other.provider_calls
        self.provider_failures += other.provider_failures
        self.provider_timeouts += other.provider_timeouts
        self.fallbacks += other.fallbacks
        return self
