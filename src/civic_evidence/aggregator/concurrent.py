"""Concurrent fan-out evidence aggregation."""

import asyncio
import logging
import time
from collections.abc import Mapping

from civic_evidence.aggregator.routing import DEFAULT_ROUTES, validate_routes
from civic_evidence.cache import CacheKey, EvidenceCache, InMemoryEvidenceCache
from civic_evidence.data import (
    EvidenceBundle,
    EvidenceItem,
    FetchStats,
    Intent,
    OutcomeStatus,
    ProviderOutcome,
)
from civic_evidence.providers.base import EvidenceProvider

logger = logging.getLogger(__name__)


class ConcurrentAggregator:
    """Aggregate evidence by querying every routed provider at once.

    Flow:
    1. Return the cached bundle if the (intent, query) key is still fresh
    2. Start all providers routed for the intent concurrently
    3. Wait for every provider to settle; failures and timeouts are dropped
    4. Merge surviving items in route order, or fall back if none survived
    5. Cache the result (fallbacks included) and return it

    Args:
        providers: Providers keyed by registry name.
        routes: Intent to ordered provider names. Must cover every intent.
        cache: Bundle cache (defaults to a 30-minute in-memory cache).
        provider_timeout: Per-provider deadline in seconds; None waits forever.
        single_flight: If True, concurrent misses for the same key share one
            fan-out instead of each running their own.
    """

    def __init__(
        self,
        providers: Mapping[str, EvidenceProvider],
        routes: Mapping[Intent, tuple[str, ...]] | None = None,
        *,
        cache: EvidenceCache | None = None,
        provider_timeout: float | None = 10.0,
        single_flight: bool = True,
    ) -> None:
        self._providers = dict(providers)
        self._routes = validate_routes(routes or DEFAULT_ROUTES, self._providers)
        self._cache: EvidenceCache = cache if cache is not None else InMemoryEvidenceCache()
        self._timeout = provider_timeout
        self._single_flight = single_flight
        self._in_flight: dict[CacheKey, asyncio.Task[EvidenceBundle]] = {}
        self._stats = FetchStats()
        self._last_outcomes: list[ProviderOutcome] = []

    @property
    def cache(self) -> EvidenceCache:
        """Store holding merged bundles by (intent, query)."""
        return self._cache

    @property
    def stats(self) -> FetchStats:
        """Counters accumulated over the aggregator's lifetime."""
        return self._stats

    @property
    def last_outcomes(self) -> list[ProviderOutcome]:
        """Outcomes of the most recent provider fan-out.

        Shared across requests: when fan-outs overlap, this reflects whichever
        finished last.
        """
        return list(self._last_outcomes)

    def providers_for(self, intent: Intent) -> list[EvidenceProvider]:
        """Providers consulted for ``intent``, in merge order."""
        return [self._providers[name] for name in self._routes[intent]]

    async def fetch_relevant_data(self, query: str, intent: Intent) -> EvidenceBundle:
        """Gather evidence for a query, using the cache when it is fresh.

        Args:
            query: Query text, exactly as received.
            intent: Intent assigned upstream.

        Returns:
            The merged bundle, or the fallback bundle if no provider contributed.
        """
        key = CacheKey(intent=Intent(intent), query=query)

        cached = self._cache.get(key)
        if cached is not None:
            self._stats.cache_hits += 1
            logger.debug("Evidence cache hit for %s", key)
            return cached
        self._stats.cache_misses += 1

        if not self._single_flight:
            return await self._aggregate(key)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._aggregate(key))
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
        else:
            logger.debug("Joining in-flight aggregation for %s", key)
        # Shielded so one cancelled caller does not cancel the shared fan-out.
        return await asyncio.shield(task)

    def _release(self, key: CacheKey, task: "asyncio.Task[EvidenceBundle]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _aggregate(self, key: CacheKey) -> EvidenceBundle:
        providers = self.providers_for(key.intent)
        outcomes = await asyncio.gather(*(self._call(p, key.query) for p in providers))
        self._last_outcomes = list(outcomes)

        items = [o.item for o in outcomes if o.ok and o.item is not None]
        bundle = EvidenceBundle.merge(items)
        if bundle.is_fallback:
            self._stats.fallbacks += 1
            logger.info(
                "No provider returned evidence for intent '%s'; using fallback", key.intent
            )

        self._cache.set(key, bundle)
        return bundle

    async def _call(self, provider: EvidenceProvider, query: str) -> ProviderOutcome:
        """Run one provider, converting every failure into an outcome."""
        name = getattr(provider, "name", type(provider).__name__)
        self._stats.provider_calls += 1
        t0 = time.monotonic()
        try:
            if self._timeout is None:
                item = await provider.fetch(query)
            else:
                item = await asyncio.wait_for(provider.fetch(query), timeout=self._timeout)
        except TimeoutError:
            self._stats.provider_timeouts += 1
            logger.warning("Provider '%s' timed out after %.1fs", name, self._timeout)
            return ProviderOutcome(
                provider=name,
                status=OutcomeStatus.TIMEOUT,
                error=f"timed out after {self._timeout}s",
                duration_seconds=time.monotonic() - t0,
            )
        except Exception as e:
            self._stats.provider_failures += 1
            logger.warning("Error fetching evidence from '%s': %s", name, e)
            return ProviderOutcome(
                provider=name,
                status=OutcomeStatus.ERROR,
                error=str(e) or type(e).__name__,
                duration_seconds=time.monotonic() - t0,
            )

        duration = time.monotonic() - t0
        if item is not None and not isinstance(item, EvidenceItem):
            self._stats.provider_failures += 1
            logger.warning(
                "Provider '%s' returned %s instead of an EvidenceItem",
                name,
                type(item).__name__,
            )
            return ProviderOutcome(
                provider=name,
                status=OutcomeStatus.ERROR,
                error=f"malformed result: {type(item).__name__}",
                duration_seconds=duration,
            )
        if item is None or not item.data:
            return ProviderOutcome(
                provider=name, status=OutcomeStatus.EMPTY, duration_seconds=duration
            )
        return ProviderOutcome(
            provider=name, status=OutcomeStatus.OK, item=item, duration_seconds=duration
        )
