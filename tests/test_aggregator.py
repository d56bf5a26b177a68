"""Tests for evidence aggregation."""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock

import pytest

from civic_evidence.aggregator import DEFAULT_ROUTES, ConcurrentAggregator, RoutingError
from civic_evidence.cache import CacheKey, InMemoryEvidenceCache, NullEvidenceCache
from civic_evidence.data import (
    EvidenceBundle,
    EvidenceItem,
    Intent,
    OutcomeStatus,
)
from civic_evidence.providers import default_providers

FALLBACK = EvidenceBundle(
    sources=("System",),
    data="Verified public information is currently unavailable for this topic.",
    urls=(),
)


class StubProvider:
    """Provider test double with a call counter, delay and failure switch."""

    def __init__(
        self,
        name: str,
        *,
        delay: float = 0.0,
        fail: bool = False,
        empty: bool = False,
        url: str | None = None,
    ) -> None:
        self.name = name
        self.calls = 0
        self._delay = delay
        self._fail = fail
        self._empty = empty
        self._url = f"https://{name}.example" if url is None else url

    async def fetch(self, query: str) -> EvidenceItem | None:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._fail:
            raise RuntimeError(f"{self.name} is down")
        if self._empty:
            return None
        return EvidenceItem(source=self.name.upper(), data=f"{self.name}: {query}", url=self._url)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _registry(**overrides: StubProvider) -> dict[str, StubProvider]:
    names = {name for route in DEFAULT_ROUTES.values() for name in route}
    providers = {name: StubProvider(name) for name in names}
    providers.update(overrides)
    return providers


class TestRouting:
    """Tests for routing validation."""

    def test_default_routes_cover_every_intent(self) -> None:
        assert set(DEFAULT_ROUTES) == set(Intent)
        assert all(DEFAULT_ROUTES[i] for i in Intent)

    def test_default_routes_table(self) -> None:
        assert DEFAULT_ROUTES[Intent.LAW] == ("india_code", "prs")
        assert DEFAULT_ROUTES[Intent.REPRESENTATIVE] == ("myneta", "eci")
        assert DEFAULT_ROUTES[Intent.FACT_CHECK] == ("pib",)
        assert DEFAULT_ROUTES[Intent.GRIEVANCE] == ("data_gov",)
        assert DEFAULT_ROUTES[Intent.GENERAL] == ("data_gov",)

    def test_missing_intent_rejected(self) -> None:
        routes = {k: v for k, v in DEFAULT_ROUTES.items() if k is not Intent.GRIEVANCE}
        with pytest.raises(RoutingError, match="grievance"):
            ConcurrentAggregator(_registry(), routes)

    def test_empty_route_rejected(self) -> None:
        routes = {**DEFAULT_ROUTES, Intent.GENERAL: ()}
        with pytest.raises(RoutingError, match="general"):
            ConcurrentAggregator(_registry(), routes)

    def test_unregistered_provider_rejected(self) -> None:
        providers = _registry()
        del providers["eci"]
        with pytest.raises(RoutingError, match="eci"):
            ConcurrentAggregator(providers)

    def test_providers_for_follows_route_order(self) -> None:
        aggregator = ConcurrentAggregator(_registry())
        assert [p.name for p in aggregator.providers_for(Intent.LAW)] == ["india_code", "prs"]


class TestConcurrentAggregator:
    """Tests for ConcurrentAggregator."""

    async def test_merges_in_route_order(self) -> None:
        aggregator = ConcurrentAggregator(_registry())
        bundle = await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        assert bundle.sources == ("INDIA_CODE", "PRS")
        assert bundle.source == "INDIA_CODE, PRS"
        assert bundle.data == "india_code: RTI Act\n\nprs: RTI Act"
        assert bundle.urls == ("https://india_code.example", "https://prs.example")

    async def test_route_order_wins_over_completion_order(self) -> None:
        providers = _registry(india_code=StubProvider("india_code", delay=0.05))
        aggregator = ConcurrentAggregator(providers)
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        assert bundle.sources == ("INDIA_CODE", "PRS")

    async def test_only_routed_providers_called(self) -> None:
        providers = _registry()
        aggregator = ConcurrentAggregator(providers)
        await aggregator.fetch_relevant_data("Who is my MLA?", Intent.REPRESENTATIVE)
        called = {name for name, p in providers.items() if p.calls}
        assert called == {"myneta", "eci"}

    async def test_grievance_and_general_use_open_data(self) -> None:
        providers = _registry()
        aggregator = ConcurrentAggregator(providers)
        grievance = await aggregator.fetch_relevant_data("pothole", Intent.GRIEVANCE)
        general = await aggregator.fetch_relevant_data("pothole", Intent.GENERAL)
        assert grievance.sources == general.sources == ("DATA_GOV",)
        # Different intents are different cache keys.
        assert providers["data_gov"].calls == 2

    async def test_accepts_intent_value_strings(self) -> None:
        aggregator = ConcurrentAggregator(_registry())
        bundle = await aggregator.fetch_relevant_data("claim", "fact-check")  # type: ignore[arg-type]
        assert bundle.sources == ("PIB",)

    async def test_one_failing_law_provider_is_dropped(self) -> None:
        providers = _registry(india_code=StubProvider("india_code", fail=True))
        aggregator = ConcurrentAggregator(providers)
        bundle = await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        assert bundle.source == "PRS"
        assert bundle.data == "prs: RTI Act"
        assert bundle.urls == ("https://prs.example",)
        assert aggregator.stats.provider_failures == 1

    async def test_failure_does_not_cancel_sibling(self) -> None:
        slow = StubProvider("prs", delay=0.05)
        providers = _registry(india_code=StubProvider("india_code", fail=True), prs=slow)
        aggregator = ConcurrentAggregator(providers)
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        assert bundle.sources == ("PRS",)
        assert slow.calls == 1

    async def test_all_failing_returns_fallback(self) -> None:
        providers = _registry(
            india_code=StubProvider("india_code", fail=True),
            prs=StubProvider("prs", empty=True),
        )
        aggregator = ConcurrentAggregator(providers)
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        assert bundle == FALLBACK
        assert bundle.is_fallback
        assert aggregator.stats.fallbacks == 1

    async def test_fallback_is_cached(self) -> None:
        failing = StubProvider("pib", fail=True)
        aggregator = ConcurrentAggregator(_registry(pib=failing))
        first = await aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK)
        second = await aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK)
        assert first == second == FALLBACK
        assert failing.calls == 1

    async def test_empty_data_item_is_unusable(self) -> None:
        provider = MagicMock()
        provider.name = "pib"
        provider.fetch = AsyncMock(return_value=EvidenceItem(source="PIB", data=""))
        aggregator = ConcurrentAggregator(_registry(pib=provider))
        bundle = await aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK)
        assert bundle == FALLBACK
        assert aggregator.last_outcomes[0].status is OutcomeStatus.EMPTY

    async def test_malformed_result_is_dropped(self) -> None:
        provider = MagicMock()
        provider.name = "pib"
        provider.fetch = AsyncMock(return_value={"source": "PIB", "data": "x", "url": ""})
        aggregator = ConcurrentAggregator(_registry(pib=provider))

        bundle = await aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK)

        assert bundle == FALLBACK
        outcome = aggregator.last_outcomes[0]
        assert outcome.status is OutcomeStatus.ERROR
        assert outcome.error == "malformed result: dict"
        assert aggregator.stats.provider_failures == 1

    async def test_malformed_result_keeps_sibling_evidence(self) -> None:
        provider = MagicMock()
        provider.name = "india_code"
        provider.fetch = AsyncMock(return_value="Legal acts")
        aggregator = ConcurrentAggregator(_registry(india_code=provider))

        bundle = await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)

        assert bundle.sources == ("PRS",)

    async def test_blank_urls_are_omitted(self) -> None:
        providers = _registry(india_code=StubProvider("india_code", url=""))
        aggregator = ConcurrentAggregator(providers)
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        assert bundle.sources == ("INDIA_CODE", "PRS")
        assert bundle.urls == ("https://prs.example",)

    async def test_outcomes_are_tagged(self) -> None:
        providers = _registry(
            myneta=StubProvider("myneta", fail=True),
            eci=StubProvider("eci", delay=0.5),
        )
        aggregator = ConcurrentAggregator(providers, provider_timeout=0.05)
        bundle = await aggregator.fetch_relevant_data("MLA", Intent.REPRESENTATIVE)
        assert bundle == FALLBACK
        statuses = {o.provider: o.status for o in aggregator.last_outcomes}
        assert statuses == {"myneta": OutcomeStatus.ERROR, "eci": OutcomeStatus.TIMEOUT}
        errors = {o.provider: o.error for o in aggregator.last_outcomes}
        assert errors["myneta"] == "myneta is down"


class TestCaching:
    """Tests for TTL caching through the aggregator."""

    async def test_second_call_within_ttl_hits_cache(self) -> None:
        providers = _registry()
        aggregator = ConcurrentAggregator(providers)
        first = await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        second = await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        assert first == second
        assert second is first
        assert providers["india_code"].calls == 1
        assert providers["prs"].calls == 1
        assert aggregator.stats.cache_hits == 1
        assert aggregator.stats.cache_misses == 1

    async def test_expired_entry_refetches(self) -> None:
        clock = FakeClock()
        providers = _registry()
        cache = InMemoryEvidenceCache(ttl_seconds=1800, clock=clock)
        aggregator = ConcurrentAggregator(providers, cache=cache)

        await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        clock.now = 1799.0
        await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        assert providers["prs"].calls == 1

        clock.now = 1800.0
        await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        assert providers["prs"].calls == 2

    async def test_query_is_used_verbatim(self) -> None:
        providers = _registry()
        aggregator = ConcurrentAggregator(providers)
        await aggregator.fetch_relevant_data("RTI Act", Intent.LAW)
        await aggregator.fetch_relevant_data("rti act", Intent.LAW)
        await aggregator.fetch_relevant_data("RTI Act ", Intent.LAW)
        assert providers["prs"].calls == 3

    async def test_writes_structured_key(self) -> None:
        cache = InMemoryEvidenceCache()
        aggregator = ConcurrentAggregator(_registry(), cache=cache)
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        assert cache.get(CacheKey(Intent.LAW, "q")) is bundle

    async def test_null_cache_always_fans_out(self) -> None:
        providers = _registry()
        aggregator = ConcurrentAggregator(providers, cache=NullEvidenceCache())
        await aggregator.fetch_relevant_data("q", Intent.FACT_CHECK)
        await aggregator.fetch_relevant_data("q", Intent.FACT_CHECK)
        assert providers["pib"].calls == 2


class TestConcurrency:
    """Tests for fan-out latency, timeouts and single-flight."""

    async def test_latency_bounded_by_slowest_provider(self) -> None:
        providers = _registry(
            india_code=StubProvider("india_code", delay=0.1),
            prs=StubProvider("prs", delay=0.3),
        )
        aggregator = ConcurrentAggregator(providers)
        t0 = time.monotonic()
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        elapsed = time.monotonic() - t0
        assert bundle.sources == ("INDIA_CODE", "PRS")
        assert 0.28 <= elapsed < 0.38

    async def test_timeout_drops_hanging_provider(self) -> None:
        providers = _registry(prs=StubProvider("prs", delay=5.0))
        aggregator = ConcurrentAggregator(providers, provider_timeout=0.1)
        t0 = time.monotonic()
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        elapsed = time.monotonic() - t0
        assert bundle.sources == ("INDIA_CODE",)
        assert elapsed < 1.0
        assert aggregator.stats.provider_timeouts == 1

    async def test_no_timeout_waits_for_slow_provider(self) -> None:
        providers = _registry(prs=StubProvider("prs", delay=0.2))
        aggregator = ConcurrentAggregator(providers, provider_timeout=None)
        bundle = await aggregator.fetch_relevant_data("q", Intent.LAW)
        assert bundle.sources == ("INDIA_CODE", "PRS")

    async def test_last_outcomes_reflect_last_finished_fan_out(self) -> None:
        providers = _registry(pib=StubProvider("pib", delay=0.05))
        aggregator = ConcurrentAggregator(providers)
        await asyncio.gather(
            aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK),
            aggregator.fetch_relevant_data("pension scheme", Intent.GENERAL),
        )
        assert [o.provider for o in aggregator.last_outcomes] == ["pib"]

    async def test_single_flight_shares_fan_out(self) -> None:
        slow = StubProvider("pib", delay=0.1)
        aggregator = ConcurrentAggregator(_registry(pib=slow), single_flight=True)
        results = await asyncio.gather(
            *(aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK) for _ in range(5))
        )
        assert slow.calls == 1
        assert all(r is results[0] for r in results)

    async def test_without_single_flight_concurrent_misses_both_fan_out(self) -> None:
        slow = StubProvider("pib", delay=0.1)
        cache = InMemoryEvidenceCache()
        aggregator = ConcurrentAggregator(_registry(pib=slow), cache=cache, single_flight=False)
        first, second = await asyncio.gather(
            aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK),
            aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK),
        )
        assert slow.calls == 2
        assert first == second
        assert cache.get(CacheKey(Intent.FACT_CHECK, "claim")) == first

    async def test_cancelled_caller_does_not_cancel_shared_fan_out(self) -> None:
        slow = StubProvider("pib", delay=0.1)
        aggregator = ConcurrentAggregator(_registry(pib=slow))

        first = asyncio.ensure_future(aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK))
        await asyncio.sleep(0)
        second = asyncio.ensure_future(aggregator.fetch_relevant_data("claim", Intent.FACT_CHECK))
        await asyncio.sleep(0)
        first.cancel()

        bundle = await second
        assert bundle.sources == ("PIB",)
        assert slow.calls == 1

    async def test_in_flight_entry_released(self) -> None:
        aggregator = ConcurrentAggregator(_registry())
        await aggregator.fetch_relevant_data("q", Intent.LAW)
        await asyncio.sleep(0)
        assert aggregator._in_flight == {}


async def test_works_with_real_civic_providers() -> None:
    aggregator = ConcurrentAggregator(default_providers())
    bundle = await aggregator.fetch_relevant_data("Right to Information Act", Intent.LAW)
    assert bundle.sources == ("India Code", "PRS Legislative Research")
    assert bundle.urls == ("https://indiacode.nic.in", "https://prsindia.org")
    assert bundle.data == (
        "Legal acts, sections, and amendments related to: Right to Information Act\n\n"
        "Legislative analysis and bill information for: Right to Information Act"
    )
