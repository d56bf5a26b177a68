"""Evidence pipeline implementation."""

import dataclasses
import logging
import time

from civic_evidence.aggregator.base import EvidenceAggregator
from civic_evidence.classify import classify_intent, resolve_language
from civic_evidence.context import DEFAULT_MAX_CHARS, build_context
from civic_evidence.data import CivicQuery, FetchStats, Intent
from civic_evidence.pipeline.base import PipelineResult
from civic_evidence.run_logger import RunLogger

logger = logging.getLogger(__name__)


class EvidencePipeline:
    """Classify a query, gather its evidence and render the prompt context.

    Flow:
    1. Resolve the answer language (caller override, else script detection)
    2. Classify the intent unless the caller forces one
    3. Aggregate evidence for (query, intent)
    4. Build the bounded context block

    Args:
        aggregator: Evidence aggregator to gather bundles with.
        context_max_chars: Upper bound on the context's DATA section.
        run_logger: Optional RunLogger for intermediate result logging.
    """

    def __init__(
        self,
        aggregator: EvidenceAggregator,
        *,
        context_max_chars: int = DEFAULT_MAX_CHARS,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._max_chars = context_max_chars
        self._run_logger = run_logger

    async def run(self, query: CivicQuery, *, intent: Intent | None = None) -> PipelineResult:
        """Execute the evidence pipeline.

        Args:
            query: The citizen query.
            intent: Forced intent (e.g. fact-check requests); classified when None.

        Returns:
            Pipeline result with intent, language, bundle and context.
        """
        if self._run_logger:
            self._run_logger.start_run("evidence", query)

        # Step 1-2: language and intent
        t0 = time.monotonic()
        language = resolve_language(query.text, query.language)
        resolved_intent = Intent(intent) if intent is not None else classify_intent(query.text)
        classify_duration = time.monotonic() - t0

        if self._run_logger:
            self._run_logger.log_stage(
                stage="classification",
                component="classify",
                input_data={"text": query.text, "forced_intent": intent},
                output_data={"intent": resolved_intent, "language": language},
                duration_seconds=classify_duration,
            )

        # Step 3: aggregate
        stats_before = _snapshot(self._aggregator)
        t0 = time.monotonic()
        bundle = await self._aggregator.fetch_relevant_data(query.text, resolved_intent)
        agg_duration = time.monotonic() - t0
        stats = _delta(self._aggregator, stats_before)

        if self._run_logger:
            self._run_logger.log_stage(
                stage="aggregation",
                component=type(self._aggregator).__name__,
                input_data={"query": query.text, "intent": resolved_intent},
                output_data=bundle,
                duration_seconds=agg_duration,
            )

        # Step 4: context
        t0 = time.monotonic()
        context = build_context(bundle, resolved_intent, self._max_chars)
        context_duration = time.monotonic() - t0
        if context.truncated:
            logger.info("Evidence context truncated to %d characters", self._max_chars)

        if self._run_logger:
            self._run_logger.log_stage(
                stage="context",
                component="build_context",
                input_data={"max_chars": self._max_chars},
                output_data=context,
                duration_seconds=context_duration,
            )
            self._run_logger.finish_run(bundle, stats)

        return PipelineResult(
            query=query,
            intent=resolved_intent,
            language=language,
            bundle=bundle,
            context=context,
            stats=stats,
        )


def _snapshot(aggregator: EvidenceAggregator) -> FetchStats:
    stats = getattr(aggregator, "stats", None)
    if isinstance(stats, FetchStats):
        return dataclasses.replace(stats)
    return FetchStats()


def _delta(aggregator: EvidenceAggregator, before: FetchStats) -> FetchStats:
    """Counters accumulated by the aggregator since ``before`` was taken.

    Concurrent runs sharing an aggregator may see each other's counts.
    """
    return _snapshot(aggregator) - before
