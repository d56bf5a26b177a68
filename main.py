#!/usr/bin/env python
"""CLI for the Civic Evidence pipeline."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from civic_evidence.config import get_default_config_path, load_config
from civic_evidence.config.factory import create_from_config
from civic_evidence.data import CivicQuery, Intent, Language

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    query: str
    config: Path
    language: Language | None = None
    intent: Intent | None = None
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v

    @field_validator("query")
    @classmethod
    def query_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Query required")
        return v


async def run(args: CLIArgs) -> None:
    """Execute the pipeline with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    pipeline, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    query = CivicQuery(text=args.query, language=args.language)

    logger.info(f"Running pipeline for: {args.query}")
    logger.info(f"Config: {args.config}")

    result = await pipeline.run(query, intent=args.intent)

    print(f"\nIntent: {result.intent}")
    print(f"Language: {result.language}")
    print(f"Sources: {result.bundle.source}")
    for url in result.bundle.urls:
        print(f"   {url}")
    print(f"\n{result.context.text}\n")

    logger.info("--- Retrieval Summary ---")
    logger.info(f"Cache hits: {result.stats.cache_hits}")
    logger.info(f"Provider calls: {result.stats.provider_calls}")
    if result.stats.provider_failures:
        logger.info(f"Provider failures: {result.stats.provider_failures}")
    if result.stats.provider_timeouts:
        logger.info(f"Provider timeouts: {result.stats.provider_timeouts}")
    if result.bundle.is_fallback:
        logger.info("No verified evidence found; fallback context used")

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Gather verified public evidence for a civic query."
    )
    parser.add_argument(
        "query",
        help="Citizen query (any supported language)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--language",
        "-l",
        choices=[lang.value for lang in Language],
        default=None,
        help="Answer language (default: detected from the query)",
    )
    parser.add_argument(
        "--intent",
        "-i",
        choices=[intent.value for intent in Intent],
        default=None,
        help="Force an intent instead of classifying the query",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable intermediate pipeline logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            query=ns.query,
            config=config_path,
            language=ns.language,
            intent=ns.intent,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
