"""CLI entrypoint for a single polite crawl."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

from sitecrawl import (
    CrawlConfig,
    CrawlResult,
    CrawlScheduler,
    LoggingObserver,
    SeedURLError,
    load_config_payload,
    parse_seed_url,
)
from sitecrawl.constants import COMPLETION_MARKER, JSON_INDENT


SEED_MISSING_MESSAGE = "Seed URL not provided. Exiting web crawler."
SEED_INVALID_MESSAGE = "Seed URL provided can not be parsed as a valid URL. Exiting web crawler."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl every page reachable on the seed URL's origin.",
    )

    parser.add_argument(
        "seed",
        nargs="?",
        default=None,
        help="Seed URL. Overrides the config seed if both are given.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to JSON/YAML crawl config.",
    )

    parser.add_argument("--rate_limit_seconds", type=float, default=None)
    parser.add_argument("--timeout_seconds", type=float, default=None)
    parser.add_argument("--user_agent", type=str, default=None)
    parser.add_argument(
        "--no_respect_robots",
        dest="respect_robots",
        action="store_false",
        default=None,
        help="Ignore robots.txt.",
    )
    parser.add_argument(
        "--strict_robots_paths",
        action="store_true",
        help="Match robots.txt rules as prefixes of the URL path instead of substrings.",
    )

    parser.add_argument(
        "--print_stats_json",
        action="store_true",
        help="Print full stats JSON in stdout after run.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging.",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, payload: dict[str, Any]) -> CrawlConfig:
    payload = dict(payload)

    if args.seed:
        payload["seed"] = args.seed
    if args.rate_limit_seconds is not None:
        payload["rate_limit_seconds"] = args.rate_limit_seconds
    if args.timeout_seconds is not None:
        payload["timeout_seconds"] = args.timeout_seconds
    if args.user_agent is not None:
        payload["user_agent"] = args.user_agent
    if args.respect_robots is not None:
        payload["respect_robots"] = args.respect_robots
    if args.strict_robots_paths:
        payload["strict_robots_paths"] = True

    return CrawlConfig.from_dict(payload)


def setup_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    # urllib3 logs every connection at DEBUG; keep verbose output about the crawl.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def print_summary(result: CrawlResult, *, print_stats_json: bool) -> None:
    unprocessable = result.unprocessable

    print(f"\n=== {COMPLETION_MARKER}! ===")
    print(f"seed: {result.seed_url}")
    print(f"visited: {result.visited_count}")
    print(f"unprocessable: {len(unprocessable)}")
    if unprocessable:
        print(f"Here they are: {' | '.join(unprocessable)}")

    if print_stats_json:
        print("\n--- Full Stats JSON ---")
        print(json.dumps(result.stats, indent=JSON_INDENT, sort_keys=True))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        payload = load_config_payload(args.config) if args.config is not None else {}
    except (OSError, ValueError) as exc:
        logging.error("Failed to load config: %s", exc)
        return 1

    seed = args.seed or payload.get("seed")
    if not seed:
        print(SEED_MISSING_MESSAGE, file=sys.stderr)
        return 1

    try:
        parse_seed_url(str(seed))
    except SeedURLError:
        print(SEED_INVALID_MESSAGE, file=sys.stderr)
        return 1

    try:
        config = build_config(args, payload)
    except ValueError as exc:
        logging.error("Failed to build config: %s", exc)
        return 1

    logging.info(
        "Starting crawl: seed=%s, rate_limit_seconds=%s, respect_robots=%s",
        config.seed,
        config.rate_limit_seconds,
        config.respect_robots,
    )

    try:
        result = CrawlScheduler(config, observer=LoggingObserver()).run()
    except KeyboardInterrupt:
        logging.error("Interrupted by user")
        return 130
    except Exception:
        logging.exception("Crawl failed")
        return 1

    print_summary(result, print_stats_json=args.print_stats_json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
