"""Polite single-origin crawler: config, shared types, and crawl components."""

from .config import CrawlConfig, load_config, load_config_payload
from .fetcher import Fetcher, looks_like_html
from .frontier import Frontier
from .observer import CompositeObserver, CrawlObserver, LoggingObserver
from .robots import fetch_disallowed_paths, parse_disallowed_paths
from .scheduler import CrawlScheduler, crawl
from .stats import StatsCollector
from .types import (
    AdmissionResult,
    AdmissionStatus,
    CrawlPhase,
    CrawlResult,
    CrawlStats,
    FetchResult,
    LinkExtractionError,
    SeedURLError,
    utc_now_iso,
)
from .url import (
    admit,
    classify_candidate,
    extract_links,
    parse_seed_url,
    seed_origin,
    tidy_queue,
    validate_url_list,
)

__all__ = [
    "AdmissionResult",
    "AdmissionStatus",
    "CompositeObserver",
    "CrawlConfig",
    "CrawlObserver",
    "CrawlPhase",
    "CrawlResult",
    "CrawlScheduler",
    "CrawlStats",
    "FetchResult",
    "Fetcher",
    "Frontier",
    "LinkExtractionError",
    "LoggingObserver",
    "SeedURLError",
    "StatsCollector",
    "admit",
    "classify_candidate",
    "crawl",
    "extract_links",
    "fetch_disallowed_paths",
    "load_config",
    "load_config_payload",
    "looks_like_html",
    "parse_disallowed_paths",
    "parse_seed_url",
    "seed_origin",
    "tidy_queue",
    "utc_now_iso",
    "validate_url_list",
]
