"""Sequential crawl loop: fetch, extract, filter, enqueue until the frontier empties."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from .config import CrawlConfig
from .fetcher import Fetcher
from .frontier import Frontier
from .observer import CrawlObserver, LoggingObserver
from .robots import fetch_disallowed_paths
from .stats import StatsCollector
from .types import CrawlPhase, CrawlResult, FetchResult, LinkExtractionError
from .url import extract_links, parse_seed_url


logger = logging.getLogger(__name__)

RobotsLoader = Callable[[str], list[str]]


class CrawlScheduler:
    """Drive one polite, single-origin crawl.

    States are RUNNING (frontier non-empty) and DONE (frontier empty). Each
    iteration waits `rate_limit_seconds`, fetches the frontier head, and either
    records it as visited and enqueues its admissible links, or records it as
    unprocessable. Per-page failures never abort the run.
    """

    def __init__(
        self,
        config: CrawlConfig,
        *,
        fetcher: Fetcher | None = None,
        observer: CrawlObserver | None = None,
        stats: StatsCollector | None = None,
        robots_loader: RobotsLoader | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config

        self.fetcher = fetcher or Fetcher(config)
        self.observer = observer or LoggingObserver()
        self.stats = stats or StatsCollector()
        self.robots_loader = robots_loader or self._default_robots_loader
        self.sleep = sleep

        self._owns_fetcher = fetcher is None

        self.phase = CrawlPhase.DONE
        self.frontier: Frontier | None = None

    def run(self) -> CrawlResult:
        """Crawl from the configured seed until the frontier is empty."""

        try:
            seed_url, origin = parse_seed_url(self.config.seed)
            disallowed_paths = self._load_disallowed_paths(origin)
            self.stats.record_robots(disallowed_paths)
            self.observer.on_start(seed_url, origin, disallowed_paths)

            frontier = Frontier(seed_url)
            self.frontier = frontier
            self.phase = CrawlPhase.RUNNING

            while not frontier.empty():
                self._step(frontier, origin, disallowed_paths)
        finally:
            if self._owns_fetcher:
                self.fetcher.close()

        self.phase = CrawlPhase.DONE
        self.stats.record_frontier_snapshot(frontier.snapshot())
        self.stats.finish()

        result = CrawlResult(
            seed_url=seed_url,
            seed_origin=origin,
            visited=frontier.visited,
            unprocessable=frontier.unprocessable,
            disallowed_paths=list(disallowed_paths),
            stats=self.stats.to_json(),
            phase=self.phase,
        )
        self.observer.on_complete(result)
        return result

    def _step(self, frontier: Frontier, origin: str, disallowed_paths: list[str]) -> None:
        self.sleep(self.config.rate_limit_seconds)

        current = frontier.peek()
        self.observer.on_attempt(current)

        fetch_result = self.fetcher.fetch(current)
        html = self.fetcher.html_body(fetch_result)
        self.stats.record_fetch(fetch_result, is_html=html is not None)

        if html is None:
            self._give_up(frontier, current)
            self.observer.on_failure(current, _failure_reason(fetch_result))
            return

        frontier.record_visit(current)
        self.observer.on_success(current)

        try:
            links = extract_links(html, origin)
        except LinkExtractionError as exc:
            logger.error("Error extracting URLs from %s: %s", current, exc)
            self.stats.increment("link_extraction_errors")
            self._give_up(frontier, current)
            self.observer.on_failure(current, str(exc))
            return

        self.stats.record_links(len(links))

        if not links:
            self._give_up(frontier, current)
            self.observer.on_no_links(current)
            return

        self.observer.on_links(current, links)
        results = frontier.advance(
            links,
            seed_origin=origin,
            disallowed_paths=disallowed_paths,
            strict_paths=self.config.strict_robots_paths,
            excluded_extensions=self.config.excluded_extensions,
        )
        self.stats.record_admissions(results)
        self.observer.on_enqueue(current, results, frontier.snapshot())

    def _give_up(self, frontier: Frontier, url: str) -> None:
        frontier.record_unprocessable(url)
        self.stats.record_unprocessable()

    def _load_disallowed_paths(self, origin: str) -> list[str]:
        if not self.config.respect_robots:
            logger.info("Ignoring robots.txt for %s", origin)
            return []
        return list(self.robots_loader(origin))

    def _default_robots_loader(self, origin: str) -> list[str]:
        return fetch_disallowed_paths(
            origin,
            session=self.fetcher.session,
            user_agent=self.config.user_agent,
            timeout=self.config.timeout_seconds,
        )


def _failure_reason(result: FetchResult) -> str:
    if result.error:
        return result.error
    if result.status_code is not None and not 200 <= result.status_code < 300:
        return f"HTTP status {result.status_code}"
    return "response is not an HTML document"


def crawl(seed: str, **overrides: Any) -> CrawlResult:
    """Build a config from `seed` plus keyword overrides and run one crawl."""

    scheduler_kwargs = {
        key: overrides.pop(key)
        for key in ("fetcher", "observer", "stats", "robots_loader", "sleep")
        if key in overrides
    }
    config = CrawlConfig(seed=seed, **overrides)
    return CrawlScheduler(config, **scheduler_kwargs).run()


__all__ = ["CrawlScheduler", "RobotsLoader", "crawl"]
