"""Lifecycle hooks the scheduler calls while crawling.

The scheduler never prints. Presentation lives in observers: `LoggingObserver`
for the CLI, or any `CrawlObserver` subclass in tests.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .constants import COMPLETION_MARKER
from .types import AdmissionResult, CrawlResult


logger = logging.getLogger(__name__)


class CrawlObserver:
    """No-op base class; override the hooks you need."""

    def on_start(self, seed_url: str, seed_origin: str, disallowed_paths: Sequence[str]) -> None:
        pass

    def on_attempt(self, url: str) -> None:
        pass

    def on_success(self, url: str) -> None:
        pass

    def on_links(self, url: str, links: Sequence[str]) -> None:
        pass

    def on_enqueue(
        self,
        url: str,
        results: Sequence[AdmissionResult],
        snapshot: dict[str, int],
    ) -> None:
        pass

    def on_no_links(self, url: str) -> None:
        pass

    def on_failure(self, url: str, reason: str) -> None:
        pass

    def on_complete(self, result: CrawlResult) -> None:
        pass


class LoggingObserver(CrawlObserver):
    """Render crawl progress as log lines."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def on_start(self, seed_url: str, seed_origin: str, disallowed_paths: Sequence[str]) -> None:
        self.log.info(
            "Starting crawl: seed=%s, origin=%s, disallowed_paths=%d",
            seed_url,
            seed_origin,
            len(disallowed_paths),
        )
        for path in disallowed_paths:
            self.log.debug("robots.txt disallows %s", path)

    def on_attempt(self, url: str) -> None:
        self.log.info('Attempting to crawl "%s" page...', url)

    def on_success(self, url: str) -> None:
        self.log.info("Crawl successful.")

    def on_links(self, url: str, links: Sequence[str]) -> None:
        self.log.info('Found %d links on "%s" page: %s', len(links), url, " | ".join(links))

    def on_enqueue(
        self,
        url: str,
        results: Sequence[AdmissionResult],
        snapshot: dict[str, int],
    ) -> None:
        admitted = sum(1 for result in results if result.admitted)
        self.log.info(
            "Crawled %d URLs so far; queue length %d; excluding %d URLs; "
            "found %d raw URLs; adding %d new valid URLs to queue",
            snapshot.get("visited", 0),
            snapshot.get("queue_size", 0),
            snapshot.get("excluded", 0),
            len(results),
            admitted,
        )

    def on_no_links(self, url: str) -> None:
        self.log.info(
            'No links found on "%s" page. Removing from the queue and adding to '
            "unprocessed list. Moving onto next page to crawl.",
            url,
        )

    def on_failure(self, url: str, reason: str) -> None:
        self.log.warning(
            'Failure: could not crawl "%s" page (%s). Removing from the queue and adding '
            "to unprocessed list. Moving onto next page to crawl.",
            url,
            reason,
        )

    def on_complete(self, result: CrawlResult) -> None:
        self.log.info(
            "%s! Crawled a total of %d web pages. Unable to crawl %d URLs.",
            COMPLETION_MARKER,
            result.visited_count,
            len(result.unprocessable),
        )


class CompositeObserver(CrawlObserver):
    """Fan every hook out to several observers in order."""

    def __init__(self, observers: Iterable[CrawlObserver]) -> None:
        self.observers = list(observers)

    def on_start(self, seed_url: str, seed_origin: str, disallowed_paths: Sequence[str]) -> None:
        for observer in self.observers:
            observer.on_start(seed_url, seed_origin, disallowed_paths)

    def on_attempt(self, url: str) -> None:
        for observer in self.observers:
            observer.on_attempt(url)

    def on_success(self, url: str) -> None:
        for observer in self.observers:
            observer.on_success(url)

    def on_links(self, url: str, links: Sequence[str]) -> None:
        for observer in self.observers:
            observer.on_links(url, links)

    def on_enqueue(
        self,
        url: str,
        results: Sequence[AdmissionResult],
        snapshot: dict[str, int],
    ) -> None:
        for observer in self.observers:
            observer.on_enqueue(url, results, snapshot)

    def on_no_links(self, url: str) -> None:
        for observer in self.observers:
            observer.on_no_links(url)

    def on_failure(self, url: str, reason: str) -> None:
        for observer in self.observers:
            observer.on_failure(url, reason)

    def on_complete(self, result: CrawlResult) -> None:
        for observer in self.observers:
            observer.on_complete(result)


__all__ = ["CompositeObserver", "CrawlObserver", "LoggingObserver"]
