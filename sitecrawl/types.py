"""Core type definitions for the crawler.

This module is intentionally dependency-light so other crawler modules can import
shared records without introducing cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


JSONPrimitive = str | int | float | bool | None
JSONValue = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]
JSONDict = dict[str, JSONValue]


class SeedURLError(ValueError):
    """Raised when the seed URL is missing or cannot be parsed."""


class LinkExtractionError(ValueError):
    """Raised when a root-relative href cannot be resolved against the origin."""


class CrawlPhase(str, Enum):
    """Scheduler state."""

    RUNNING = "running"
    DONE = "done"


class AdmissionStatus(str, Enum):
    """Outcome of screening one discovered URL for the frontier."""

    ADMITTED = "admitted"
    SKIPPED_SEEN = "skipped_seen"
    SKIPPED_ROBOTS = "skipped_robots"
    SKIPPED_OUT_OF_SCOPE = "skipped_out_of_scope"
    SKIPPED_FILE_TYPE = "skipped_file_type"


@dataclass(frozen=True, slots=True)
class AdmissionResult:
    """One discovered URL and the rule that decided it."""

    url: str
    status: AdmissionStatus

    @property
    def admitted(self) -> bool:
        return self.status == AdmissionStatus.ADMITTED


def utc_now_iso() -> str:
    """Return an RFC3339-like UTC timestamp string."""

    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class FetchResult:
    """Result of attempting to download one URL."""

    requested_url: str
    final_url: str | None
    status_code: int | None
    content_type: str | None
    text: str | None
    fetched_at: str = field(default_factory=utc_now_iso)
    elapsed_ms: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return (
            self.error is None
            and self.status_code is not None
            and 200 <= self.status_code < 300
            and self.text is not None
        )

    @property
    def content_length(self) -> int | None:
        return None if self.text is None else len(self.text.encode("utf-8", errors="ignore"))


@dataclass(slots=True)
class CrawlStats:
    """Simple mutable counters used for crawl summary reporting."""

    fetched_ok: int = 0
    fetched_error: int = 0
    fetched_non_html: int = 0
    links_found: int = 0
    frontier_admitted: int = 0
    unprocessable: int = 0
    robots_rules: int = 0

    started_at: str = field(default_factory=utc_now_iso)
    finished_at: str | None = None

    def finish(self) -> None:
        self.finished_at = utc_now_iso()

    def to_json(self) -> JSONDict:
        return {
            "fetched_ok": self.fetched_ok,
            "fetched_error": self.fetched_error,
            "fetched_non_html": self.fetched_non_html,
            "links_found": self.links_found,
            "frontier_admitted": self.frontier_admitted,
            "unprocessable": self.unprocessable,
            "robots_rules": self.robots_rules,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }


@dataclass(slots=True)
class CrawlResult:
    """Final state of one crawl run."""

    seed_url: str
    seed_origin: str
    visited: list[str]
    unprocessable: list[str]
    disallowed_paths: list[str]
    stats: dict[str, Any] = field(default_factory=dict)
    phase: CrawlPhase = CrawlPhase.DONE

    @property
    def visited_count(self) -> int:
        return len(self.visited)


__all__ = [
    "AdmissionResult",
    "AdmissionStatus",
    "CrawlPhase",
    "CrawlResult",
    "CrawlStats",
    "FetchResult",
    "JSONDict",
    "JSONPrimitive",
    "JSONValue",
    "LinkExtractionError",
    "SeedURLError",
    "utc_now_iso",
]
