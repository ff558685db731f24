"""Crawl statistics aggregation utilities."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from .types import AdmissionResult, AdmissionStatus, CrawlStats, FetchResult


class StatsCollector:
    """Collect and summarize crawler runtime statistics for one run."""

    def __init__(self, base: CrawlStats | None = None) -> None:
        self._core = base or CrawlStats()

        self._admission_counts: dict[str, int] = defaultdict(int)
        self._frontier_snapshot: dict[str, int] = {}

        self._fetch_status_code_counts: dict[str, int] = defaultdict(int)
        self._fetch_error_type_counts: dict[str, int] = defaultdict(int)
        self._fetch_elapsed_ms_total = 0
        self._fetch_elapsed_samples = 0
        self._fetch_bytes_total = 0

        self._custom_counters: dict[str, int] = defaultdict(int)

    def record_robots(self, disallowed_paths: list[str]) -> None:
        self._core.robots_rules = len(disallowed_paths)

    def record_fetch(self, result: FetchResult, *, is_html: bool) -> None:
        """Record one fetch result."""

        if result.ok and is_html:
            self._core.fetched_ok += 1
        elif result.ok:
            self._core.fetched_non_html += 1
        else:
            self._core.fetched_error += 1

        if result.status_code is not None:
            self._fetch_status_code_counts[str(result.status_code)] += 1

        if result.error:
            err_type = result.error.split(":", maxsplit=1)[0].strip() or "Unknown"
            self._fetch_error_type_counts[err_type] += 1

        if result.elapsed_ms is not None:
            self._fetch_elapsed_ms_total += int(result.elapsed_ms)
            self._fetch_elapsed_samples += 1

        if result.content_length is not None:
            self._fetch_bytes_total += int(result.content_length)

    def record_links(self, count: int) -> None:
        self._core.links_found += max(0, count)

    def record_admissions(self, results: Iterable[AdmissionResult]) -> None:
        """Record per-URL frontier screening outcomes."""

        for result in results:
            self._admission_counts[result.status.value] += 1
            if result.status == AdmissionStatus.ADMITTED:
                self._core.frontier_admitted += 1

    def record_unprocessable(self) -> None:
        self._core.unprocessable += 1

    def record_frontier_snapshot(self, snapshot: Mapping[str, int]) -> None:
        """Attach latest frontier snapshot for diagnostics."""

        self._frontier_snapshot = dict(snapshot)

    def increment(self, name: str, value: int = 1) -> None:
        """Increment a custom counter for ad-hoc instrumentation."""

        if not name or value == 0:
            return
        self._custom_counters[name] += value

    def finish(self) -> None:
        """Mark crawl as finished."""

        self._core.finish()

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-serializable summary payload."""

        core = self._core.to_json()

        start = _parse_iso_utc(self._core.started_at)
        end = (
            _parse_iso_utc(self._core.finished_at)
            if self._core.finished_at
            else datetime.now(timezone.utc)
        )
        duration_seconds = max(0.0, (end - start).total_seconds())

        fetch_elapsed_avg = (
            self._fetch_elapsed_ms_total / self._fetch_elapsed_samples
            if self._fetch_elapsed_samples > 0
            else 0.0
        )

        return {
            **core,
            "duration_seconds": duration_seconds,
            "frontier": {
                "admission_counts": dict(self._admission_counts),
                "snapshot": dict(self._frontier_snapshot),
            },
            "fetch": {
                "status_code_counts": dict(self._fetch_status_code_counts),
                "error_type_counts": dict(self._fetch_error_type_counts),
                "elapsed_ms_total": self._fetch_elapsed_ms_total,
                "elapsed_ms_samples": self._fetch_elapsed_samples,
                "elapsed_ms_avg": fetch_elapsed_avg,
                "bytes_total": self._fetch_bytes_total,
            },
            "custom_counters": dict(self._custom_counters),
        }


def _parse_iso_utc(value: str | None) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return datetime.now(timezone.utc)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


__all__ = ["StatsCollector"]
