"""Frontier queue plus the visited and unprocessable records of one run."""

from __future__ import annotations

from typing import Sequence

from .constants import DEFAULT_EXCLUDED_EXTENSIONS
from .types import AdmissionResult
from .url import tidy_queue


class Frontier:
    """FIFO crawl frontier owned by a single scheduler.

    - The head is the URL currently being processed; it stays queued until the
      scheduler records an outcome for it.
    - `visited` and `unprocessable` are append-only and keep insertion order.
    - Every URL entering the queue after the seed goes through `tidy_queue`.
    """

    def __init__(self, seed_url: str) -> None:
        self._queue: list[str] = [seed_url]

        # dicts as insertion-ordered sets
        self._visited: dict[str, None] = {}
        self._unprocessable: dict[str, None] = {}

        self._enqueued_count = 1
        self._dequeued_count = 0

    def __len__(self) -> int:
        return len(self._queue)

    def empty(self) -> bool:
        return not self._queue

    def peek(self) -> str:
        """Return the head URL without removing it."""

        if not self._queue:
            raise IndexError("peek from an empty frontier")
        return self._queue[0]

    @property
    def queue(self) -> list[str]:
        return list(self._queue)

    @property
    def visited(self) -> list[str]:
        return list(self._visited)

    @property
    def unprocessable(self) -> list[str]:
        return list(self._unprocessable)

    def record_visit(self, url: str) -> None:
        """Mark `url` as successfully fetched."""

        self._visited.setdefault(url, None)

    def record_unprocessable(self, url: str) -> None:
        """Drop the head and log `url` as unprocessable for this run."""

        if self._queue and self._queue[0] == url:
            self._drop_head()
        self._unprocessable.setdefault(url, None)

    def advance(
        self,
        discovered: Sequence[str],
        *,
        seed_origin: str,
        disallowed_paths: Sequence[str],
        strict_paths: bool = False,
        excluded_extensions: Sequence[str] = DEFAULT_EXCLUDED_EXTENSIONS,
    ) -> list[AdmissionResult]:
        """Drop the head and append the admissible subset of `discovered`."""

        results: list[AdmissionResult] = []
        self._queue = tidy_queue(
            self._queue,
            list(self._visited),
            list(disallowed_paths),
            seed_origin,
            list(discovered),
            unprocessable=self._unprocessable.keys(),
            strict_paths=strict_paths,
            excluded_extensions=excluded_extensions,
            results=results,
        )
        self._dequeued_count += 1
        self._enqueued_count += sum(1 for result in results if result.admitted)
        return results

    def seen(self) -> set[str]:
        """Every URL this run has queued, visited, or given up on."""

        return {*self._queue, *self._visited, *self._unprocessable}

    def snapshot(self) -> dict[str, int]:
        """Return frontier counters for logs/stats reporting."""

        return {
            "queue_size": len(self._queue),
            "visited": len(self._visited),
            "unprocessable": len(self._unprocessable),
            "excluded": len(self.seen()),
            "enqueued": self._enqueued_count,
            "dequeued": self._dequeued_count,
        }

    def _drop_head(self) -> None:
        self._queue.pop(0)
        self._dequeued_count += 1


__all__ = ["Frontier"]
