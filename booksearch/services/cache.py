"""
Search Response Cache

In-process cache of computed search results with single-flight misses.

Features:
- Key -> SearchResult store that lives as long as the process
- At most one computation per key in flight; concurrent callers for
  the same key share its outcome instead of fetching again
- Failures are never stored, so the next request for the key retries
- Hit/miss/coalesce counters for logging

Cache Strategy:
- Entries never expire and are never overwritten
- A result is stored before any waiter sees it, so once get_or_compute
  returns a value to anyone, later lookups for the key are hits

Usage:
    cache = ResponseCache()
    result = await cache.get_or_compute(key, compute)
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from booksearch.schemas.search import SearchResult

logger = logging.getLogger(__name__)

Compute = Callable[[], Awaitable[SearchResult]]


def _retrieve_exception(task: asyncio.Task) -> None:
    """
    Mark a failed computation's exception as retrieved.

    Waiters may all have been cancelled before the task failed; without
    this, asyncio would log "Task exception was never retrieved".
    """
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"Cache computation failed: {task.exception()!r}")


class ResponseCache:
    """
    Single-flight cache for search results.

    Two maps, both guarded by one asyncio.Lock:
    - _entries: resolved results, keyed by cache key
    - _in_flight: the running computation task for each pending key
    """

    def __init__(self):
        self._entries: dict[str, SearchResult] = {}
        self._in_flight: dict[str, asyncio.Task] = {}
        self._lock = asyncio.Lock()
        self.hits = 0
        self.misses = 0
        self.coalesced = 0

    async def get_or_compute(self, key: str, compute: Compute) -> SearchResult:
        """
        Return the cached result for key, computing it at most once.

        Args:
            key: Cache key
            compute: Zero-argument coroutine function producing the result

        Returns:
            The stored or freshly computed SearchResult

        Raises:
            Whatever compute raised, to every caller waiting on it
        """
        async with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self.hits += 1
                logger.debug(f"Cache HIT: {key}")
                return cached

            task = self._in_flight.get(key)
            if task is None:
                self.misses += 1
                logger.debug(f"Cache MISS: {key}")
                task = asyncio.create_task(self._resolve(key, compute))
                task.add_done_callback(_retrieve_exception)
                self._in_flight[key] = task
            else:
                self.coalesced += 1
                logger.debug(f"Cache WAIT: {key} (computation in flight)")

        # shield: a cancelled caller must not cancel the shared computation
        return await asyncio.shield(task)

    async def _resolve(self, key: str, compute: Compute) -> SearchResult:
        """Run compute, then store on success and clear the in-flight marker."""
        try:
            result = await compute()
        except BaseException:
            async with self._lock:
                self._in_flight.pop(key, None)
            raise

        async with self._lock:
            self._entries.setdefault(key, result)
            self._in_flight.pop(key, None)
            stored = self._entries[key]

        logger.debug(f"Cache SET: {key} ({len(self._entries)} entries)")
        return stored

    def contains(self, key: str) -> bool:
        """Check whether a resolved entry exists for key."""
        return key in self._entries

    def stats(self) -> dict:
        """
        Get cache statistics for monitoring.

        Returns:
            Dictionary with entry count, in-flight count and counters
        """
        return {
            "entries": len(self._entries),
            "in_flight": len(self._in_flight),
            "hits": self.hits,
            "misses": self.misses,
            "coalesced": self.coalesced,
        }
