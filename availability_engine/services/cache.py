# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Resilient single-resource cache.

Wraps one slow or flaky fetch function with a TTL, retry with exponential
backoff, and request coalescing. Concurrent callers on an empty or stale
cache share a single in-flight load and observe the same value or the same
FetchError. A failed load never falls back to the previous value.
"""

import asyncio
import inspect
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

from availability_engine.core.config import settings
from availability_engine.core.errors import FetchError
from availability_engine.core.logging import get_logger
from availability_engine.metrics.prometheus import (
    CACHE_HITS,
    CACHE_MISSES,
    FETCH_ATTEMPTS,
    FETCH_FAILURES,
    FETCH_LATENCY,
    FETCH_RETRIES,
)
from availability_engine.models.domain import CacheEntry

T = TypeVar("T")

FetchFn = Callable[[], Union[Awaitable[T], T]]

logger = get_logger(__name__)


class CacheState(str, Enum):
    EMPTY = "empty"
    FETCHING = "fetching"
    FRESH = "fresh"
    STALE = "stale"
    FAILED = "failed"


def epoch_ms() -> int:
    return int(time.time() * 1000)


def _is_async_callable(fn: Callable) -> bool:
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
        getattr(fn, "__call__", None)
    )


async def run_fetch(fn: FetchFn) -> Any:
    """Call a fetch function without blocking the event loop.

    Coroutine functions are awaited directly. Plain callables run in a worker
    thread; an awaitable they hand back is awaited on the loop.
    """
    if _is_async_callable(fn):
        return await fn()
    result = await asyncio.to_thread(fn)
    if inspect.isawaitable(result):
        result = await result
    return result


class ResilientCache(Generic[T]):
    """TTL cache for one logical resource, backed by a retried fetch."""

    def __init__(
        self,
        fetch_fn: FetchFn,
        *,
        name: str = "resource",
        max_age: Optional[float] = None,
        retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
        attempt_timeout: Optional[float] = None,
        clock: Optional[Callable[[], int]] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ) -> None:
        self.name = name
        self.max_age = settings.ROSTER_MAX_AGE_SECONDS if max_age is None else max_age
        self.retries = settings.ROSTER_FETCH_RETRIES if retries is None else retries
        self.backoff_base = (
            settings.RETRY_BACKOFF_BASE if backoff_base is None else backoff_base
        )
        timeout = settings.ROSTER_FETCH_TIMEOUT if attempt_timeout is None else attempt_timeout
        self.attempt_timeout = timeout if timeout > 0 else None
        if self.retries < 1:
            raise ValueError("retries must be at least 1")
        if self.max_age < 0:
            raise ValueError("max_age must not be negative")

        self._fetch_fn = fetch_fn
        self._clock = clock or epoch_ms
        self._sleep = sleep or asyncio.sleep
        self._lock = asyncio.Lock()
        self._entry: Optional[CacheEntry] = None
        self._last_error: Optional[FetchError] = None
        self._in_flight: Optional[asyncio.Task] = None
        # Bumped by invalidate() so an older load cannot repopulate the entry.
        self._generation = 0

    # ── Public API ──

    async def fetch(self, force_refresh: bool = False) -> T:
        """Return the cached value while fresh, otherwise load it (or join the running load)."""
        async with self._lock:
            entry = self._entry
            if not force_refresh and entry is not None and self._is_fresh(entry):
                CACHE_HITS.labels(resource=self.name).inc()
                logger.debug(
                    "Cache hit: resource=%s, age_ms=%d", self.name, self._age_ms(entry),
                    extra={"resource": self.name},
                )
                return entry.value

            if self._in_flight is None:
                CACHE_MISSES.labels(resource=self.name).inc()
                self._in_flight = asyncio.ensure_future(self._load(self._generation))
            in_flight = self._in_flight

        return await asyncio.shield(in_flight)

    async def refresh(self) -> T:
        return await self.fetch(force_refresh=True)

    def invalidate(self) -> None:
        """Drop the stored entry. The next fetch is cold."""
        self._generation += 1
        self._entry = None
        self._last_error = None
        self._in_flight = None
        logger.info("Cache invalidated: resource=%s", self.name, extra={"resource": self.name})

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    @property
    def state(self) -> CacheState:
        if self._in_flight is not None:
            return CacheState.FETCHING
        if self._last_error is not None:
            return CacheState.FAILED
        if self._entry is None:
            return CacheState.EMPTY
        if self._is_fresh(self._entry):
            return CacheState.FRESH
        return CacheState.STALE

    # ── Internal ──

    def _age_ms(self, entry: CacheEntry) -> int:
        return self._clock() - entry.fetched_at_epoch_ms

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._age_ms(entry) < self.max_age * 1000

    async def _call_once(self) -> T:
        pending = run_fetch(self._fetch_fn)
        if self.attempt_timeout is not None:
            return await asyncio.wait_for(pending, self.attempt_timeout)
        return await pending

    async def _load(self, generation: int) -> T:
        log_extra = {"resource": self.name}
        last_exc: Optional[BaseException] = None
        try:
            for attempt in range(1, self.retries + 1):
                FETCH_ATTEMPTS.labels(resource=self.name).inc()
                start = time.monotonic()
                try:
                    value = await self._call_once()
                except (Exception, asyncio.CancelledError) as exc:
                    # A cancelled supplier is a failed attempt; a cancelled load is not.
                    if isinstance(exc, asyncio.CancelledError) and asyncio.current_task().cancelling():
                        raise
                    last_exc = exc
                    logger.warning(
                        "Fetch attempt %d/%d failed: resource=%s, error=%r",
                        attempt, self.retries, self.name, exc,
                        extra=log_extra,
                    )
                    if attempt < self.retries:
                        FETCH_RETRIES.labels(resource=self.name, attempt=str(attempt)).inc()
                        await self._sleep(self.backoff_base * (2 ** (attempt - 1)))
                    continue

                FETCH_LATENCY.labels(resource=self.name).observe(time.monotonic() - start)
                if generation == self._generation:
                    self._entry = CacheEntry(value=value, fetched_at_epoch_ms=self._clock())
                    self._last_error = None
                logger.info(
                    "Fetched: resource=%s, attempt=%d", self.name, attempt, extra=log_extra
                )
                return value

            FETCH_FAILURES.labels(resource=self.name).inc()
            error = FetchError(self.name, self.retries, last_exc)
            if generation == self._generation:
                self._last_error = error
            logger.error(
                "Fetch exhausted: resource=%s, attempts=%d", self.name, self.retries,
                extra=log_extra,
            )
            raise error from last_exc
        finally:
            if self._in_flight is asyncio.current_task():
                self._in_flight = None
