"""In-memory sliding window rate limiter keyed by client identifier."""
import asyncio
import logging
import time
from typing import Callable, Dict
from portfolio_analyzer.domain.models import RateLimitDecision, RateLimitEntry


logger = logging.getLogger(__name__)

MAX_REQUESTS = 10
WINDOW_MS = 60 * 1000
CLEANUP_INTERVAL_SECONDS = 5 * 60


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class SlidingWindowRateLimiter:
    """Admits at most `max_requests` per identifier within a trailing window.

    State lives for the lifetime of the process. Checks and sweeps are
    synchronous, so on an asyncio event loop no locking is required.
    """

    def __init__(
        self,
        max_requests: int = MAX_REQUESTS,
        window_ms: int = WINDOW_MS,
        clock: Callable[[], float] = _monotonic_ms
    ):
        """Initialize the limiter.

        Args:
            max_requests: Requests admitted per window per identifier
            window_ms: Window length in milliseconds
            clock: Returns the current time in milliseconds
        """
        self._max_requests = max_requests
        self._window_ms = window_ms
        self._clock = clock
        self._store: Dict[str, RateLimitEntry] = {}

    def check(self, identifier: str) -> RateLimitDecision:
        """Check whether a request from `identifier` is admitted, recording it if so."""
        now = self._clock()
        window_start = now - self._window_ms

        entry = self._store.get(identifier)
        if entry is None:
            entry = RateLimitEntry()
            self._store[identifier] = entry

        entry.timestamps = [t for t in entry.timestamps if t > window_start]

        if len(entry.timestamps) >= self._max_requests:
            oldest_in_window = entry.timestamps[0]
            retry_after_ms = oldest_in_window + self._window_ms - now
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                retry_after_ms=max(0, int(retry_after_ms))
            )

        entry.timestamps.append(now)
        return RateLimitDecision(
            allowed=True,
            remaining=self._max_requests - len(entry.timestamps),
            retry_after_ms=None
        )

    def sweep(self) -> int:
        """Drop identifiers with no activity in the last two windows.

        Returns:
            Number of identifiers removed
        """
        stale_before = self._clock() - self._window_ms * 2
        stale = [
            key for key, entry in self._store.items()
            if not entry.timestamps or entry.timestamps[-1] < stale_before
        ]
        for key in stale:
            del self._store[key]
        if stale:
            logger.debug(f"Swept {len(stale)} stale rate limit entries")
        return len(stale)

    async def run_periodic_sweep(self, interval_seconds: float = CLEANUP_INTERVAL_SECONDS) -> None:
        """Sweep stale entries forever on a fixed interval (run as a background task)."""
        while True:
            await asyncio.sleep(interval_seconds)
            self.sweep()

    def __len__(self) -> int:
        return len(self._store)
