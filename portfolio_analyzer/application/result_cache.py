"""Time-boxed in-memory cache of successful analyses."""
import logging
import time
from typing import Callable, Dict, Optional
from portfolio_analyzer.domain.models import AnalysisResponse, CacheEntry


logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 10 * 60


class AnalysisCache:
    """Caches analysis responses keyed by lowercase username.

    Entries expire lazily: an expired entry is deleted when it is read.
    Responses built from mock data are never stored.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, username: str) -> Optional[AnalysisResponse]:
        key = username.lower()
        entry = self._entries.get(key)
        if entry is None:
            return None

        age = self._clock() - entry.timestamp
        if age > self._ttl_seconds:
            del self._entries[key]
            logger.info(f"[Cache] Expired for: {key}")
            return None

        logger.info(f"[Cache] HIT for: {key} (age: {round(age)}s)")
        return entry.response

    def put(self, username: str, response: AnalysisResponse) -> bool:
        """Store a response; returns False when it was refused as mock data."""
        key = username.lower()
        if response.is_mock:
            logger.info(f"[Cache] SKIPPED mock data for: {key}")
            return False

        self._entries[key] = CacheEntry(response=response, timestamp=self._clock())
        logger.info(f"[Cache] STORED for: {key} (total cached: {len(self._entries)})")
        return True

    def __len__(self) -> int:
        return len(self._entries)
