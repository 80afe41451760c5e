"""
In-process expiring cache and the fixed-window rate limiter built on it.

State is per process; a multi-worker deployment gets one window per worker.
"""
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from app.config import settings
from app.services.collaborators import RateLimitStatus

logger = logging.getLogger(__name__)


class ExpiringCache:
    """Thread-safe key -> value map whose entries expire after a TTL."""

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_interval: float = 60.0):
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def update(self, key: str, fn: Callable[[Optional[Any], float], Tuple[Any, float]]) -> Any:
        """
        Atomically read-modify-write one entry.

        Expired entries are swept at most once per sweep interval.

        Args:
            key: Cache key
            fn: Called with (current value or None, now); returns (new value, expires_at)

        Returns:
            The stored value
        """
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._evict_expired(now)
                self._next_sweep = now + self._sweep_interval
            entry = self._entries.get(key)
            current = entry[0] if entry and entry[1] > now else None
            value, expires_at = fn(current, now)
            self._entries[key] = (value, expires_at)
            return value

    def _evict_expired(self, now: float) -> int:
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def purge_expired(self) -> int:
        with self._lock:
            return self._evict_expired(self._clock())

    def __len__(self) -> int:
        return len(self._entries)


class InMemoryRateLimiter:
    """Fixed-window request limiter keyed by user and endpoint."""

    def __init__(
        self,
        limit: Optional[int] = None,
        window_seconds: Optional[int] = None,
        cache: Optional[ExpiringCache] = None,
    ):
        self.limit = limit or settings.RATE_LIMIT_REQUESTS
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW_SECONDS
        self.cache = cache if cache is not None else ExpiringCache()

    def check(self, key: str) -> RateLimitStatus:
        """Count one request against the key's window."""
        def bump(current, now):
            if current is None:
                # (count, window_end)
                return (1, now + self.window_seconds), now + self.window_seconds
            count, window_end = current
            return (count + 1, window_end), window_end

        count, window_end = self.cache.update(key, bump)
        if count > self.limit:
            retry_after = max(1, int(round(window_end - self.cache.now())))
            logger.warning(f"[RateLimiter] {key} exceeded {self.limit} requests, retry in {retry_after}s")
            return RateLimitStatus(allowed=False, limit=self.limit, remaining=0, retry_after=retry_after)

        return RateLimitStatus(allowed=True, limit=self.limit, remaining=self.limit - count)


_rate_limiter: Optional[InMemoryRateLimiter] = None


def get_rate_limiter() -> InMemoryRateLimiter:
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = InMemoryRateLimiter()
    return _rate_limiter
