"""Client-side rate limiting for the geocoding service.

Nominatim's usage policy allows at most one request per second from an
application. `RateLimiter` keeps the earliest moment the next request may
start (`next_available_at`) and blocks until then. Spacing is measured
start-to-start, so a slow or failed request still uses up its slot.

The clock and sleep functions are injectable so tests can run on fake
time.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from .logging_config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Single gate enforcing a minimum interval between call starts.

    Example:
        >>> limiter = RateLimiter(min_interval=1.0)
        >>> limiter.acquire()  # returns immediately
        0.0
        >>> waited = limiter.acquire()  # blocks for about a second
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_interval < 0:
            raise ValueError("min_interval must be non-negative")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self.next_available_at: float = float("-inf")

    def acquire(self) -> float:
        """Block until a call may start, then reserve the next slot.

        Returns:
            Seconds spent waiting.
        """
        with self._lock:
            now = self._clock()
            wait = self.next_available_at - now
            if wait > 0:
                logger.debug(f"Rate limit: waiting {wait:.2f}s")
                self._sleep(wait)
                now = self._clock()
            else:
                wait = 0.0
            self.next_available_at = now + self.min_interval
            return wait
