from __future__ import annotations

import threading
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class TokenBucket:
    tokens: float
    last_refill: float


class RateLimitError(Exception):
    def __init__(self, retry_after_seconds: int) -> None:
        super().__init__("rate_limited")
        self.retry_after_seconds = retry_after_seconds


class RateLimiter:
    """In-memory token bucket limiter keyed by client address.

    A full bucket holds ``per_minute`` tokens and refills continuously, so a
    client gets at most ``per_minute`` requests in any rolling 60 seconds.
    """

    def __init__(
        self,
        per_minute: int,
        burst: Optional[int] = None,
        disabled: bool = False,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = 1024,
    ) -> None:
        self.rate_per_second = max(float(per_minute), 1.0) / 60.0
        self.burst = float(burst if burst is not None else per_minute)
        self.disabled = disabled
        self._clock = clock
        self.sweep_every = max(int(sweep_every), 1)
        self._checks = 0
        self._lock = threading.Lock()
        self._buckets: Dict[str, TokenBucket] = defaultdict(
            lambda: TokenBucket(tokens=self.burst, last_refill=self._clock())
        )

    def check(self, key: str) -> None:
        """Consume one token for ``key`` or raise RateLimitError."""
        if self.disabled:
            return

        with self._lock:
            now = self._clock()
            self._checks += 1
            if self._checks % self.sweep_every == 0:
                self._sweep(now)

            bucket = self._buckets[key]
            elapsed = max(now - bucket.last_refill, 0.0)
            bucket.tokens = min(self.burst, bucket.tokens + elapsed * self.rate_per_second)
            bucket.last_refill = now

            if bucket.tokens < 1.0:
                missing = 1.0 - bucket.tokens
                retry_after = max(int(missing / self.rate_per_second + 0.999), 1)
                raise RateLimitError(retry_after_seconds=retry_after)

            bucket.tokens -= 1.0

    def _sweep(self, now: float) -> None:
        # a bucket idle long enough to refill completely is the same as a new one
        idle_for = self.burst / self.rate_per_second
        stale = [k for k, b in self._buckets.items() if now - b.last_refill >= idle_for]
        for key in stale:
            del self._buckets[key]

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()
