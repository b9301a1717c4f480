"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: every worker or serverless instance keeps its own
  counters, so a client spread across instances can exceed the nominal limit.
- Thread-safe: the read-modify-write on a key runs under the state map lock.
- Windows are anchored at the first request seen for a key, not at clock
  boundaries.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable

from mirror_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from mirror_api.utils.keyed_state import KeyedStateMap


@dataclass
class _WindowState:
    count: int
    reset_at: float


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting requests per key inside a fixed window.

    A window opens on the first request for a key and closes ``window_seconds``
    later. Once closed, the next request replaces the entry instead of
    incrementing it. Denied requests never consume a slot.

    Important:
        Entries are only replaced, never deleted, unless ``max_keys`` is set
        or ``purge_expired`` is called.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        max_keys: int | None = None,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            clock: Time source function returning UNIX time in seconds.
            max_keys: Optional bound on tracked keys (LRU eviction).
        """
        self._clock = clock
        self._states: KeyedStateMap[_WindowState] = KeyedStateMap(max_keys=max_keys)

    def _build_allowed_result(self, *, limit: int, remaining: int, reset_at: float) -> RateLimitResult:
        """Build a RateLimitResult for an allowed request."""
        return RateLimitResult(
            allowed=True,
            limit=limit,
            remaining=remaining,
            reset_at=int(math.ceil(reset_at)),
            retry_after_seconds=None,
        )

    def _build_blocked_result(self, *, now: float, limit: int, reset_at: float) -> RateLimitResult:
        """Build a RateLimitResult for a blocked request."""
        retry_after = max(0, int(math.ceil(reset_at - now)))
        return RateLimitResult(
            allowed=False,
            limit=limit,
            remaining=0,
            reset_at=int(math.ceil(reset_at)),
            retry_after_seconds=retry_after,
        )

    def check(self, key: str, *, limit: int, window_seconds: float) -> RateLimitResult:
        """Count one request for key against its current window.

        Args:
            key: Unique identifier for rate limiting (e.g., client IP).
            limit: Max requests allowed per window.
            window_seconds: Window length in seconds.

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty or limit/window are not positive.
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        now = self._clock()

        with self._states.lock:
            state = self._states.get(key)

            if state is None or now > state.reset_at:
                state = _WindowState(count=1, reset_at=now + window_seconds)
                self._states.put(key, state)
                return self._build_allowed_result(
                    limit=limit, remaining=limit - 1, reset_at=state.reset_at
                )

            if state.count >= limit:
                return self._build_blocked_result(now=now, limit=limit, reset_at=state.reset_at)

            state.count += 1
            return self._build_allowed_result(
                limit=limit, remaining=limit - state.count, reset_at=state.reset_at
            )

    def purge_expired(self) -> int:
        """Drop keys whose window has closed.

        Called periodically by the application lifespan (see
        ``sweep_expired_state``); expired keys are otherwise only replaced lazily.

        Returns:
            Number of removed keys.
        """
        now = self._clock()
        return self._states.purge(lambda state: now > state.reset_at)

    def stats(self) -> dict[str, int | None]:
        """Return tracked-key metrics for diagnostics."""
        return self._states.stats()
