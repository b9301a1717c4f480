"""Rate limiter interfaces.

The API should depend on this abstraction (not the concrete implementation)
so we can swap storage backends later (e.g., Redis) with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the current window closes.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check(self, key: str, *, limit: int, window_seconds: float) -> RateLimitResult:
        """Count one request for key and decide whether it may proceed.

        Args:
            key: Client identifier (e.g., client IP or "unknown").
            limit: Max requests allowed per window.
            window_seconds: Window length in seconds, starting at the first
                request seen for the key.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError
