"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: API routes depend on a dependency function only.
- Swap-friendly: storage backend can be replaced (e.g., Redis) behind an
  abstract interface.
- Composition root owns state: the limiter lives on ``app.state`` and is
  created once per application by the app factory.

Rate limiting strategy:
- Fixed window per client key (first X-Forwarded-For hop, X-Real-IP, or
  "unknown"), 30 requests per 10 minutes by default.
- Best-effort only: every process keeps its own counters.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from mirror_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from mirror_api.core.client_identity import get_client_key
from mirror_api.core.config import Settings
from mirror_api.core.logging import hash_identifier

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    """Return the application's shared rate limiter."""
    return request.app.state.rate_limiter


def build_rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    """Build X-RateLimit-* headers (plus Retry-After when blocked)."""
    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_at),
    }
    if result.retry_after_seconds is not None:
        headers["Retry-After"] = str(result.retry_after_seconds)
    return headers


async def enforce_rate_limit(
    request: Request,
    client_key: Annotated[str, Depends(get_client_key)],
) -> RateLimitResult | None:
    """FastAPI dependency enforcing rate limits.

    When enabled, counts one request for the client. If the client exceeded
    its quota, raises HTTP 429; denied requests do not consume quota.

    Args:
        request: FastAPI request.
        client_key: Client key derived from proxy headers.

    Returns:
        RateLimitResult for allowed requests, or None when limiting is off.

    Raises:
        HTTPException: 429 Too Many Requests when rate limit is exceeded.
    """

    app_settings = get_app_settings(request).app
    if not app_settings.rate_limit_enabled:
        return None

    limiter = get_rate_limiter(request)
    result = limiter.check(
        client_key,
        limit=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
    )

    log_fields = {
        "client_hash": hash_identifier(client_key),
        "limit": result.limit,
        "remaining": result.remaining,
        "window_s": app_settings.rate_limit_window_seconds,
    }

    if result.allowed:
        logger.info("rate_limit.allowed", extra=log_fields)
        return result

    logger.warning(
        "rate_limit.exceeded",
        extra={**log_fields, "retry_after_s": result.retry_after_seconds},
    )

    headers = build_rate_limit_headers(result) if app_settings.rate_limit_include_headers else None
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Try again later.",
        headers=headers,
    )
