"""Application factory for the affirmation API.

``create_app`` is the composition root: it builds the per-process state (rate
limiter, opener rotator, random source) once and hangs it on ``app.state``,
so every request in this process shares it and tests get a fresh copy per
app instance.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mirror_api.adapters.llm.base import AbstractLLMClient
from mirror_api.adapters.opener_history.in_memory import InMemoryOpenerRotator
from mirror_api.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from mirror_api.api.routes import affirmation_router, health_router
from mirror_api.core.config import Settings, settings as default_settings
from mirror_api.core.exception_handlers import setup_exception_handlers
from mirror_api.core.logging import configure_logging
from mirror_api.core.middleware import request_id_middleware

logger = logging.getLogger(__name__)


def sweep_expired_state(app: FastAPI) -> dict[str, int]:
    """Drop expired rate limit windows and opener histories.

    Returns:
        Number of removed keys per store.
    """
    removed = {
        "rate_limit_keys": app.state.rate_limiter.purge_expired(),
        "opener_history_keys": app.state.opener_rotator.purge_expired(),
    }
    logger.info("state.swept", extra=removed)
    return removed


async def _sweep_periodically(app: FastAPI, interval_seconds: int) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            sweep_expired_state(app)
        except Exception:
            logger.exception("state.sweep_failed")


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    interval = app.state.settings.app.state_sweep_interval_seconds
    task = asyncio.create_task(_sweep_periodically(app, interval)) if interval else None
    try:
        yield
    finally:
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


def _parse_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


def create_app(
    app_settings: Settings | None = None,
    *,
    llm_client: AbstractLLMClient | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        app_settings: Settings to build with; defaults to the global settings.
        llm_client: Pre-built LLM client; created lazily from settings when None.
        rng: Random source shared by the opener rotator and name policy.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and state.
    """
    cfg = app_settings or default_settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    app = FastAPI(
        title="Mirror, Mirror Affirmation API",
        description=(
            "Generates short identity-reflection affirmations for a day period, "
            "tone and language. Openers rotate per client to avoid repeats and "
            "requests are rate limited per client (best-effort, per instance)."
        ),
        version="0.1.0",
        lifespan=_lifespan,
    )

    shared_rng = rng or random.Random()
    app.state.settings = cfg
    app.state.rng = shared_rng
    app.state.llm_client = llm_client
    app.state.rate_limiter = InMemoryFixedWindowRateLimiter(
        max_keys=cfg.app.rate_limit_max_keys,
    )
    app.state.opener_rotator = InMemoryOpenerRotator(
        rng=shared_rng,
        retry_budget=cfg.app.opener_retry_budget,
        history_ttl_seconds=cfg.app.opener_history_ttl_seconds,
        max_keys=cfg.app.opener_max_keys,
    )

    # Middleware (last added runs first: CORS wraps request id)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(cfg.app.cors_allow_origins),
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["content-type"],
    )

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(affirmation_router, prefix="/api")
    app.include_router(health_router)

    return app
