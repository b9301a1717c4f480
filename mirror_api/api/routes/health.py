from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Liveness check with in-memory state sizes.

    The tracked key counts make unbounded growth of the per-client maps
    visible to monitoring, since stale keys are only dropped lazily.

    Returns:
        dict: ``status`` plus the number of keys held by each in-memory store.
    """

    state = request.app.state
    return {
        "status": "ok",
        "rate_limit_keys": state.rate_limiter.stats()["entries"],
        "opener_history_keys": state.opener_rotator.stats()["entries"],
    }
