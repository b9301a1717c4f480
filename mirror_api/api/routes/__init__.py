from __future__ import annotations

from mirror_api.api.routes.affirmation import router as affirmation_router
from mirror_api.api.routes.health import router as health_router

__all__ = ["affirmation_router", "health_router"]
