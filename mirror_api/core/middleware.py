"""HTTP middleware for request correlation and access logging.

Every response carries the request id (echoed from the client header or
generated) and the handling duration. One ``http.request`` line is logged
per request with method, path, status and duration.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from mirror_api.core.config import settings
from mirror_api.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


def _request_id_header(request: Request) -> str:
    app_settings = getattr(request.app.state, "settings", None) or settings
    return app_settings.log.request_id_header


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a request id for the lifetime of the request and log the outcome.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response with ``X-Request-ID`` (or the configured header) and
        ``X-Request-Duration-ms`` headers added.
    """

    header_name = _request_id_header(request)
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    status_code = 500
    try:
        response: Response = await call_next(request)
        status_code = response.status_code
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http.request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response
