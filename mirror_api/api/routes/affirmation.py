from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from mirror_api.adapters.rate_limit.base import RateLimitResult
from mirror_api.api.dependencies import get_affirmation_request, get_affirmation_service
from mirror_api.core.client_identity import get_client_key
from mirror_api.core.rate_limit import (
    build_rate_limit_headers,
    enforce_rate_limit,
    get_app_settings,
)
from mirror_api.core.config import Settings
from mirror_api.schemas.affirmation import AffirmationRequest, AffirmationResponse
from mirror_api.services.affirmation_service import AffirmationService

router = APIRouter(tags=["Affirmation"])


@router.post(
    "/affirmation",
    response_model=AffirmationResponse,
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": AffirmationRequest.model_json_schema()}},
        }
    },
)
async def create_affirmation(
    response: Response,
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    service: Annotated[AffirmationService, Depends(get_affirmation_service)],
    rate_limit: Annotated[RateLimitResult | None, Depends(enforce_rate_limit)],
    client_key: Annotated[str, Depends(get_client_key)],
    payload: Annotated[AffirmationRequest, Depends(get_affirmation_request)],
) -> AffirmationResponse:
    """Generate one affirmation.

    All body fields are optional and clamped to valid values. Dependencies
    run in declaration order: a missing provider key fails with 500 before
    the request counts against the client's quota, and the body is decoded
    only after the request was counted.

    Returns:
        AffirmationResponse: ``{"text", "meta": {"source", "remaining", "createdAtISO"}}``.

    Raises:
        HTTPException: 429 when the client exceeded its quota.
        ValidationAppError: 400 when the body is not valid JSON.
        ConfigurationAppError: 500 when the provider is not configured.
        LLMAppError: 502 when the provider fails or returns empty text.
    """
    if rate_limit is not None and app_settings.app.rate_limit_include_headers:
        response.headers.update(build_rate_limit_headers(rate_limit))

    return await service.generate(
        payload,
        client=client_key,
        remaining=rate_limit.remaining if rate_limit is not None else None,
    )


@router.options("/affirmation", include_in_schema=False)
async def affirmation_options() -> Response:
    """Answer bare OPTIONS probes; CORS preflights are handled by middleware."""
    return Response(status_code=200)
