"""Request-scoped accessors for objects owned by the application factory."""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import Depends, Request

from mirror_api.adapters.llm.base import AbstractLLMClient
from mirror_api.adapters.llm.factory import create_llm_client
from mirror_api.core.config import Settings
from mirror_api.core.errors import ValidationAppError
from mirror_api.core.rate_limit import get_app_settings
from mirror_api.schemas.affirmation import AffirmationRequest
from mirror_api.services.affirmation_service import AffirmationService

logger = logging.getLogger(__name__)


def get_llm_client(
    request: Request,
    app_settings: Annotated[Settings, Depends(get_app_settings)],
) -> AbstractLLMClient:
    """Return the shared LLM client, creating it on first use.

    Creation is deferred so the API boots without a provider key and reports
    the misconfiguration per request instead.

    Raises:
        ConfigurationAppError: If the provider is unknown or has no API key.
    """
    client = getattr(request.app.state, "llm_client", None)
    if client is None:
        client = create_llm_client(app_settings.llm)
        request.app.state.llm_client = client
    return client


def get_affirmation_service(
    request: Request,
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    llm: Annotated[AbstractLLMClient, Depends(get_llm_client)],
) -> AffirmationService:
    """Build the affirmation service around the application's shared state."""
    return AffirmationService(
        llm=llm,
        opener_rotator=request.app.state.opener_rotator,
        opener_strategy=app_settings.app.opener_strategy,
        opener_history_cap=app_settings.app.opener_history_cap,
        name_inclusion_probability=app_settings.app.name_inclusion_probability,
        rng=request.app.state.rng,
    )


async def get_affirmation_request(request: Request) -> AffirmationRequest:
    """Decode the request body into clamped affirmation options.

    The body is parsed as JSON whatever the Content-Type, since browsers
    posting a plain string send ``text/plain``. An empty body, or JSON that
    is not an object, yields the defaults.

    Raises:
        ValidationAppError: If a non-empty body is not valid JSON.
    """
    raw = await request.body()
    if not raw.strip():
        return AffirmationRequest()

    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.warning(
            "affirmation.invalid_body",
            extra={"content_type": request.headers.get("content-type"), "size": len(raw)},
        )
        raise ValidationAppError(code="invalid_json_body", message="Invalid JSON body") from exc

    return AffirmationRequest.model_validate(data if isinstance(data, dict) else {})
