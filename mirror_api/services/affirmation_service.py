"""Affirmation service orchestrating opener rotation, prompting and the LLM call.

This service turns a clamped request into a generated affirmation. It handles:
- Name inclusion policy (forced or probabilistic)
- Non-repeating opener selection per client and day mode
- Prompt assembly
- LLM invocation and empty-output detection
- Response metadata (remaining quota, creation timestamp)
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Callable

from mirror_api.adapters.llm.base import AbstractLLMClient
from mirror_api.adapters.opener_history.base import AbstractOpenerRotator
from mirror_api.core.errors import LLMAppError
from mirror_api.core.logging import hash_identifier
from mirror_api.schemas.affirmation import (
    AffirmationMeta,
    AffirmationRequest,
    AffirmationResponse,
)
from mirror_api.services.opener_bank import openers_for
from mirror_api.services.prompt_builder import PromptOptions, build_prompt, mode_to_intent
from mirror_api.services.prompt_rules import PROMPT_VERSION

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_created_at(moment: datetime) -> str:
    """Format a timestamp as UTC ISO-8601 with milliseconds and a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AffirmationService:
    """Service generating affirmations for a single client request.

    Attributes:
        llm: LLM client adapter for generating text.
        opener_rotator: Rotator providing non-repeating openers.
    """

    def __init__(
        self,
        llm: AbstractLLMClient,
        opener_rotator: AbstractOpenerRotator,
        *,
        opener_strategy: str = "theme",
        opener_history_cap: int = 20,
        name_inclusion_probability: float = 0.35,
        rng: random.Random | None = None,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the service with its collaborators.

        Args:
            llm: Configured LLM client instance.
            opener_rotator: Opener rotator shared across requests.
            opener_strategy: theme, first_sentence or off.
            opener_history_cap: Recent openers remembered per client and mode.
            name_inclusion_probability: Chance of using the name when not forced.
            rng: Random source for the name policy.
            now: Clock returning an aware datetime, used for metadata.
        """
        self.llm = llm
        self.opener_rotator = opener_rotator
        self._opener_strategy = opener_strategy
        self._opener_history_cap = opener_history_cap
        self._name_probability = name_inclusion_probability
        self._rng = rng or random.Random()
        self._now = now

    def _should_include_name(self, request: AffirmationRequest) -> bool:
        if request.must_include_name:
            return True
        return self._rng.random() < self._name_probability

    def _pick_opener(self, request: AffirmationRequest, client: str) -> str | None:
        if self._opener_strategy == "off":
            return None
        bank = openers_for(request.mode, request.language)
        if not bank:
            return None
        return self.opener_rotator.pick_non_repeating(
            request.mode,
            client,
            bank,
            self._opener_history_cap,
        )

    def prepare_prompt(self, request: AffirmationRequest, *, client: str) -> str:
        """Resolve per-request randomness and build the prompt.

        Consumes one opener from the client's rotation.

        Args:
            request: Clamped affirmation request.
            client: Client identifier used to partition opener history.

        Returns:
            Prompt text ready for the LLM.
        """
        options = PromptOptions(
            sentences=request.sentences,
            tone=request.tone,
            mode=request.mode,
            language=request.language,
            name=request.name,
            include_name=self._should_include_name(request),
            opener=self._pick_opener(request, client),
            opener_strategy=self._opener_strategy,
        )

        logger.info(
            "affirmation.prompt_built",
            extra={
                "prompt_version": PROMPT_VERSION,
                "mode": options.mode,
                "intent": mode_to_intent(options.mode),
                "language": options.language,
                "tone": options.tone,
                "tier": request.tier,
                "sentences": options.sentences,
                "include_name": options.include_name,
                "opener_strategy": options.opener_strategy,
                "client_hash": hash_identifier(client),
            },
        )
        return build_prompt(options)

    async def generate(
        self,
        request: AffirmationRequest,
        *,
        client: str,
        remaining: int | None = None,
    ) -> AffirmationResponse:
        """Generate one affirmation.

        Args:
            request: Clamped affirmation request.
            client: Client identifier (IP or "unknown").
            remaining: Requests left in the client's rate limit window.

        Returns:
            AffirmationResponse with text and metadata.

        Raises:
            LLMAppError: If the provider call fails or returns empty text.
        """
        prompt = self.prepare_prompt(request, client=client)

        text = (await self.llm.generate_text(prompt)).strip()
        if not text:
            raise LLMAppError(
                code="empty_model_response",
                message="Empty response from model",
            )

        logger.info(
            "affirmation.generated",
            extra={"char_count": len(text), "remaining": remaining},
        )

        return AffirmationResponse(
            text=text,
            meta=AffirmationMeta(
                remaining=remaining,
                created_at_iso=format_created_at(self._now()),
            ),
        )
