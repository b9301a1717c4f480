"""OpenAI LLM client adapter."""

import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from mirror_api.adapters.llm.base import AbstractLLMClient
from mirror_api.core.errors import LLMAppError

logger = logging.getLogger(__name__)


class OpenAIClient(AbstractLLMClient):
    """Client for generating short texts through OpenAI chat completions.

    Uses the official OpenAI Python SDK with async support.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 45.0,
        temperature: float = 1.1,
    ) -> None:
        """Initialize OpenAI async client.

        Args:
            api_key: OpenAI API key for authentication.
            model: Model name (e.g., "gpt-4.1-mini").
            base_url: Optional custom base URL for OpenAI API.
            timeout_seconds: Timeout for requests in seconds.
            temperature: Default sampling temperature.
        """
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self.model = model
        self.temperature = temperature

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Generate text using OpenAI chat completions.

        Args:
            prompt: Instruction prompt sent as the user message.
            **kwargs: Provider options (temperature, max_tokens, top_p, etc.).

        Returns:
            str: Stripped completion text ("" when the model returned nothing).

        Raises:
            LLMAppError: If the API call fails.
        """
        request_params: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": kwargs.pop("temperature", self.temperature),
        }

        # Pass through additional parameters if provided
        allowed_params = {
            "max_tokens",
            "top_p",
            "frequency_penalty",
            "presence_penalty",
            "seed",
        }
        for param in allowed_params:
            if param in kwargs:
                request_params[param] = kwargs[param]

        try:
            response = await self.client.chat.completions.create(**request_params)
        except OpenAIError as exc:
            logger.error(
                "llm.request_failed",
                extra={"model": self.model, "error_type": type(exc).__name__},
            )
            raise LLMAppError(
                code="upstream_ai_error",
                message="Upstream AI error",
                details={"model": self.model, "hint": type(exc).__name__},
            ) from exc

        if not response.choices:
            return ""
        content = response.choices[0].message.content
        return (content or "").strip()
