from abc import ABC, abstractmethod
from typing import Any


class AbstractLLMClient(ABC):
    """Interface for LLM clients that produce free-form text."""

    @abstractmethod
    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Generate text for a single prompt.

        Args:
            prompt: Full instruction prompt sent as the user message.
            **kwargs: Provider-specific options (e.g., temperature, max_tokens).

        Returns:
            str: Model output with surrounding whitespace stripped. May be
                empty; callers decide how to treat empty output.

        Raises:
            LLMAppError: If the provider call fails.
        """
        ...
