"""Factory pattern for creating LLM client instances."""

from mirror_api.adapters.llm.base import AbstractLLMClient
from mirror_api.adapters.llm.openai_client import OpenAIClient
from mirror_api.core.config import LLMSettings, settings
from mirror_api.core.errors import ConfigurationAppError


def create_llm_client(llm_settings: LLMSettings | None = None) -> AbstractLLMClient:
    """Instantiate the LLM client for the configured provider.

    Args:
        llm_settings: Provider settings; defaults to the global settings.

    Returns:
        AbstractLLMClient: Configured LLM client instance.

    Raises:
        ConfigurationAppError: If the provider is unknown or its API key is missing.
    """
    cfg = llm_settings or settings.llm
    provider = cfg.provider.lower()

    if provider == "openai":
        if not cfg.api_key:
            raise ConfigurationAppError(
                code="llm_missing_api_key",
                message="Server missing OPENAI_API_KEY",
                details={"hint": "Set OPENAI_API_KEY or LLM_API_KEY", "provider": provider},
            )
        return OpenAIClient(
            api_key=cfg.api_key,
            model=cfg.model,
            base_url=cfg.base_url,
            timeout_seconds=cfg.timeout_seconds,
            temperature=cfg.temperature,
        )

    raise ConfigurationAppError(
        code="llm_unknown_provider",
        message=f"Unknown LLM provider: '{provider}'. Supported providers: openai",
        details={"provider": provider},
    )
