"""LLM adapter layer - hides the text generation provider behind one interface."""

from mirror_api.adapters.llm.base import AbstractLLMClient
from mirror_api.adapters.llm.factory import create_llm_client
from mirror_api.adapters.llm.openai_client import OpenAIClient

__all__ = [
    "AbstractLLMClient",
    "OpenAIClient",
    "create_llm_client",
]
