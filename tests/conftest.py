"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any application import so the global
settings object is built for the testing environment and never sees a real
provider key.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("LLM_API_KEY", None)
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import Callable, Iterable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from mirror_api.adapters.llm.base import AbstractLLMClient
from mirror_api.core.app_factory import create_app
from mirror_api.core.config import AppSettings, LLMSettings, Settings


class ScriptedRandom:
    """Deterministic stand-in for random.Random.

    ``randrange`` returns queued indices and ``random`` returns queued floats;
    an exhausted queue repeats its last value.
    """

    def __init__(self, indices: Iterable[int] = (0,), floats: Iterable[float] = (0.99,)) -> None:
        self._indices = list(indices)
        self._floats = list(floats)
        self.randrange_calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.randrange_calls.append(stop)
        value = self._indices.pop(0) if len(self._indices) > 1 else self._indices[0]
        return value % stop

    def random(self) -> float:
        return self._floats.pop(0) if len(self._floats) > 1 else self._floats[0]


class FakeLLMClient(AbstractLLMClient):
    """LLM double recording prompts and replaying a canned answer."""

    def __init__(self, text: str = "You stand on steady ground.", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Build Settings with AppSettings overrides (e.g., rate_limit_requests=3)."""

    def _make(llm: LLMSettings | None = None, **app_overrides: Any) -> Settings:
        return Settings(
            llm=llm or LLMSettings(),
            app=AppSettings(**app_overrides),
        )

    return _make


@pytest.fixture
def make_client(make_settings, fake_llm) -> Callable[..., TestClient]:
    """Create a TestClient around a fresh app (fresh limiter and opener state)."""

    def _make(
        *,
        llm_client: AbstractLLMClient | None = fake_llm,
        rng: Any = None,
        **app_overrides: Any,
    ) -> TestClient:
        app = create_app(
            make_settings(**app_overrides),
            llm_client=llm_client,
            rng=rng,
        )
        return TestClient(app, raise_server_exceptions=False)

    return _make
