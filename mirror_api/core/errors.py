"""Domain errors raised by the affirmation service and its adapters.

Each subclass maps to one HTTP status in ``exception_handlers``; the
``code`` is stable and safe to expose to clients.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


class ErrorDetails(TypedDict, total=False):
    """Optional context attached to an error response."""

    hint: str
    provider: str
    model: str


@dataclass
class AppError(Exception):
    """Base error for application failures.

    Attributes:
        code: Machine-readable error code (e.g. ``invalid_json_body``).
        message: Human-readable message returned to the client.
        details: Optional extra context.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when the request body cannot be decoded (400)."""


class ConfigurationAppError(AppError):
    """Raised when the server is missing required configuration (500)."""


class LLMAppError(AppError):
    """Raised when the upstream text generation call fails (502)."""
