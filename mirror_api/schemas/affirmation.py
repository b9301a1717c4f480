"""Pydantic schemas for the affirmation endpoint.

Request fields are lenient: an unknown or malformed value falls back to its
default instead of failing validation, so mobile clients on older builds keep
working when options change.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DayMode = Literal["morning", "afternoon", "evening", "bedtime"]
Tone = Literal["luxury-calm", "direct-calm"]
Language = Literal["en", "es"]
Tier = Literal["free", "premium"]
SentenceCount = Literal[2, 3]

DAY_MODES: tuple[str, ...] = ("morning", "afternoon", "evening", "bedtime")

DEFAULT_NAME = "Friend"
MAX_NAME_CHARS = 40


class AffirmationRequest(BaseModel):
    """Options for a single generated affirmation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(
        default=DEFAULT_NAME,
        description="Name the affirmation may address (trimmed, max 40 chars).",
    )
    sentences: SentenceCount = Field(
        default=3,
        description="Exact number of sentences to generate (2 or 3).",
    )
    tone: Tone = Field(default="luxury-calm", description="Voice of the statement.")
    mode: DayMode = Field(
        default="morning",
        description="Period of the day; selects intent and opener bank.",
    )
    language: Language = Field(default="en", description="Output language.")
    tier: Tier = Field(default="free", description="Client subscription tier.")
    must_include_name: bool = Field(
        default=False,
        alias="mustIncludeName",
        description="Always address the user by name when true.",
    )

    @field_validator("name", mode="before")
    @classmethod
    def _clamp_name(cls, value: Any) -> str:
        name = value.strip() if isinstance(value, str) else ""
        return (name or DEFAULT_NAME)[:MAX_NAME_CHARS]

    @field_validator("sentences", mode="before")
    @classmethod
    def _clamp_sentences(cls, value: Any) -> int:
        # bool is an int subclass; only the JSON number 2 selects two sentences
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 2:
            return 2
        return 3

    @field_validator("tone", mode="before")
    @classmethod
    def _clamp_tone(cls, value: Any) -> str:
        return "direct-calm" if value == "direct-calm" else "luxury-calm"

    @field_validator("mode", mode="before")
    @classmethod
    def _clamp_mode(cls, value: Any) -> str:
        return value if isinstance(value, str) and value in DAY_MODES else "morning"

    @field_validator("language", mode="before")
    @classmethod
    def _clamp_language(cls, value: Any) -> str:
        return "es" if value == "es" else "en"

    @field_validator("tier", mode="before")
    @classmethod
    def _clamp_tier(cls, value: Any) -> str:
        return "premium" if value == "premium" else "free"

    @field_validator("must_include_name", mode="before")
    @classmethod
    def _strict_true(cls, value: Any) -> bool:
        return value is True


class AffirmationMeta(BaseModel):
    """Response metadata."""

    model_config = ConfigDict(populate_by_name=True)

    source: Literal["remote"] = Field(
        default="remote",
        description="Where the text came from; always generated remotely.",
    )
    remaining: int | None = Field(
        default=None,
        description="Requests left in the current rate limit window (null when limiting is off).",
    )
    created_at_iso: str = Field(
        ...,
        alias="createdAtISO",
        description="UTC creation timestamp in ISO-8601 with milliseconds.",
    )


class AffirmationResponse(BaseModel):
    """Generated affirmation with metadata."""

    text: str = Field(..., description="Generated affirmation text.")
    meta: AffirmationMeta
