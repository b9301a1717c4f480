"""Prompt assembly for affirmation generation.

The prompt is a stack of plain-text blocks joined by blank lines: base style
rules, tone, intent, opener guidance, banned phrases, name policy and a
closing instruction. Every block is a pure function of its inputs so the
whole prompt is reproducible from the request and the chosen opener.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from mirror_api.services.prompt_rules import (
    BANNED_LINE_TEXT,
    BANNED_PHRASES,
    BASE_RULES,
    CLOSING_TEXT,
    INTENT_TEXT,
    NAME_RULE_TEXT,
    OPENER_FIRST_SENTENCE_TEXT,
    OPENER_THEME_TEXT,
    TONE_TEXT,
)

Intent = Literal["orient", "act", "close", "rest"]

_MODE_TO_INTENT: dict[str, Intent] = {
    "morning": "orient",  # point direction
    "afternoon": "act",  # do the thing
    "evening": "close",  # wind down, close loops
    "bedtime": "rest",  # step away fully
}


def mode_to_intent(mode: str) -> Intent:
    """Map a day mode to the behavioural intent of the statement.

    Args:
        mode: One of morning, afternoon, evening, bedtime.

    Returns:
        Intent label; unknown modes fall back to "orient".
    """
    return _MODE_TO_INTENT.get(mode, "orient")


@dataclass(frozen=True)
class PromptOptions:
    """Resolved inputs for one prompt.

    Attributes:
        sentences: Exact sentence count (2 or 3).
        tone: luxury-calm or direct-calm.
        mode: Day mode, mapped to an intent.
        language: en or es.
        name: Clamped user name.
        include_name: Whether the statement addresses the user by name.
        opener: Rotated opener, or None when openers are disabled.
        opener_strategy: theme, first_sentence or off.
    """

    sentences: int
    tone: str
    mode: str
    language: str
    name: str
    include_name: bool
    opener: str | None = None
    opener_strategy: str = "theme"


def format_banned_line(phrases: Iterable[str]) -> str:
    """Render the banned-phrase instruction, dropping duplicate phrases."""
    unique = dict.fromkeys(phrases)
    return BANNED_LINE_TEXT.format(phrases=", ".join(f'"{p}"' for p in unique))


def _base_rules(language: str, sentences: int) -> str:
    return " ".join(rule.format(sentences=sentences) for rule in BASE_RULES[language])


def _opener_rule(options: PromptOptions, language: str) -> str:
    if not options.opener or options.opener_strategy == "off":
        return ""
    if options.opener_strategy == "first_sentence":
        return OPENER_FIRST_SENTENCE_TEXT[language].format(opener=options.opener)
    return OPENER_THEME_TEXT[language].format(opener=options.opener)


def _name_rules(options: PromptOptions) -> list[str]:
    if not options.include_name:
        return [NAME_RULE_TEXT["exclude"]]
    return [
        NAME_RULE_TEXT["include"].format(name=options.name),
        NAME_RULE_TEXT["extra"],
    ]


def build_prompt(options: PromptOptions) -> str:
    """Build the generation prompt for one affirmation.

    Args:
        options: Resolved request options.

    Returns:
        Prompt text; empty blocks are omitted.
    """
    language = options.language if options.language in BASE_RULES else "en"
    intent = mode_to_intent(options.mode)

    blocks = [
        _base_rules(language, options.sentences),
        TONE_TEXT[language].get(options.tone, ""),
        INTENT_TEXT[language][intent],
        _opener_rule(options, language),
        format_banned_line(BANNED_PHRASES[language]),
        *_name_rules(options),
        CLOSING_TEXT[language],
    ]
    return "\n\n".join(block for block in blocks if block)
