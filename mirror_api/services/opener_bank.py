"""Opener banks per day mode.

Openers are rotated per client so consecutive affirmations start from a
different theme. Evening is the most used mode and has the widest bank.

The banks are English only. Openers containing a phrase the prompt bans are
never served, so the opener cannot contradict the banned-phrase rule.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Mapping

from mirror_api.services.prompt_rules import BANNED_PHRASES

OPENER_BANK: Mapping[str, tuple[str, ...]] = {
    "morning": (
        "As the day begins, choose a single clear priority.",
        "This morning, keep your pace calm and deliberate.",
        "Before you start, take one steady breath and set direction.",
        "Open the day with one small, clean win.",
        "Begin with clarity, not urgency.",
    ),
    "afternoon": (
        "Midday is a chance to tighten focus and simplify.",
        "Return to the one task that moves things forward.",
        "Keep your attention clean and your next step obvious.",
        "Let the middle of the day be steady, not rushed.",
        "Choose progress over perfection and move once.",
    ),
    "evening": (
        "Tonight, you can set things down without losing momentum.",
        "Let the day end cleanly, even if everything isn’t finished.",
        "Choose a quiet ending, then step away on purpose.",
        "Close one open loop, and let the rest wait with dignity.",
        "Release the need to solve everything before rest.",
        "Give your mind a clear stopping point.",
        "Make peace with what was enough today.",
        "Let completion be gentle, not perfect.",
        "Put a soft boundary around work and let it end there.",
        "Allow your attention to loosen its grip.",
        "Return to simplicity and let the noise fade.",
        "Let your shoulders drop and your jaw unclench.",
        "Offer yourself a calm finish line.",
        "End the day with one small act of closure.",
        "Let the unfinished remain unfinished for now.",
        "Tonight, choose ease over extra effort.",
        "Mark the day as complete in your own way.",
        "Let the pace slow without guilt.",
        "Step out of problem-solving mode.",
        "Allow rest to be the next decision.",
        "Give your body permission to soften.",
        "Let your thoughts come to a natural pause.",
        "Choose a quiet reset for tomorrow.",
        "Let the day close with clarity, not pressure.",
        "Leave space for sleep by clearing one small thing.",
        "Set down the mental checklist for now.",
        "Allow the mind to settle into a simpler focus.",
        "Finish with gratitude for effort, not outcomes.",
        "Let what happened be what happened, and release the rest.",
        "Turn down the internal volume and come back to the room.",
        "Let the last hour be lighter than the day.",
        "Choose stillness as a form of strength.",
        "Let your next step be to stop.",
        "End the evening with a clean, quiet exhale.",
        "Let your attention return to the present moment.",
        "Tonight, you don’t need to prove anything.",
        "Let yourself be off-duty.",
        "Close the day the way you’d close a door: gently and fully.",
        "Allow the day to conclude without replaying it.",
        "Let your mind unclutter as the night arrives.",
        "Choose a softer focus and let it be enough.",
        "Release urgency; there’s nothing to chase right now.",
        "Let rest be intentional, not accidental.",
        "Let your body know it’s safe to slow down.",
        "Make room for sleep by letting go of one worry.",
        "Let the day end without negotiation.",
        "Set your intention for rest, then follow it.",
        "Let your breathing guide you toward a quieter pace.",
        "Choose a calm landing after a full day.",
        "Let the day finish in one piece, even if it wasn’t perfect.",
    ),
    "bedtime": (
        "Let the day come to an end on purpose.",
        "Close the day with a clear stopping point.",
        "Let what is unfinished wait until tomorrow.",
        "End the day without adding anything more to it.",
        "Allow the day to be complete as it is.",
        "Mark the end of today and set it down.",
        "Choose a point to stop, and let it be enough.",
        "Let the night begin and the day conclude.",
        "Bring the day to a quiet close.",
        "Let the last thing you do be to stop.",
    ),
}


BANK_LANGUAGE = "en"


def contains_banned_phrase(text: str, language: str = BANK_LANGUAGE) -> bool:
    """Return True if text contains any banned phrase for language (case-insensitive)."""
    lowered = text.casefold()
    return any(phrase.casefold() in lowered for phrase in BANNED_PHRASES.get(language, ()))


@lru_cache(maxsize=32)
def openers_for(mode: str, language: str = BANK_LANGUAGE) -> tuple[str, ...]:
    """Return the servable openers for a day mode and language.

    Unknown modes use the morning bank. Languages without a bank get an
    empty tuple, meaning no opener is used.
    """
    if language != BANK_LANGUAGE:
        return ()
    bank = OPENER_BANK.get(mode, OPENER_BANK["morning"])
    return tuple(opener for opener in bank if not contains_banned_phrase(opener, language))
