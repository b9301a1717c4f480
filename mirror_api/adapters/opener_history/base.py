"""Opener rotator interfaces.

Routes and services depend on this abstraction so the recency history can
move to a shared store later without touching the prompt pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class AbstractOpenerRotator(ABC):
    """Interface for picking openers that avoid recent repeats."""

    @abstractmethod
    def pick_non_repeating(
        self,
        category: str,
        client: str,
        bank: Sequence[str],
        history_cap: int = 20,
    ) -> str:
        """Pick an opener from bank avoiding the client's recent picks.

        Args:
            category: Category label (e.g., day mode) partitioning history.
            client: Client identifier (e.g., client IP or "unknown").
            bank: Non-empty sequence of candidate openers.
            history_cap: Maximum number of recent picks remembered.

        Returns:
            The chosen opener, always a member of bank.
        """
        raise NotImplementedError
