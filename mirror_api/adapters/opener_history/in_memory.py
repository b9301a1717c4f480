"""In-memory opener rotator with per-key rolling history.

Each ``(client, category)`` pair keeps a most-recent-first list of served
openers. Picks avoid that list for a bounded number of draws; when the bank is
too small to find a fresh item, the last draw is accepted as a repeat.

Per-process only, like the rate limiter: clients spread across instances may
see repeats sooner than the history cap suggests.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Sequence

from mirror_api.adapters.opener_history.base import AbstractOpenerRotator
from mirror_api.utils.keyed_state import KeyedStateMap

logger = logging.getLogger(__name__)

DEFAULT_RETRY_BUDGET = 12
DEFAULT_HISTORY_TTL_SECONDS = 24 * 60 * 60


@dataclass
class _HistoryState:
    reset_at: float
    items: list[str] = field(default_factory=list)


class InMemoryOpenerRotator(AbstractOpenerRotator):
    """Opener rotator keeping recency lists in process memory."""

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        retry_budget: int = DEFAULT_RETRY_BUDGET,
        history_ttl_seconds: float = DEFAULT_HISTORY_TTL_SECONDS,
        max_keys: int | None = None,
    ) -> None:
        """Initialize the rotator.

        Args:
            rng: Uniform random source; only ``randrange`` is used.
            clock: Time source function returning UNIX time in seconds.
            retry_budget: Draws attempted before a repeat is tolerated.
            history_ttl_seconds: Lifetime of a history list before it is cleared.
            max_keys: Optional bound on tracked keys (LRU eviction).

        Raises:
            ValueError: If retry_budget or history_ttl_seconds are invalid.
        """
        if retry_budget < 1:
            raise ValueError("retry_budget must be >= 1")
        if history_ttl_seconds <= 0:
            raise ValueError("history_ttl_seconds must be > 0")

        self._rng = rng or random.Random()
        self._clock = clock
        self._retry_budget = retry_budget
        self._history_ttl = history_ttl_seconds
        self._states: KeyedStateMap[_HistoryState] = KeyedStateMap(max_keys=max_keys)

    @staticmethod
    def _build_key(category: str, client: str) -> str:
        return f"{client}:{category}"

    def _get_or_reset_state(self, key: str, now: float) -> _HistoryState:
        state = self._states.get(key)
        if state is None or now > state.reset_at:
            state = _HistoryState(reset_at=now + self._history_ttl)
            self._states.put(key, state)
        return state

    def _draw(self, bank: Sequence[str]) -> str:
        return bank[self._rng.randrange(len(bank))]

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
            client: Client identifier.
            bank: Non-empty sequence of candidate openers.
            history_cap: Maximum number of recent picks remembered.

        Returns:
            The chosen opener.

        Raises:
            ValueError: If bank is empty or history_cap is negative.
        """
        if not bank:
            raise ValueError("bank must contain at least one opener")
        if history_cap < 0:
            raise ValueError("history_cap must be >= 0")

        key = self._build_key(category, client)
        now = self._clock()

        with self._states.lock:
            state = self._get_or_reset_state(key, now)

            candidate = self._draw(bank)
            attempts = 1
            while candidate in state.items and attempts < self._retry_budget:
                candidate = self._draw(bank)
                attempts += 1

            repeated = candidate in state.items
            state.items.insert(0, candidate)
            del state.items[history_cap:]
            self._states.put(key, state)
            history_size = len(state.items)

        logger.debug(
            "opener.picked",
            extra={
                "category": category,
                "attempts": attempts,
                "repeated": repeated,
                "history_size": history_size,
            },
        )
        return candidate

    def history(self, category: str, client: str) -> tuple[str, ...]:
        """Return the current recency list for a key, most recent first.

        Expired histories are reported as empty without being reset.
        """
        now = self._clock()
        with self._states.lock:
            state = self._states.get(self._build_key(category, client))
            if state is None or now > state.reset_at:
                return ()
            return tuple(state.items)

    def purge_expired(self) -> int:
        """Drop keys whose history window has elapsed.

        Called periodically by the application lifespan (see
        ``sweep_expired_state``); expired keys are otherwise only replaced lazily.

        Returns:
            Number of removed keys.
        """
        now = self._clock()
        return self._states.purge(lambda state: now > state.reset_at)

    def stats(self) -> dict[str, int | None]:
        """Return tracked-key metrics for diagnostics."""
        return self._states.stats()
