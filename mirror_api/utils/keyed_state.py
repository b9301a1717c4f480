"""In-memory, per-key state map shared by the rate limiter and opener rotator.

Designed for the MVP: process-local, thread-safe, and easy to swap for Redis
while keeping the adapter interfaces unchanged. Entries are never swept in the
background; callers expire them lazily on access or via ``purge``.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")


class KeyedStateMap(Generic[StateT]):
    """Thread-safe map of per-key state with an optional LRU bound.

    The map does not interpret the stored state. Expiry is decided by the
    owning adapter, which holds ``lock`` across its read-modify-write sequence.

    Attributes:
        max_keys: Maximum number of keys kept (None for unbounded).
    """

    def __init__(self, max_keys: int | None = None) -> None:
        if max_keys is not None and max_keys < 1:
            raise ValueError("max_keys must be >= 1 or None")

        self._max_keys = max_keys
        self._store: OrderedDict[str, StateT] = OrderedDict()
        self._lock = threading.RLock()
        self._evictions = 0

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"KeyedStateMap(max_keys={self._max_keys}, size={len(self._store)}, "
            f"evictions={self._evictions})"
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding the map; re-entrant so adapters can nest calls."""
        return self._lock

    def get(self, key: str) -> StateT | None:
        """Return the state stored for key, marking it as recently used.

        Args:
            key: State key.

        Returns:
            Stored state or None when the key is unknown.
        """

        with self._lock:
            state = self._store.get(key)
            if state is not None:
                self._store.move_to_end(key)
            return state

    def put(self, key: str, state: StateT) -> None:
        """Store state for key, evicting the least recently used key if full.

        Args:
            key: State key.
            state: State object to store.
        """

        with self._lock:
            self._store[key] = state
            self._store.move_to_end(key)
            self._evict_if_over_capacity_locked()

    def purge(self, is_expired: Callable[[StateT], bool]) -> int:
        """Drop every entry whose state is expired.

        Args:
            is_expired: Predicate deciding whether a state may be dropped.

        Returns:
            Number of removed keys.
        """

        with self._lock:
            expired_keys = [k for k, state in self._store.items() if is_expired(state)]
            for key in expired_keys:
                self._store.pop(key, None)
            self._evictions += len(expired_keys)

        if expired_keys:
            logger.debug("keyed_state.purged", extra={"purged": len(expired_keys)})
        return len(expired_keys)

    def clear(self) -> None:
        """Remove all entries and reset counters."""

        with self._lock:
            self._store.clear()
            self._evictions = 0

    def stats(self) -> dict[str, int | None]:
        """Return lightweight metrics without exposing keys or state."""

        with self._lock:
            return {
                "max_keys": self._max_keys,
                "entries": len(self._store),
                "evictions": self._evictions,
            }

    def _evict_if_over_capacity_locked(self) -> None:
        if self._max_keys is None:
            return

        while len(self._store) > self._max_keys:
            # popitem(last=False) removes the least recently used entry
            self._store.popitem(last=False)
            self._evictions += 1
