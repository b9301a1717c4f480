"""Unit tests for the shared KeyedStateMap."""

import threading

import pytest

from mirror_api.utils.keyed_state import KeyedStateMap


def test_get_returns_none_for_unknown_key() -> None:
    states: KeyedStateMap[int] = KeyedStateMap()

    assert states.get("missing") is None
    assert len(states) == 0


def test_put_then_get_returns_same_object() -> None:
    states: KeyedStateMap[dict] = KeyedStateMap()
    state = {"count": 1}

    states.put("k", state)
    state["count"] += 1

    assert states.get("k") == {"count": 2}


def test_lru_bound_evicts_least_recently_used() -> None:
    states: KeyedStateMap[int] = KeyedStateMap(max_keys=2)
    states.put("a", 1)
    states.put("b", 2)

    # Access "a" so that "b" becomes least recently used
    assert states.get("a") == 1

    states.put("c", 3)

    assert states.get("a") == 1
    assert states.get("c") == 3
    assert states.get("b") is None
    assert states.stats()["evictions"] == 1


def test_unbounded_by_default() -> None:
    states: KeyedStateMap[int] = KeyedStateMap()
    for i in range(500):
        states.put(f"k-{i}", i)

    assert states.stats() == {"max_keys": None, "entries": 500, "evictions": 0}


def test_purge_uses_predicate() -> None:
    states: KeyedStateMap[int] = KeyedStateMap()
    for i in range(6):
        states.put(f"k-{i}", i)

    removed = states.purge(lambda value: value % 2 == 0)

    assert removed == 3
    assert states.get("k-1") == 1
    assert states.get("k-2") is None


def test_clear_resets_state() -> None:
    states: KeyedStateMap[int] = KeyedStateMap(max_keys=1)
    states.put("a", 1)
    states.put("b", 2)

    states.clear()

    assert states.stats() == {"max_keys": 1, "entries": 0, "evictions": 0}


def test_invalid_max_keys() -> None:
    with pytest.raises(ValueError):
        KeyedStateMap(max_keys=0)


def test_lock_makes_read_modify_write_atomic() -> None:
    states: KeyedStateMap[list[int]] = KeyedStateMap()
    states.put("counter", [0])

    def _increment() -> None:
        for _ in range(1000):
            with states.lock:
                current = states.get("counter")
                current[0] += 1
                states.put("counter", current)

    threads = [threading.Thread(target=_increment) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert states.get("counter") == [8000]
