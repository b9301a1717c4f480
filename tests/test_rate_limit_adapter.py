"""Unit tests for in-memory rate limiter adapter."""

from unittest.mock import Mock

import pytest

from mirror_api.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

WINDOW = 10 * 60


def test_limit_three_same_instant_sequence() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    results = [limiter.check("k", limit=3, window_seconds=WINDOW) for _ in range(4)]

    assert [(r.allowed, r.remaining) for r in results] == [
        (True, 2),
        (True, 1),
        (True, 0),
        (False, 0),
    ]


def test_remaining_strictly_decreases_then_blocks() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    allowed = [limiter.check("k", limit=5, window_seconds=WINDOW) for _ in range(5)]
    assert [r.remaining for r in allowed] == [4, 3, 2, 1, 0]
    assert all(r.allowed for r in allowed)

    for _ in range(3):
        blocked = limiter.check("k", limit=5, window_seconds=WINDOW)
        assert blocked.allowed is False
        assert blocked.remaining == 0


def test_blocked_result_carries_retry_after() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    limiter.check("k", limit=1, window_seconds=60)
    clock.return_value = 1015.0
    blocked = limiter.check("k", limit=1, window_seconds=60)

    assert blocked.allowed is False
    assert blocked.retry_after_seconds == 45
    assert blocked.reset_at == 1060
    assert blocked.limit == 1


def test_denied_request_does_not_consume_or_extend_window() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    limiter.check("k", limit=1, window_seconds=10)
    clock.return_value = 1005.0
    assert limiter.check("k", limit=1, window_seconds=10).allowed is False

    # Window still closes at 1010, counted from the first request
    clock.return_value = 1010.5
    result = limiter.check("k", limit=1, window_seconds=10)
    assert result.allowed is True
    assert result.remaining == 0


def test_window_is_inclusive_of_reset_instant() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    limiter.check("k", limit=1, window_seconds=10)

    clock.return_value = 1010.0
    assert limiter.check("k", limit=1, window_seconds=10).allowed is False


def test_resets_as_first_call_after_window_elapsed() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    for _ in range(4):
        limiter.check("k", limit=3, window_seconds=WINDOW)

    clock.return_value = 1000.0 + WINDOW + 1
    result = limiter.check("k", limit=3, window_seconds=WINDOW)

    assert result.allowed is True
    assert result.remaining == 2
    assert result.reset_at == 1000 + 2 * WINDOW + 1


def test_isolated_by_key() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    assert limiter.check("k1", limit=1, window_seconds=60).allowed is True
    assert limiter.check("k1", limit=1, window_seconds=60).allowed is False

    other = limiter.check("k2", limit=1, window_seconds=60)
    assert other.allowed is True
    assert other.remaining == 0


def test_purge_expired_drops_only_closed_windows() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock)

    limiter.check("old", limit=5, window_seconds=10)
    clock.return_value = 1008.0
    limiter.check("fresh", limit=5, window_seconds=10)

    clock.return_value = 1011.0
    assert limiter.purge_expired() == 1
    assert limiter.stats()["entries"] == 1


def test_max_keys_evicts_least_recently_used_client() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemoryFixedWindowRateLimiter(clock=clock, max_keys=2)

    limiter.check("a", limit=1, window_seconds=60)
    limiter.check("b", limit=1, window_seconds=60)
    limiter.check("c", limit=1, window_seconds=60)

    # "a" was evicted, so it starts a new window
    assert limiter.check("a", limit=1, window_seconds=60).allowed is True
    assert limiter.stats()["entries"] == 2


@pytest.mark.parametrize(
    "key,limit,window",
    [
        ("", 1, 60),
        ("k", 0, 60),
        ("k", 1, 0),
    ],
)
def test_invalid_check_args(key: str, limit: int, window: int) -> None:
    limiter = InMemoryFixedWindowRateLimiter()

    with pytest.raises(ValueError):
        limiter.check(key, limit=limit, window_seconds=window)
