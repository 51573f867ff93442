from __future__ import annotations

import random
from datetime import timedelta

import pytest

from pulse_sdk.backoff import (
    ExponentialBackoff,
    FixedPollingSchedule,
    FunctionRetryPolicy,
    PollingSchedule,
    RetryPolicy,
    as_polling_schedule,
    as_retry_policy,
)


def test_default_backoff_doubles_from_100ms() -> None:
    backoff = ExponentialBackoff()

    assert backoff.duration(0) == timedelta(milliseconds=100)
    assert backoff.duration(1) == timedelta(milliseconds=200)
    assert backoff.duration(3) == timedelta(milliseconds=800)


def test_default_backoff_is_capped() -> None:
    backoff = ExponentialBackoff()

    assert backoff.duration(7) == timedelta(seconds=10)
    assert backoff.duration(10_000) == timedelta(seconds=10)


def test_backoff_is_non_decreasing() -> None:
    backoff = ExponentialBackoff()
    waits = [backoff.duration(n) for n in range(20)]

    assert waits == sorted(waits)


def test_backoff_rejects_negative_attempts() -> None:
    with pytest.raises(ValueError):
        ExponentialBackoff().duration(-1)


def test_jitter_stays_within_bounds() -> None:
    backoff = ExponentialBackoff(jitter=0.5, rng=random.Random(7))

    for _ in range(50):
        wait = backoff.duration(2)
        assert timedelta(milliseconds=200) <= wait <= timedelta(milliseconds=600)


def test_strategies_satisfy_protocols() -> None:
    assert isinstance(ExponentialBackoff(), RetryPolicy)
    assert isinstance(FixedPollingSchedule(timedelta(seconds=1)), PollingSchedule)


def test_adapters_wrap_functions_and_pass_strategies_through() -> None:
    backoff = ExponentialBackoff()
    schedule = FixedPollingSchedule(timedelta(seconds=1))

    assert as_retry_policy(backoff) is backoff
    assert as_polling_schedule(schedule) is schedule
    assert isinstance(as_retry_policy(lambda attempt: timedelta(0)), FunctionRetryPolicy)
    assert as_polling_schedule(lambda: timedelta(seconds=3)).next_tick() == timedelta(seconds=3)


def test_adapters_reject_non_callables() -> None:
    with pytest.raises(TypeError):
        as_polling_schedule("soon")


@pytest.mark.parametrize("jitter", [-0.1, 1.5])
def test_jitter_outside_unit_range_is_rejected(jitter: float) -> None:
    with pytest.raises(ValueError):
        ExponentialBackoff(jitter=jitter)


def test_full_jitter_never_goes_negative() -> None:
    backoff = ExponentialBackoff(jitter=1.0, rng=random.Random(3))

    for attempt in range(10):
        assert backoff.duration(attempt) >= timedelta(0)
