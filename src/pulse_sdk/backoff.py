"""Retry and feature-flag polling strategies."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class RetryPolicy(Protocol):
    """Maps how many times a send was retried to the wait before the next try."""

    def duration(self, attempt: int) -> timedelta:
        ...


@runtime_checkable
class PollingSchedule(Protocol):
    """Decides how long to wait before the next feature-flag refresh."""

    def next_tick(self) -> timedelta:
        ...


@dataclass(frozen=True)
class ExponentialBackoff:
    """``base * factor ** attempt``, optionally jittered, never above ``cap``.

    ``jitter`` is a fraction of the computed wait; the wait is moved up or
    down by a random amount up to that fraction. The default instance grows
    from 100ms and doubles until it reaches 10s.
    """

    base: timedelta = timedelta(milliseconds=100)
    factor: float = 2.0
    jitter: float = 0.0
    cap: timedelta = timedelta(seconds=10)
    rng: Optional[random.Random] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.jitter <= 1:
            raise ValueError(f"jitter must be between 0 and 1, got {self.jitter}")

    def duration(self, attempt: int) -> timedelta:
        if attempt < 0:
            raise ValueError(f"attempt must be >= 0, got {attempt}")
        cap_seconds = self.cap.total_seconds()
        try:
            seconds = self.base.total_seconds() * (self.factor ** attempt)
        except OverflowError:
            return self.cap
        if self.jitter > 0:
            rng = self.rng or random
            deviation = rng.random() * self.jitter * seconds
            seconds = seconds - deviation if rng.random() < 0.5 else seconds + deviation
        return timedelta(seconds=min(seconds, cap_seconds))


@dataclass(frozen=True)
class FunctionRetryPolicy:
    func: Callable[[int], timedelta]

    def duration(self, attempt: int) -> timedelta:
        return self.func(attempt)


@dataclass(frozen=True)
class FixedPollingSchedule:
    interval: timedelta

    def next_tick(self) -> timedelta:
        return self.interval


@dataclass(frozen=True)
class FunctionPollingSchedule:
    func: Callable[[], timedelta]

    def next_tick(self) -> timedelta:
        return self.func()


def as_retry_policy(value) -> RetryPolicy:
    """Wrap a bare ``(attempt) -> timedelta`` function; pass policies through."""
    if isinstance(value, RetryPolicy):
        return value
    if callable(value):
        return FunctionRetryPolicy(value)
    raise TypeError(f"retry_after must be a RetryPolicy or callable, got {type(value).__name__}")


def as_polling_schedule(value) -> PollingSchedule:
    if isinstance(value, PollingSchedule):
        return value
    if callable(value):
        return FunctionPollingSchedule(value)
    raise TypeError(f"next_polling_tick must be a PollingSchedule or callable, got {type(value).__name__}")


__all__ = [
    "RetryPolicy",
    "PollingSchedule",
    "ExponentialBackoff",
    "FunctionRetryPolicy",
    "FixedPollingSchedule",
    "FunctionPollingSchedule",
    "as_retry_policy",
    "as_polling_schedule",
]
