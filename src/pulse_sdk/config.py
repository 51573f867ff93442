"""Configuration objects for the Pulse Python SDK.

A :class:`ClientConfig` is what callers build; every field may be left unset.
:func:`validate` rejects nonsensical values and :func:`resolve` fills every
unset field with the library default, producing the immutable
:class:`ResolvedConfig` shared by the client's background workers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace as _replace
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

import httpx

from .backoff import (
    ExponentialBackoff,
    PollingSchedule,
    RetryPolicy,
    as_polling_schedule,
    as_retry_policy,
)
from .callback import Callback
from .constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_ENDPOINT,
    DEFAULT_FEATURE_FLAG_REQUEST_TIMEOUT,
    DEFAULT_FEATURE_FLAGS_POLLING_INTERVAL,
    DEFAULT_FLUSH_INTERVAL,
    DEFAULT_MAX_CONCURRENT_REQUESTS,
)
from .errors import ConfigError
from .logger import Logger, default_logger

Clock = Callable[[], datetime]
RetryAfter = Union[RetryPolicy, Callable[[int], timedelta]]
NextPollingTick = Union[PollingSchedule, Callable[[], timedelta]]

_TRUTHY = {"1", "true", "yes", "on"}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _env_str(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def _env_seconds(name: str) -> Optional[timedelta]:
    value = _env_str(name)
    if value is None:
        return None
    return timedelta(seconds=float(value))


def _env_int(name: str) -> Optional[int]:
    value = _env_str(name)
    return int(value) if value is not None else None


@dataclass(frozen=True)
class ClientConfig:
    """Caller-facing settings. ``None`` (and zero, for numbers) means default."""

    endpoint: Optional[str] = None
    # Makes local feature flag evaluation possible; flags still work without it.
    personal_api_key: Optional[str] = None
    flush_interval: Optional[timedelta] = None
    feature_flags_polling_interval: Optional[timedelta] = None
    feature_flag_request_timeout: Optional[timedelta] = None
    # Overrides feature_flags_polling_interval when set.
    next_polling_tick: Optional[NextPollingTick] = None
    transport: Optional[httpx.BaseTransport] = None
    logger: Optional[Logger] = None
    # Merged into every event; these win over event-level keys.
    default_event_properties: Optional[Mapping[str, Any]] = None
    callback: Optional[Callback] = None
    batch_size: Optional[int] = None
    verbose: bool = False
    retry_after: Optional[RetryAfter] = None

    @classmethod
    def from_env(cls, prefix: str = "PULSE_") -> "ClientConfig":
        verbose = os.environ.get(f"{prefix}VERBOSE", "").strip().lower() in _TRUTHY
        return cls(
            endpoint=_env_str(f"{prefix}ENDPOINT"),
            personal_api_key=_env_str(f"{prefix}PERSONAL_API_KEY"),
            flush_interval=_env_seconds(f"{prefix}FLUSH_INTERVAL"),
            feature_flags_polling_interval=_env_seconds(f"{prefix}FEATURE_FLAGS_POLLING_INTERVAL"),
            feature_flag_request_timeout=_env_seconds(f"{prefix}FEATURE_FLAG_REQUEST_TIMEOUT"),
            batch_size=_env_int(f"{prefix}BATCH_SIZE"),
            verbose=verbose,
        )

    def replace(self, **changes: Any) -> "ClientConfig":
        return _replace(self, **changes)


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully-defaulted configuration, read concurrently without locking."""

    endpoint: str
    personal_api_key: Optional[str]
    flush_interval: timedelta
    feature_flags_polling_interval: timedelta
    feature_flag_request_timeout: timedelta
    next_polling_tick: Optional[PollingSchedule]
    transport: httpx.BaseTransport
    logger: Logger
    # Read-only view; left out of the hash since mappings are unhashable.
    default_event_properties: Optional[Mapping[str, Any]] = field(hash=False)
    callback: Optional[Callback]
    batch_size: int
    verbose: bool
    retry_after: RetryPolicy
    clock: Clock = field(default=utc_now)
    max_concurrent_requests: int = DEFAULT_MAX_CONCURRENT_REQUESTS

    def polling_delay(self) -> timedelta:
        if self.next_polling_tick is not None:
            return self.next_polling_tick.next_tick()
        return self.feature_flags_polling_interval

    def retry_delay(self, attempt: int) -> timedelta:
        return self.retry_after.duration(attempt)

    def now(self) -> datetime:
        return self.clock()


_T = TypeVar("_T", timedelta, int)


def _positive_or(value: Optional[_T], default: _T) -> _T:
    """``value`` when it is set and above zero, otherwise ``default``."""
    if value is None or value <= type(default)():
        return default
    return value


def validate(config: Union[ClientConfig, ResolvedConfig]) -> Optional[ConfigError]:
    """Return the first invalid field as a :class:`ConfigError`, or ``None``.

    Fields are checked in a fixed order (flush interval, then batch size) so
    the reported error is the same on every run.
    """
    if config.flush_interval is not None and config.flush_interval < timedelta(0):
        return ConfigError(
            field="Interval",
            value=config.flush_interval,
            reason="negative time intervals are not supported",
        )

    if config.batch_size is not None and config.batch_size < 0:
        return ConfigError(
            field="BatchSize",
            value=config.batch_size,
            reason="negative batch sizes are not supported",
        )

    return None


def resolve(
    config: Optional[Union[ClientConfig, ResolvedConfig]] = None,
    *,
    clock: Optional[Clock] = None,
    max_concurrent_requests: Optional[int] = None,
) -> ResolvedConfig:
    """Substitute defaults for every unset field; set fields pass through.

    Zero and negative numbers count as unset, so every duration, the batch
    size and the concurrency limit come out above zero.

    ``clock`` and ``max_concurrent_requests`` exist for tests only. When a
    :class:`ResolvedConfig` is passed in, its own values are kept unless
    overridden, which makes resolving twice a no-op.
    """
    if config is None:
        config = ClientConfig()

    if clock is None:
        clock = getattr(config, "clock", None) or utc_now
    if max_concurrent_requests is None:
        max_concurrent_requests = getattr(config, "max_concurrent_requests", None)

    properties = config.default_event_properties
    next_tick = config.next_polling_tick

    return ResolvedConfig(
        endpoint=config.endpoint or DEFAULT_ENDPOINT,
        personal_api_key=config.personal_api_key,
        flush_interval=_positive_or(config.flush_interval, DEFAULT_FLUSH_INTERVAL),
        feature_flags_polling_interval=_positive_or(
            config.feature_flags_polling_interval, DEFAULT_FEATURE_FLAGS_POLLING_INTERVAL
        ),
        feature_flag_request_timeout=_positive_or(
            config.feature_flag_request_timeout, DEFAULT_FEATURE_FLAG_REQUEST_TIMEOUT
        ),
        next_polling_tick=as_polling_schedule(next_tick) if next_tick is not None else None,
        transport=config.transport if config.transport is not None else httpx.HTTPTransport(),
        logger=config.logger if config.logger is not None else default_logger(),
        default_event_properties=MappingProxyType(dict(properties)) if properties is not None else None,
        callback=config.callback,
        batch_size=_positive_or(config.batch_size, DEFAULT_BATCH_SIZE),
        verbose=bool(config.verbose),
        retry_after=as_retry_policy(config.retry_after) if config.retry_after is not None else ExponentialBackoff(),
        clock=clock,
        max_concurrent_requests=_positive_or(max_concurrent_requests, DEFAULT_MAX_CONCURRENT_REQUESTS),
    )


__all__ = ["ClientConfig", "ResolvedConfig", "Clock", "utc_now", "validate", "resolve"]
