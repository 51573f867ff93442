"""Pulse Python SDK."""

from .backoff import ExponentialBackoff, FixedPollingSchedule, PollingSchedule, RetryPolicy
from .callback import Callback
from .client import Client
from .config import ClientConfig, ResolvedConfig, resolve, validate
from .constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_ENDPOINT,
    DEFAULT_FEATURE_FLAG_REQUEST_TIMEOUT,
    DEFAULT_FEATURE_FLAGS_POLLING_INTERVAL,
    DEFAULT_FLUSH_INTERVAL,
    __version__,
)
from .errors import ConfigError, PulseError
from .logger import Logger

__all__ = [
    "Client",
    "ClientConfig",
    "ResolvedConfig",
    "ConfigError",
    "PulseError",
    "validate",
    "resolve",
    "Callback",
    "Logger",
    "RetryPolicy",
    "PollingSchedule",
    "ExponentialBackoff",
    "FixedPollingSchedule",
    "DEFAULT_ENDPOINT",
    "DEFAULT_FLUSH_INTERVAL",
    "DEFAULT_FEATURE_FLAGS_POLLING_INTERVAL",
    "DEFAULT_FEATURE_FLAG_REQUEST_TIMEOUT",
    "DEFAULT_BATCH_SIZE",
    "__version__",
]
