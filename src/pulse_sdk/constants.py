"""Library-wide defaults for the Pulse Python SDK."""

from __future__ import annotations

from datetime import timedelta

__version__ = "0.1.0"

LIB_NAME = "pulse-sdk-python"

DEFAULT_ENDPOINT = "https://app.pulse.example"
DEFAULT_FLUSH_INTERVAL = timedelta(seconds=5)
DEFAULT_FEATURE_FLAGS_POLLING_INTERVAL = timedelta(minutes=5)
DEFAULT_FEATURE_FLAG_REQUEST_TIMEOUT = timedelta(seconds=3)
DEFAULT_BATCH_SIZE = 250

# Event sends; feature flag fetches use DEFAULT_FEATURE_FLAG_REQUEST_TIMEOUT.
DEFAULT_SEND_TIMEOUT = timedelta(seconds=5)

# Not user-facing; only tests override these.
DEFAULT_MAX_CONCURRENT_REQUESTS = 1000
MAX_SEND_ATTEMPTS = 10


__all__ = [
    "__version__",
    "LIB_NAME",
    "DEFAULT_ENDPOINT",
    "DEFAULT_FLUSH_INTERVAL",
    "DEFAULT_FEATURE_FLAGS_POLLING_INTERVAL",
    "DEFAULT_FEATURE_FLAG_REQUEST_TIMEOUT",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_SEND_TIMEOUT",
    "DEFAULT_MAX_CONCURRENT_REQUESTS",
    "MAX_SEND_ATTEMPTS",
]
