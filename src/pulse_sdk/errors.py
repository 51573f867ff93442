"""Exceptions raised by the Pulse Python SDK."""

from __future__ import annotations

from typing import Any


class PulseError(Exception):
    """Base class for SDK errors."""


class ConfigError(PulseError, ValueError):
    """A single configuration field was rejected.

    Returned by :func:`pulse_sdk.config.validate` and raised by the client
    constructor. It is a programmer error, so callers should not retry.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"pulse_sdk: {reason} (ClientConfig.{field}: {value!r})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigError):
            return NotImplemented
        return (self.field, self.value, self.reason) == (other.field, other.value, other.reason)

    def __hash__(self) -> int:
        return hash((self.field, repr(self.value), self.reason))


__all__ = ["PulseError", "ConfigError"]
