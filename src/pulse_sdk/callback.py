"""Delivery notifications for outbound events."""

from __future__ import annotations

from typing import Any, Dict, Protocol


class Callback(Protocol):
    def success(self, event: Dict[str, Any]) -> None:
        ...

    def failure(self, event: Dict[str, Any], error: Exception) -> None:
        ...


class NullCallback:
    """Used by the client when the caller registered no callback."""

    def success(self, event: Dict[str, Any]) -> None:
        return None

    def failure(self, event: Dict[str, Any], error: Exception) -> None:
        return None


__all__ = ["Callback", "NullCallback"]
