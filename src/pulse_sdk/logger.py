"""Logging sink used by background operations."""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, Protocol

LOGGER_NAME = "pulse_sdk"

_handler_lock = threading.Lock()


class Logger(Protocol):
    """Anything with leveled printf-style methods; ``logging.Logger`` fits."""

    def debug(self, msg: str, *args: Any) -> None:
        ...

    def info(self, msg: str, *args: Any) -> None:
        ...

    def warning(self, msg: str, *args: Any) -> None:
        ...

    def error(self, msg: str, *args: Any) -> None:
        ...


def default_logger() -> logging.Logger:
    """Return the shared SDK logger, writing to stderr."""
    logger = logging.getLogger(LOGGER_NAME)
    with _handler_lock:
        if not any(getattr(h, "_pulse_default", False) for h in logger.handlers):
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter("pulse %(asctime)s %(levelname)s %(message)s"))
            handler._pulse_default = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
            if logger.level == logging.NOTSET:
                logger.setLevel(logging.INFO)
    return logger


__all__ = ["Logger", "LOGGER_NAME", "default_logger"]
