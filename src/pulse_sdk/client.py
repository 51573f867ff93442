"""Python client for the Pulse event collector."""

from __future__ import annotations

import json
import threading
import time
from typing import Any, Callable, Dict, Optional

import httpx

from .callback import NullCallback
from .config import ClientConfig, Clock, ResolvedConfig, resolve, validate
from .constants import DEFAULT_SEND_TIMEOUT, LIB_NAME, MAX_SEND_ATTEMPTS, __version__
from .errors import ConfigError


class Client:
    """Sends events to the collector using a validated, resolved config.

    ``clock``, ``max_concurrent_requests`` and ``sleep`` are test seams and are
    not part of :class:`ClientConfig`.
    """

    def __init__(
        self,
        api_key: str,
        config: Optional[ClientConfig] = None,
        *,
        clock: Optional[Clock] = None,
        max_concurrent_requests: Optional[int] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        if not api_key:
            raise ConfigError(field="ApiKey", value=api_key, reason="an api key is required")
        config = config or ClientConfig()
        error = validate(config)
        if error is not None:
            raise error

        self._api_key = api_key
        self._sleep = sleep or time.sleep
        self._config = resolve(config, clock=clock, max_concurrent_requests=max_concurrent_requests)
        self._logger = self._config.logger
        self._callback = self._config.callback or NullCallback()
        self._semaphore = threading.BoundedSemaphore(self._config.max_concurrent_requests)
        self._client = httpx.Client(
            base_url=self._config.endpoint,
            transport=self._config.transport,
            timeout=DEFAULT_SEND_TIMEOUT.total_seconds(),
        )
        self._debug(
            "client ready endpoint=%s batch_size=%s flush_interval=%s",
            self._config.endpoint,
            self._config.batch_size,
            self._config.flush_interval,
        )

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _debug(self, msg: str, *args: Any) -> None:
        if self._config.verbose:
            self._logger.info(msg, *args)

    def _headers(self) -> Dict[str, str]:
        return {
            "User-Agent": f"{LIB_NAME}/{__version__}",
            "Content-Type": "application/json",
        }

    def _properties(self, properties: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = dict(properties or {})
        merged.update(self._config.default_event_properties or {})
        merged["$lib"] = LIB_NAME
        merged["$lib_version"] = __version__
        return merged

    def build_event(
        self,
        distinct_id: str,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return {
            "api_key": self._api_key,
            "event": event,
            "distinct_id": distinct_id,
            "properties": self._properties(properties),
            "timestamp": self._config.now().isoformat(),
        }

    def _send(self, payload: Dict[str, Any]) -> None:
        # Values json cannot encode (datetimes, UUIDs, ...) are sent as strings.
        body = json.dumps(payload, separators=(",", ":"), default=str)
        last_error: Optional[Exception] = None
        for attempt in range(MAX_SEND_ATTEMPTS):
            if attempt:
                wait = self._config.retry_delay(attempt - 1)
                self._debug("retrying event=%s attempt=%s wait=%s", payload["event"], attempt, wait)
                self._sleep(max(wait.total_seconds(), 0.0))
            try:
                with self._semaphore:
                    response = self._client.post("/capture/", content=body, headers=self._headers())
                response.raise_for_status()
            except httpx.HTTPError as exc:
                last_error = exc
                self._debug("send failed event=%s error=%s", payload["event"], exc)
                continue
            self._debug("sent event=%s status=%s", payload["event"], response.status_code)
            self._callback.success(payload)
            return

        self._logger.error("dropping event=%s after %s attempts: %s", payload["event"], MAX_SEND_ATTEMPTS, last_error)
        self._callback.failure(payload, last_error)

    def capture(
        self,
        distinct_id: str,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload = self.build_event(distinct_id, event, properties)
        self._send(payload)
        return payload

    def polling_delay(self) -> float:
        """Seconds until the next feature-flag refresh."""
        return self._config.polling_delay().total_seconds()

    def close(self) -> None:
        self._client.close()


__all__ = ["Client"]
