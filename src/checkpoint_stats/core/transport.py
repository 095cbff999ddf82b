"""Read-only HTTP transport for the job manager REST API."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

import httpx

from ..config import CheckpointStatsClientConfig
from .errors import CheckpointStatsError, CheckpointStatsTransportError, classify_http_error
from .response_parsing import parse_json_payload
from .retry import retry_delay_seconds, should_retry

logger = logging.getLogger("checkpoint_stats")


class TransportClient(Protocol):
    def get(self, url: str) -> object: ...
    def close(self) -> None: ...


class SyncTransport:
    """Issues GETs only, so every request is safe to repeat."""

    def __init__(
        self,
        config: CheckpointStatsClientConfig,
        *,
        client: TransportClient | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self._config = config
        self._sleep = sleeper or time.sleep
        self._closed = False
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=config.base_url,
            headers={"Accept": "application/json", "User-Agent": config.user_agent},
            timeout=httpx.Timeout(config.request_timeout_seconds),
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()

    def get(self, endpoint: str) -> dict[str, object]:
        if self._closed:
            raise CheckpointStatsTransportError("transport is already closed")

        path = endpoint.lstrip("/")
        retry = self._config.retry
        attempt = 0
        while True:
            attempt += 1
            try:
                response = self._client.get(path)
            except httpx.TransportError as exc:
                if not should_retry(attempt, retry, http_status=None):
                    logger.error("GET %s unreachable after attempt=%s: %s", path, attempt, exc)
                    raise CheckpointStatsTransportError(
                        f"job manager unreachable: {exc}",
                        cause="network",
                    ) from exc
                logger.warning("GET %s unreachable attempt=%s; retrying", path, attempt)
                self._sleep(retry_delay_seconds(attempt, retry))
                continue

            http_status = getattr(response, "status_code", None)
            if http_status is not None and should_retry(attempt, retry, http_status=http_status):
                logger.warning(
                    "GET %s job manager busy attempt=%s http_status=%s; retrying",
                    path,
                    attempt,
                    http_status,
                )
                self._sleep(retry_delay_seconds(attempt, retry))
                continue

            try:
                payload = parse_json_payload(response, http_status=http_status)
            except CheckpointStatsError:
                logger.error("GET %s unreadable body http_status=%s", path, http_status)
                raise
            error = classify_http_error(payload, http_status=http_status)
            if error is not None:
                logger.error("GET %s failed http_status=%s: %s", path, http_status, error)
                raise error
            logger.debug("GET %s ok attempt=%s", path, attempt)
            return payload


__all__ = [
    "TransportClient",
    "SyncTransport",
]
