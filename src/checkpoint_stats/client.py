"""Public client entrypoint."""

from __future__ import annotations

import logging
from types import TracebackType

from .checkpoints.codec import decode_checkpoint_statistics
from .checkpoints.models import CheckpointStatistics
from .client_shared import validate_checkpoint_id, validate_client_config, validate_job_id
from .config import CheckpointStatsClientConfig
from .core.errors import CheckpointStatsClientClosedError, CheckpointStatsProtocolError
from .core.transport import SyncTransport

logger = logging.getLogger("checkpoint_stats")


class CheckpointStatsClient:
    """Read-only client for checkpoint statistics of a running job."""

    def __init__(
        self,
        *,
        config: CheckpointStatsClientConfig | None = None,
        transport: SyncTransport | None = None,
    ) -> None:
        self._config = config or CheckpointStatsClientConfig()
        validate_client_config(self._config)
        self._transport = transport or SyncTransport(self._config)
        self._closed = False

    def get_checkpoint_details(self, job_id: str, checkpoint_id: int) -> CheckpointStatistics:
        self._ensure_open()
        endpoint = (
            f"jobs/{validate_job_id(job_id)}/checkpoints/details/"
            f"{validate_checkpoint_id(checkpoint_id)}"
        )
        return decode_checkpoint_statistics(self._transport.get(endpoint))

    def get_checkpoint_history(self, job_id: str) -> tuple[CheckpointStatistics, ...]:
        """Recent checkpoints of ``job_id`` as reported by the job manager."""

        self._ensure_open()
        payload = self._transport.get(f"jobs/{validate_job_id(job_id)}/checkpoints")
        history = payload.get("history", [])
        if not isinstance(history, list):
            raise CheckpointStatsProtocolError("history must be a list")
        records = tuple(decode_checkpoint_statistics(item) for item in history)
        logger.debug("checkpoint history job_id=%s entries=%s", job_id, len(records))
        return records

    def _ensure_open(self) -> None:
        if self._closed:
            raise CheckpointStatsClientClosedError("CheckpointStatsClient is already closed")

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "CheckpointStatsClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "CheckpointStatsClient",
]
