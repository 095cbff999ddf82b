"""Shared helpers for client bootstrap and request validation."""

from __future__ import annotations

import re

from .config import CheckpointStatsClientConfig
from .core.errors import CheckpointStatsValidationError

_JOB_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def validate_client_config(config: CheckpointStatsClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise CheckpointStatsValidationError(str(exc)) from exc


def validate_job_id(job_id: str) -> str:
    if not isinstance(job_id, str) or _JOB_ID_RE.fullmatch(job_id) is None:
        raise CheckpointStatsValidationError("job_id is invalid")
    return job_id


def validate_checkpoint_id(checkpoint_id: int) -> int:
    if isinstance(checkpoint_id, bool) or not isinstance(checkpoint_id, int) or checkpoint_id < 0:
        raise CheckpointStatsValidationError("checkpoint_id is invalid")
    return checkpoint_id


__all__ = [
    "validate_client_config",
    "validate_job_id",
    "validate_checkpoint_id",
]
