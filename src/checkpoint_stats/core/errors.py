"""Error types and status mapping."""

from __future__ import annotations

from collections.abc import Mapping


def extract_error_messages(payload: Mapping[str, object] | None) -> tuple[str, ...]:
    if not isinstance(payload, Mapping):
        return ()
    raw = payload.get("errors")
    if not isinstance(raw, list):
        return ()
    return tuple(str(item) for item in raw if item is not None)


class CheckpointStatsError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.cause = cause


class CheckpointStatsValidationError(CheckpointStatsError):
    """Invalid input, failed precondition or malformed record."""


class InvalidStateError(CheckpointStatsError):
    """Snapshot metadata violates an invariant of its producer."""


class UnsupportedSnapshotKindError(CheckpointStatsError):
    """Snapshot object is not one of the convertible kinds."""

    def __init__(self, kind: type) -> None:
        super().__init__(
            f"Given checkpoint stats object of type {kind.__module__}.{kind.__qualname__} "
            "cannot be converted."
        )
        self.kind = kind


class CheckpointStatsTransportError(CheckpointStatsError):
    """Network/transport-level failure."""


class CheckpointStatsClientClosedError(CheckpointStatsError):
    """Raised when client is used after close."""


class CheckpointStatsNotFoundError(CheckpointStatsError):
    """Job or checkpoint is unknown to the REST endpoint."""


class CheckpointStatsServerError(CheckpointStatsError):
    """Server-side unexpected error."""


class CheckpointStatsProtocolError(CheckpointStatsError):
    """Response shape is not what the REST endpoint promises."""


def classify_http_error(
    payload: Mapping[str, object] | None,
    *,
    http_status: int | None,
) -> CheckpointStatsError | None:
    """Map HTTP status and REST error body to domain exceptions."""

    if http_status is None:
        return CheckpointStatsProtocolError("Missing HTTP status")
    if 200 <= http_status < 300:
        return None

    messages = extract_error_messages(payload)
    message = "; ".join(messages) or "checkpoint statistics request failed"

    if http_status == 404:
        return CheckpointStatsNotFoundError(message, http_status=http_status)
    if http_status >= 500:
        return CheckpointStatsServerError(
            message,
            http_status=http_status,
            cause="server_transient",
        )
    if http_status >= 400:
        return CheckpointStatsValidationError(message, http_status=http_status)
    return CheckpointStatsProtocolError(
        "Unexpected HTTP status",
        http_status=http_status,
    )


__all__ = [
    "CheckpointStatsError",
    "CheckpointStatsValidationError",
    "InvalidStateError",
    "UnsupportedSnapshotKindError",
    "CheckpointStatsTransportError",
    "CheckpointStatsClientClosedError",
    "CheckpointStatsNotFoundError",
    "CheckpointStatsServerError",
    "CheckpointStatsProtocolError",
    "extract_error_messages",
    "classify_http_error",
]
