"""Response JSON parsing for the HTTP transport."""

from __future__ import annotations

from typing import Protocol

from .errors import (
    CheckpointStatsError,
    CheckpointStatsProtocolError,
    classify_http_error,
)


class JsonPayloadResponse(Protocol):
    def json(self) -> object: ...


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    http_status: int | None,
) -> dict[str, object]:
    """Parse response JSON payload and map parse failures to domain errors."""

    try:
        payload = response.json()
    except Exception as exc:
        raise _json_parse_error(http_status=http_status) from exc

    if not isinstance(payload, dict):
        raise CheckpointStatsProtocolError(
            "response JSON root must be an object",
            http_status=http_status,
        )
    if any(not isinstance(key, str) for key in payload):
        raise CheckpointStatsProtocolError(
            "response JSON object keys must be strings",
            http_status=http_status,
        )
    return payload


def _json_parse_error(*, http_status: int | None) -> CheckpointStatsError:
    # Error bodies are not always JSON; the HTTP status decides.
    mapped = classify_http_error(None, http_status=http_status)
    if mapped is not None and http_status is not None:
        return mapped
    return CheckpointStatsProtocolError(
        "response body is not valid JSON",
        http_status=http_status,
    )


__all__ = [
    "JsonPayloadResponse",
    "parse_json_payload",
]
