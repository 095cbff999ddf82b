"""Retry decisions for GET requests against the job manager."""

from __future__ import annotations

from ..config import RetryConfig


def should_retry(attempt: int, retry: RetryConfig, *, http_status: int | None) -> bool:
    """Whether to issue another GET after ``attempt`` (1-based) failed.

    ``http_status`` is ``None`` when no response arrived at all.
    """

    if attempt >= retry.max_attempts:
        return False
    return http_status is None or http_status in retry.retry_on_http_statuses


def retry_delay_seconds(attempt: int, retry: RetryConfig) -> float:
    return min(retry.max_delay_seconds, retry.initial_delay_seconds * 2 ** (attempt - 1))


__all__ = [
    "should_retry",
    "retry_delay_seconds",
]
