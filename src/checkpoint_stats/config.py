"""Client configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

# Keys of the job manager's own configuration that locate its REST endpoint.
REST_ADDRESS_KEY = "rest.address"
REST_PORT_KEY = "rest.port"
REST_SSL_ENABLED_KEY = "security.ssl.rest.enabled"


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retries of idempotent GETs while the job manager restarts or is overloaded."""

    max_attempts: int = 3
    initial_delay_seconds: float = 0.5
    max_delay_seconds: float = 5.0
    retry_on_http_statuses: frozenset[int] = frozenset({502, 503, 504})

    def validate(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("retry.max_attempts must be >= 1")
        if self.initial_delay_seconds < 0:
            raise ValueError("retry.initial_delay_seconds must be >= 0")
        if self.max_delay_seconds < self.initial_delay_seconds:
            raise ValueError("retry.max_delay_seconds must be >= retry.initial_delay_seconds")
        if any(not 500 <= status < 600 for status in self.retry_on_http_statuses):
            raise ValueError("retry.retry_on_http_statuses must only hold 5xx statuses")


@dataclass(slots=True, frozen=True)
class CheckpointStatsClientConfig:
    """Where the job manager's REST endpoint lives and how to talk to it."""

    rest_address: str = "localhost"
    rest_port: int = 8081
    use_ssl: bool = False
    request_timeout_seconds: float = 10.0
    user_agent: str = "checkpoint-stats/0.1.0"
    retry: RetryConfig = field(default_factory=RetryConfig)

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.rest_address}:{self.rest_port}/"

    @classmethod
    def from_flink_configuration(
        cls,
        configuration: Mapping[str, str],
        *,
        retry: RetryConfig | None = None,
    ) -> "CheckpointStatsClientConfig":
        """Build from ``flink-conf.yaml`` style key/value pairs.

        Missing keys fall back to the job manager defaults.
        """

        raw_port = configuration.get(REST_PORT_KEY, "8081")
        try:
            rest_port = int(raw_port)
        except ValueError:
            raise ValueError(f"{REST_PORT_KEY} must be an integer, got {raw_port!r}") from None
        return cls(
            rest_address=configuration.get(REST_ADDRESS_KEY, "localhost"),
            rest_port=rest_port,
            use_ssl=configuration.get(REST_SSL_ENABLED_KEY, "false").strip().lower() == "true",
            retry=retry or RetryConfig(),
        )

    def validate(self) -> None:
        if not self.rest_address:
            raise ValueError("rest_address must not be empty")
        if not 0 < self.rest_port < 65536:
            raise ValueError("rest_port must be within 1..65535")
        if not isinstance(self.use_ssl, bool):
            raise ValueError("use_ssl must be bool")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        self.retry.validate()


__all__ = [
    "REST_ADDRESS_KEY",
    "REST_PORT_KEY",
    "REST_SSL_ENABLED_KEY",
    "RetryConfig",
    "CheckpointStatsClientConfig",
]
