from __future__ import annotations

import httpx
import pytest

from checkpoint_stats.config import CheckpointStatsClientConfig, RetryConfig
from checkpoint_stats.core.errors import (
    CheckpointStatsNotFoundError,
    CheckpointStatsProtocolError,
    CheckpointStatsServerError,
    CheckpointStatsTransportError,
)
from checkpoint_stats.core.transport import SyncTransport
from tests.shared.transport import Response, Step, SyncSequencedClient, build_config


@pytest.mark.parametrize(
    ("steps", "max_attempts", "expected_exception", "expected_calls"),
    [
        (
            [Response(503, {"errors": ["busy"]}), Response(200, {"history": []})],
            2,
            None,
            2,
        ),
        (
            [Response(504, {"errors": ["timeout"]}), Response(502, {"errors": ["bad gateway"]})],
            2,
            CheckpointStatsServerError,
            2,
        ),
        (
            [Response(500, {"errors": ["boom"]})],
            3,
            CheckpointStatsServerError,
            1,
        ),
        (
            [httpx.ConnectError("connection refused"), Response(200, {"history": []})],
            2,
            None,
            2,
        ),
        (
            [httpx.ConnectError("connection refused")],
            1,
            CheckpointStatsTransportError,
            1,
        ),
        (
            [Response(404, {"errors": ["Job not found"]})],
            3,
            CheckpointStatsNotFoundError,
            1,
        ),
    ],
    ids=[
        "http-503-then-success",
        "gateway-errors-exhausted",
        "http-500-is-not-retried",
        "unreachable-then-success",
        "unreachable-exhausted",
        "not-found-is-not-retried",
    ],
)
def test_transport_retry_matrix(
    steps: list[Step],
    max_attempts: int,
    expected_exception: type[Exception] | None,
    expected_calls: int,
):
    client = SyncSequencedClient(steps)
    sleeps: list[float] = []
    transport = SyncTransport(
        build_config(max_attempts=max_attempts),
        client=client,
        sleeper=sleeps.append,
    )

    if expected_exception is not None:
        with pytest.raises(expected_exception):
            transport.get("/jobs/x/checkpoints")
    else:
        assert transport.get("/jobs/x/checkpoints") == {"history": []}

    assert client.calls == expected_calls
    assert client.endpoints[0] == "jobs/x/checkpoints"
    assert len(sleeps) == expected_calls - 1


def test_transport_sleeps_with_doubling_delay():
    client = SyncSequencedClient(
        [Response(503, {}), Response(503, {}), Response(200, {"history": []})]
    )
    sleeps: list[float] = []
    config = CheckpointStatsClientConfig(
        retry=RetryConfig(max_attempts=3, initial_delay_seconds=0.25, max_delay_seconds=1.0)
    )
    transport = SyncTransport(config, client=client, sleeper=sleeps.append)

    transport.get("jobs/x/checkpoints")

    assert sleeps == [0.25, 0.5]


def test_transport_does_not_catch_programming_errors():
    client = SyncSequencedClient([RuntimeError("bug in caller")])
    transport = SyncTransport(build_config(), client=client)
    with pytest.raises(RuntimeError):
        transport.get("jobs/x/checkpoints")
    assert client.calls == 1


def test_transport_rejects_non_object_json():
    transport = SyncTransport(build_config(), client=SyncSequencedClient([Response(200, [1, 2])]))
    with pytest.raises(CheckpointStatsProtocolError):
        transport.get("jobs/x/checkpoints")


def test_transport_maps_invalid_json_error_body_by_status():
    client = SyncSequencedClient([Response(404, ValueError("not json"))])
    transport = SyncTransport(build_config(), client=client)
    with pytest.raises(CheckpointStatsNotFoundError):
        transport.get("jobs/x/checkpoints")


def test_transport_refuses_requests_after_close():
    client = SyncSequencedClient([])
    transport = SyncTransport(build_config(), client=client)
    transport.close()
    with pytest.raises(CheckpointStatsTransportError):
        transport.get("jobs/x/checkpoints")
    assert client.closed is False


def test_transport_works_with_real_httpx_client():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/jobs/x/checkpoints"
        assert request.headers["User-Agent"] == "checkpoint-stats/0.1.0"
        return httpx.Response(200, json={"history": []})

    client = httpx.Client(
        base_url=CheckpointStatsClientConfig(rest_address="jobmanager").base_url,
        transport=httpx.MockTransport(handler),
        headers={"User-Agent": "checkpoint-stats/0.1.0"},
    )
    transport = SyncTransport(build_config(max_attempts=1), client=client)
    assert transport.get("jobs/x/checkpoints") == {"history": []}
    client.close()


def test_transport_can_initialize_and_close_with_default_client():
    transport = SyncTransport(build_config(max_attempts=1))
    transport.close()


def test_transport_logs_retries(caplog):
    client = SyncSequencedClient([Response(502, {}), Response(200, {"history": []})])
    transport = SyncTransport(build_config(max_attempts=2), client=client, sleeper=lambda _: None)

    with caplog.at_level("WARNING", logger="checkpoint_stats"):
        transport.get("jobs/x/checkpoints")

    assert "GET jobs/x/checkpoints job manager busy attempt=1 http_status=502" in caplog.text
