"""Translation of coordinator snapshots into wire records."""

from __future__ import annotations

import logging

from ..core.errors import CheckpointStatsValidationError, UnsupportedSnapshotKindError
from .classifier import classify_checkpoint_type
from .models import (
    CheckpointStatistics,
    CompletedCheckpointStatistics,
    FailedCheckpointStatistics,
    InProgressCheckpointStatistics,
    TaskCheckpointStatistics,
)
from .sources import (
    AbstractCheckpointStats,
    CompletedCheckpointStats,
    FailedCheckpointStats,
    PendingCheckpointStats,
    SavepointSnapshotType,
)

logger = logging.getLogger("checkpoint_stats")

_CONVERTIBLE_KINDS: tuple[type[AbstractCheckpointStats], ...] = (
    CompletedCheckpointStats,
    FailedCheckpointStats,
    PendingCheckpointStats,
)


def build_task_statistics(
    stats: AbstractCheckpointStats,
) -> dict[str, TaskCheckpointStatistics]:
    """Per-vertex breakdown of ``stats``, keyed by job vertex id."""

    per_task: dict[str, TaskCheckpointStatistics] = {}
    for task_stats in stats.all_task_state_stats():
        per_task[task_stats.job_vertex_id] = TaskCheckpointStatistics(
            id=stats.checkpoint_id,
            status=stats.status,
            latest_ack_timestamp=task_stats.latest_ack_timestamp,
            checkpointed_size=task_stats.checkpointed_size,
            state_size=task_stats.state_size,
            end_to_end_duration=task_stats.end_to_end_duration(stats.trigger_timestamp),
            alignment_buffered=0,
            processed_data=task_stats.processed_data,
            persisted_data=task_stats.persisted_data,
            num_subtasks=task_stats.num_subtasks,
            num_acknowledged_subtasks=task_stats.num_acknowledged_subtasks,
        )
    return per_task


def resolve_savepoint_format(stats: AbstractCheckpointStats) -> str | None:
    snapshot_type = stats.properties.checkpoint_type
    if isinstance(snapshot_type, SavepointSnapshotType):
        return snapshot_type.format_type.name
    return None


def generate_checkpoint_statistics(
    stats: AbstractCheckpointStats | None,
    include_task_statistics: bool,
) -> CheckpointStatistics:
    """Build the wire record for one point-in-time snapshot.

    With ``include_task_statistics`` false the record carries an empty
    ``tasks`` mapping, never ``None``.
    """

    if stats is None:
        raise CheckpointStatsValidationError("checkpoint stats must not be None")
    if not isinstance(stats, _CONVERTIBLE_KINDS):
        raise UnsupportedSnapshotKindError(type(stats))

    tasks = build_task_statistics(stats) if include_task_statistics else {}
    savepoint_format = resolve_savepoint_format(stats)
    snapshot_type = stats.properties.checkpoint_type
    checkpoint_type = classify_checkpoint_type(snapshot_type, stats.unaligned_checkpoint)
    logger.debug(
        "translate checkpoint_id=%s kind=%s checkpoint_type=%s tasks=%s",
        stats.checkpoint_id,
        type(stats).__name__,
        checkpoint_type.name,
        len(tasks),
    )

    common = {
        "id": stats.checkpoint_id,
        "status": stats.status,
        "savepoint_format": savepoint_format,
        "trigger_timestamp": stats.trigger_timestamp,
        "latest_ack_timestamp": stats.latest_ack_timestamp,
        "checkpointed_size": stats.checkpointed_size,
        "state_size": stats.state_size,
        "end_to_end_duration": stats.end_to_end_duration,
        "alignment_buffered": 0,
        "processed_data": stats.processed_data,
        "persisted_data": stats.persisted_data,
        "num_subtasks": stats.total_subtask_count,
        "num_acknowledged_subtasks": stats.num_acknowledged_subtasks,
        "checkpoint_type": checkpoint_type,
        "tasks": tasks,
    }

    if isinstance(stats, CompletedCheckpointStats):
        return CompletedCheckpointStatistics(
            is_savepoint=snapshot_type.is_savepoint,
            external_path=stats.external_path,
            discarded=stats.discarded,
            **common,
        )
    if isinstance(stats, FailedCheckpointStats):
        return FailedCheckpointStatistics(
            is_savepoint=stats.properties.is_savepoint,
            failure_timestamp=stats.failure_timestamp,
            failure_message=stats.failure_message,
            **common,
        )
    return InProgressCheckpointStatistics(
        is_savepoint=stats.properties.is_savepoint,
        **common,
    )


__all__ = [
    "build_task_statistics",
    "resolve_savepoint_format",
    "generate_checkpoint_statistics",
]
