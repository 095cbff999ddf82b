"""Read-only shapes of the coordinator's checkpoint statistics snapshot.

The coordinator owns these objects and may keep updating them between reads.
Translation only reads them; nothing in this package mutates a snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from enum import Enum

NO_ACK_TIMESTAMP = -1


class CheckpointStatsStatus(Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class SavepointFormatType(Enum):
    CANONICAL = "CANONICAL"
    NATIVE = "NATIVE"


@dataclass(slots=True, frozen=True)
class CheckpointSnapshotType:
    name: str = "CHECKPOINT"

    @property
    def is_savepoint(self) -> bool:
        return False


@dataclass(slots=True, frozen=True)
class SavepointSnapshotType:
    name: str
    format_type: SavepointFormatType
    synchronous: bool = False

    @property
    def is_savepoint(self) -> bool:
        return True

    @classmethod
    def savepoint(
        cls, format_type: SavepointFormatType = SavepointFormatType.CANONICAL
    ) -> "SavepointSnapshotType":
        return cls(name="Savepoint", format_type=format_type)

    @classmethod
    def suspend(
        cls, format_type: SavepointFormatType = SavepointFormatType.CANONICAL
    ) -> "SavepointSnapshotType":
        return cls(name="Suspend Savepoint", format_type=format_type, synchronous=True)

    @classmethod
    def terminate(
        cls, format_type: SavepointFormatType = SavepointFormatType.CANONICAL
    ) -> "SavepointSnapshotType":
        return cls(name="Terminate Savepoint", format_type=format_type, synchronous=True)


CHECKPOINT = CheckpointSnapshotType("CHECKPOINT")
FULL_CHECKPOINT = CheckpointSnapshotType("FULL_CHECKPOINT")

SnapshotType = CheckpointSnapshotType | SavepointSnapshotType


@dataclass(slots=True, frozen=True)
class CheckpointProperties:
    checkpoint_type: SnapshotType = CHECKPOINT

    @property
    def is_savepoint(self) -> bool:
        return self.checkpoint_type.is_savepoint


@dataclass(slots=True)
class TaskStateStats:
    """Aggregated statistics of one job vertex for one checkpoint."""

    job_vertex_id: str
    num_subtasks: int
    num_acknowledged_subtasks: int = 0
    latest_ack_timestamp: int = NO_ACK_TIMESTAMP
    checkpointed_size: int = 0
    state_size: int = 0
    processed_data: int = 0
    persisted_data: int = 0

    def end_to_end_duration(self, trigger_timestamp: int) -> int:
        if self.latest_ack_timestamp == NO_ACK_TIMESTAMP:
            return -1
        return max(0, self.latest_ack_timestamp - trigger_timestamp)


@dataclass(slots=True)
class AbstractCheckpointStats(ABC):
    checkpoint_id: int
    trigger_timestamp: int
    properties: CheckpointProperties
    total_subtask_count: int
    task_stats: Mapping[str, TaskStateStats] = field(default_factory=dict)
    num_acknowledged_subtasks: int = 0
    latest_ack_timestamp: int = NO_ACK_TIMESTAMP
    checkpointed_size: int = 0
    state_size: int = 0
    processed_data: int = 0
    persisted_data: int = 0
    unaligned_checkpoint: bool = False

    @property
    @abstractmethod
    def status(self) -> CheckpointStatsStatus:
        """Lifecycle status at the time of the read."""

    @property
    def end_to_end_duration(self) -> int:
        if self.latest_ack_timestamp == NO_ACK_TIMESTAMP:
            return -1
        return max(0, self.latest_ack_timestamp - self.trigger_timestamp)

    def all_task_state_stats(self) -> Collection[TaskStateStats]:
        return list(self.task_stats.values())


@dataclass(slots=True)
class PendingCheckpointStats(AbstractCheckpointStats):
    @property
    def status(self) -> CheckpointStatsStatus:
        return CheckpointStatsStatus.IN_PROGRESS


@dataclass(slots=True)
class CompletedCheckpointStats(AbstractCheckpointStats):
    external_path: str | None = None
    discarded: bool = False

    @property
    def status(self) -> CheckpointStatsStatus:
        return CheckpointStatsStatus.COMPLETED


@dataclass(slots=True)
class FailedCheckpointStats(AbstractCheckpointStats):
    failure_timestamp: int = 0
    failure_message: str | None = None

    @property
    def status(self) -> CheckpointStatsStatus:
        return CheckpointStatsStatus.FAILED

    @property
    def end_to_end_duration(self) -> int:
        return max(0, self.failure_timestamp - self.trigger_timestamp)


__all__ = [
    "NO_ACK_TIMESTAMP",
    "CheckpointStatsStatus",
    "SavepointFormatType",
    "CheckpointSnapshotType",
    "SavepointSnapshotType",
    "SnapshotType",
    "CHECKPOINT",
    "FULL_CHECKPOINT",
    "CheckpointProperties",
    "TaskStateStats",
    "AbstractCheckpointStats",
    "PendingCheckpointStats",
    "CompletedCheckpointStats",
    "FailedCheckpointStats",
]
