"""Wire-level checkpoint statistics records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from .sources import CheckpointStatsStatus

if TYPE_CHECKING:
    from .sources import SnapshotType


class CheckpointType(Enum):
    """Backward-compatible checkpoint type tags exposed to REST clients.

    Internal snapshot types may grow new distinctions; these four values are
    what existing dashboards understand and must stay stable.
    """

    CHECKPOINT = "CHECKPOINT"
    UNALIGNED_CHECKPOINT = "UNALIGNED_CHECKPOINT"
    SAVEPOINT = "SAVEPOINT"
    SYNC_SAVEPOINT = "SYNC_SAVEPOINT"

    @classmethod
    def from_snapshot_type(
        cls,
        snapshot_type: "SnapshotType",
        is_unaligned: bool,
    ) -> "CheckpointType":
        from .classifier import classify_checkpoint_type

        return classify_checkpoint_type(snapshot_type, is_unaligned)


def _check_subtask_counts(num_subtasks: int, num_acknowledged_subtasks: int) -> None:
    if num_acknowledged_subtasks > num_subtasks:
        raise ValueError("num_acknowledged_subtasks must be <= num_subtasks")


@dataclass(slots=True, frozen=True)
class TaskCheckpointStatistics:
    id: int
    status: CheckpointStatsStatus
    latest_ack_timestamp: int
    checkpointed_size: int
    state_size: int
    end_to_end_duration: int
    alignment_buffered: int
    processed_data: int
    persisted_data: int
    num_subtasks: int
    num_acknowledged_subtasks: int

    def __post_init__(self) -> None:
        _check_subtask_counts(self.num_subtasks, self.num_acknowledged_subtasks)

    def to_record(self) -> dict[str, object]:
        from .codec import encode_task_statistics

        return encode_task_statistics(self)


@dataclass(slots=True, frozen=True)
class _CheckpointStatisticsBase:
    KIND: ClassVar[str]

    id: int
    status: CheckpointStatsStatus
    is_savepoint: bool
    savepoint_format: str | None
    trigger_timestamp: int
    latest_ack_timestamp: int
    checkpointed_size: int
    state_size: int
    end_to_end_duration: int
    alignment_buffered: int
    processed_data: int
    persisted_data: int
    num_subtasks: int
    num_acknowledged_subtasks: int
    checkpoint_type: CheckpointType
    tasks: dict[str, TaskCheckpointStatistics] = field(hash=False)

    def __post_init__(self) -> None:
        if self.status is None:
            raise ValueError("status must not be None")
        if self.checkpoint_type is None:
            raise ValueError("checkpoint_type must not be None")
        if self.tasks is None:
            raise ValueError("tasks must not be None")
        _check_subtask_counts(self.num_subtasks, self.num_acknowledged_subtasks)
        object.__setattr__(self, "tasks", dict(self.tasks))

    @property
    def kind(self) -> str:
        return self.KIND

    def to_record(self) -> dict[str, object]:
        from .codec import encode_checkpoint_statistics

        return encode_checkpoint_statistics(self)  # type: ignore[arg-type]


@dataclass(slots=True, frozen=True)
class InProgressCheckpointStatistics(_CheckpointStatisticsBase):
    KIND: ClassVar[str] = "in_progress"

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "InProgressCheckpointStatistics":
        from .codec import decode_checkpoint_statistics_as

        return decode_checkpoint_statistics_as(record, cls)


@dataclass(slots=True, frozen=True)
class CompletedCheckpointStatistics(_CheckpointStatisticsBase):
    KIND: ClassVar[str] = "completed"

    external_path: str | None = None
    discarded: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "CompletedCheckpointStatistics":
        from .codec import decode_checkpoint_statistics_as

        return decode_checkpoint_statistics_as(record, cls)


@dataclass(slots=True, frozen=True)
class FailedCheckpointStatistics(_CheckpointStatisticsBase):
    KIND: ClassVar[str] = "failed"

    failure_timestamp: int = 0
    failure_message: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "FailedCheckpointStatistics":
        from .codec import decode_checkpoint_statistics_as

        return decode_checkpoint_statistics_as(record, cls)


CheckpointStatistics = (
    InProgressCheckpointStatistics | CompletedCheckpointStatistics | FailedCheckpointStatistics
)


__all__ = [
    "CheckpointType",
    "TaskCheckpointStatistics",
    "InProgressCheckpointStatistics",
    "CompletedCheckpointStatistics",
    "FailedCheckpointStatistics",
    "CheckpointStatistics",
]
