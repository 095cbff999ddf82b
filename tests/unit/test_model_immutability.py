from __future__ import annotations

import copy
import pickle
from dataclasses import FrozenInstanceError, asdict, replace

import pytest

from checkpoint_stats.checkpoints.models import (
    CheckpointType,
    CompletedCheckpointStatistics,
    FailedCheckpointStatistics,
    InProgressCheckpointStatistics,
    TaskCheckpointStatistics,
)
from checkpoint_stats.checkpoints.sources import CheckpointStatsStatus


def _base_fields(**overrides: object) -> dict[str, object]:
    fields: dict[str, object] = {
        "id": 7,
        "status": CheckpointStatsStatus.COMPLETED,
        "is_savepoint": False,
        "savepoint_format": None,
        "trigger_timestamp": 1,
        "latest_ack_timestamp": 2,
        "checkpointed_size": 3,
        "state_size": 4,
        "end_to_end_duration": 1,
        "alignment_buffered": 0,
        "processed_data": 0,
        "persisted_data": 0,
        "num_subtasks": 1,
        "num_acknowledged_subtasks": 1,
        "checkpoint_type": CheckpointType.CHECKPOINT,
        "tasks": {},
    }
    fields.update(overrides)
    return fields


TASK = TaskCheckpointStatistics(
    id=7,
    status=CheckpointStatsStatus.COMPLETED,
    latest_ack_timestamp=2,
    checkpointed_size=3,
    state_size=4,
    end_to_end_duration=1,
    alignment_buffered=0,
    processed_data=0,
    persisted_data=0,
    num_subtasks=1,
    num_acknowledged_subtasks=1,
)


def test_record_is_frozen():
    record = CompletedCheckpointStatistics(**_base_fields(), external_path=None, discarded=False)
    with pytest.raises(FrozenInstanceError):
        record.discarded = True  # type: ignore[misc]


def test_tasks_are_copied_from_the_caller():
    source = {"a": TASK}
    record = InProgressCheckpointStatistics(**_base_fields(tasks=source))
    source["late"] = TASK

    assert list(record.tasks) == ["a"]


@pytest.mark.parametrize(
    "clone",
    [copy.deepcopy, lambda record: pickle.loads(pickle.dumps(record))],
    ids=["deepcopy", "pickle"],
)
def test_record_survives_copy_and_pickle(clone):
    record = CompletedCheckpointStatistics(
        **_base_fields(tasks={"a": TASK}), external_path="/ckpt/7", discarded=False
    )
    cloned = clone(record)

    assert type(cloned) is CompletedCheckpointStatistics
    assert cloned == record
    assert cloned.tasks is not record.tasks


def test_record_converts_with_asdict():
    record = InProgressCheckpointStatistics(**_base_fields(tasks={"a": TASK}))
    fields = asdict(record)

    assert fields["tasks"]["a"]["num_subtasks"] == 1
    assert fields["checkpoint_type"] is CheckpointType.CHECKPOINT


def test_acknowledged_subtasks_cannot_exceed_total():
    with pytest.raises(ValueError, match="num_acknowledged_subtasks"):
        InProgressCheckpointStatistics(**_base_fields(num_acknowledged_subtasks=2))
    with pytest.raises(ValueError, match="num_acknowledged_subtasks"):
        replace(TASK, num_acknowledged_subtasks=2)


def test_changing_one_field_breaks_equality():
    record = CompletedCheckpointStatistics(**_base_fields(), external_path="/a", discarded=False)
    assert record == replace(record)
    assert record != replace(record, discarded=True)


def test_different_variants_are_never_equal():
    pending = InProgressCheckpointStatistics(**_base_fields())
    completed = CompletedCheckpointStatistics(**_base_fields())
    failed = FailedCheckpointStatistics(**_base_fields())

    assert pending != completed
    assert completed != failed
    assert pending != failed


@pytest.mark.parametrize("field_name", ["status", "checkpoint_type", "tasks"])
def test_required_fields_reject_none(field_name):
    with pytest.raises(ValueError, match=f"{field_name} must not be None"):
        InProgressCheckpointStatistics(**_base_fields(**{field_name: None}))


def test_optional_fields_accept_none():
    record = FailedCheckpointStatistics(
        **_base_fields(status=CheckpointStatsStatus.FAILED),
        failure_timestamp=5,
        failure_message=None,
    )
    assert record.failure_message is None
    assert record.savepoint_format is None
