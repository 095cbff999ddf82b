from __future__ import annotations

import pytest

from checkpoint_stats.checkpoints.classifier import classify_checkpoint_type
from checkpoint_stats.checkpoints.models import CheckpointType
from checkpoint_stats.checkpoints.sources import (
    CHECKPOINT,
    FULL_CHECKPOINT,
    SavepointFormatType,
    SavepointSnapshotType,
)
from checkpoint_stats.core.errors import InvalidStateError


@pytest.mark.parametrize(
    ("snapshot_type", "is_unaligned", "expected"),
    [
        (SavepointSnapshotType.savepoint(), False, CheckpointType.SAVEPOINT),
        (SavepointSnapshotType.suspend(), False, CheckpointType.SYNC_SAVEPOINT),
        (SavepointSnapshotType.terminate(SavepointFormatType.NATIVE), False, CheckpointType.SYNC_SAVEPOINT),
        (CHECKPOINT, True, CheckpointType.UNALIGNED_CHECKPOINT),
        (CHECKPOINT, False, CheckpointType.CHECKPOINT),
        (FULL_CHECKPOINT, False, CheckpointType.CHECKPOINT),
        (FULL_CHECKPOINT, True, CheckpointType.UNALIGNED_CHECKPOINT),
    ],
    ids=[
        "savepoint",
        "suspend-savepoint",
        "terminate-savepoint",
        "unaligned-checkpoint",
        "aligned-checkpoint",
        "full-checkpoint",
        "unaligned-full-checkpoint",
    ],
)
def test_classify_checkpoint_type_matrix(snapshot_type, is_unaligned, expected):
    assert classify_checkpoint_type(snapshot_type, is_unaligned) is expected


@pytest.mark.parametrize(
    "snapshot_type",
    [SavepointSnapshotType.savepoint(), SavepointSnapshotType.suspend()],
)
def test_unaligned_savepoint_is_invalid_state(snapshot_type):
    with pytest.raises(InvalidStateError, match="unaligned"):
        classify_checkpoint_type(snapshot_type, True)


def test_checkpoint_type_from_snapshot_type_delegates_to_classifier():
    assert (
        CheckpointType.from_snapshot_type(SavepointSnapshotType.suspend(), False)
        is CheckpointType.SYNC_SAVEPOINT
    )


def test_wire_tags_are_stable():
    assert [member.value for member in CheckpointType] == [
        "CHECKPOINT",
        "UNALIGNED_CHECKPOINT",
        "SAVEPOINT",
        "SYNC_SAVEPOINT",
    ]
