"""Mapping from internal snapshot types to wire checkpoint type tags."""

from __future__ import annotations

from ..core.errors import InvalidStateError
from .models import CheckpointType
from .sources import SnapshotType


def classify_checkpoint_type(snapshot_type: SnapshotType, is_unaligned: bool) -> CheckpointType:
    if snapshot_type.is_savepoint:
        # Savepoints are always aligned.
        if is_unaligned:
            raise InvalidStateError(
                "Currently the savepoint doesn't support unaligned checkpoint."
            )
        synchronous = getattr(snapshot_type, "synchronous", False)
        return CheckpointType.SYNC_SAVEPOINT if synchronous else CheckpointType.SAVEPOINT
    if is_unaligned:
        return CheckpointType.UNALIGNED_CHECKPOINT
    return CheckpointType.CHECKPOINT


__all__ = [
    "classify_checkpoint_type",
]
