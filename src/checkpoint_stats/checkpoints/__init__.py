"""Checkpoint statistics records and their translation."""

from .classifier import classify_checkpoint_type
from .codec import decode_checkpoint_statistics, encode_checkpoint_statistics
from .models import (
    CheckpointStatistics,
    CheckpointType,
    CompletedCheckpointStatistics,
    FailedCheckpointStatistics,
    InProgressCheckpointStatistics,
    TaskCheckpointStatistics,
)
from .translator import generate_checkpoint_statistics

__all__ = [
    "CheckpointType",
    "CheckpointStatistics",
    "CompletedCheckpointStatistics",
    "FailedCheckpointStatistics",
    "InProgressCheckpointStatistics",
    "TaskCheckpointStatistics",
    "classify_checkpoint_type",
    "generate_checkpoint_statistics",
    "encode_checkpoint_statistics",
    "decode_checkpoint_statistics",
]
