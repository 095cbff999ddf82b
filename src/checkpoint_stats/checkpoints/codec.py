"""Tagged encode/decode of checkpoint statistics records.

Field names are part of the public REST contract and must not be renamed.
``state_size`` holds the checkpointed data size and ``savepointFormat`` is the
only camel-case key; both are kept as older web UIs read them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from ..core.errors import CheckpointStatsValidationError
from .models import (
    CheckpointStatistics,
    CheckpointType,
    CompletedCheckpointStatistics,
    FailedCheckpointStatistics,
    InProgressCheckpointStatistics,
    TaskCheckpointStatistics,
)
from .sources import CheckpointStatsStatus
from .validation import as_bool, as_enum, as_int, as_object, as_str, as_str_or_none

DISCRIMINATOR = "className"

FIELD_NAME_ID = "id"
FIELD_NAME_STATUS = "status"
FIELD_NAME_IS_SAVEPOINT = "is_savepoint"
FIELD_NAME_SAVEPOINT_FORMAT = "savepointFormat"
FIELD_NAME_TRIGGER_TIMESTAMP = "trigger_timestamp"
FIELD_NAME_LATEST_ACK_TIMESTAMP = "latest_ack_timestamp"
FIELD_NAME_CHECKPOINTED_SIZE = "checkpointed_size"
FIELD_NAME_STATE_SIZE = "state_size"
FIELD_NAME_DURATION = "end_to_end_duration"
FIELD_NAME_ALIGNMENT_BUFFERED = "alignment_buffered"
FIELD_NAME_PROCESSED_DATA = "processed_data"
FIELD_NAME_PERSISTED_DATA = "persisted_data"
FIELD_NAME_NUM_SUBTASKS = "num_subtasks"
FIELD_NAME_NUM_ACK_SUBTASKS = "num_acknowledged_subtasks"
FIELD_NAME_CHECKPOINT_TYPE = "checkpoint_type"
FIELD_NAME_TASKS = "tasks"
FIELD_NAME_EXTERNAL_PATH = "external_path"
FIELD_NAME_DISCARDED = "discarded"
FIELD_NAME_FAILURE_TIMESTAMP = "failure_timestamp"
FIELD_NAME_FAILURE_MESSAGE = "failure_message"

_VARIANTS: dict[str, type[CheckpointStatistics]] = {
    InProgressCheckpointStatistics.KIND: InProgressCheckpointStatistics,
    CompletedCheckpointStatistics.KIND: CompletedCheckpointStatistics,
    FailedCheckpointStatistics.KIND: FailedCheckpointStatistics,
}

# (attribute, wire key) pairs of integer counters shared by records and tasks.
_TASK_INT_FIELDS: tuple[tuple[str, str], ...] = (
    ("latest_ack_timestamp", FIELD_NAME_LATEST_ACK_TIMESTAMP),
    ("checkpointed_size", FIELD_NAME_CHECKPOINTED_SIZE),
    ("state_size", FIELD_NAME_STATE_SIZE),
    ("end_to_end_duration", FIELD_NAME_DURATION),
    ("alignment_buffered", FIELD_NAME_ALIGNMENT_BUFFERED),
    ("processed_data", FIELD_NAME_PROCESSED_DATA),
    ("persisted_data", FIELD_NAME_PERSISTED_DATA),
    ("num_subtasks", FIELD_NAME_NUM_SUBTASKS),
    ("num_acknowledged_subtasks", FIELD_NAME_NUM_ACK_SUBTASKS),
)
_RECORD_INT_FIELDS: tuple[tuple[str, str], ...] = (
    ("trigger_timestamp", FIELD_NAME_TRIGGER_TIMESTAMP),
    *_TASK_INT_FIELDS,
)

RecordT = TypeVar("RecordT", bound=CheckpointStatistics)


def encode_task_statistics(task: TaskCheckpointStatistics) -> dict[str, object]:
    record: dict[str, object] = {
        FIELD_NAME_ID: task.id,
        FIELD_NAME_STATUS: task.status.name,
    }
    for attribute, key in _TASK_INT_FIELDS:
        record[key] = getattr(task, attribute)
    return record


def decode_task_statistics(value: object) -> TaskCheckpointStatistics:
    record = as_object(value, field_name=FIELD_NAME_TASKS)
    ints = {
        attribute: as_int(record.get(key), field_name=key)
        for attribute, key in _TASK_INT_FIELDS
    }
    try:
        return TaskCheckpointStatistics(
            id=as_int(record.get(FIELD_NAME_ID), field_name=FIELD_NAME_ID),
            status=as_enum(
                record.get(FIELD_NAME_STATUS),
                CheckpointStatsStatus,
                field_name=FIELD_NAME_STATUS,
            ),
            **ints,
        )
    except ValueError as exc:
        raise CheckpointStatsValidationError(str(exc)) from exc


def encode_task_statistics_map(
    tasks: Mapping[str, TaskCheckpointStatistics],
) -> dict[str, dict[str, object]]:
    return {vertex_id: encode_task_statistics(task) for vertex_id, task in tasks.items()}


def decode_task_statistics_map(value: object) -> dict[str, TaskCheckpointStatistics]:
    raw = as_object(value, field_name=FIELD_NAME_TASKS)
    return {vertex_id: decode_task_statistics(task) for vertex_id, task in raw.items()}


def encode_checkpoint_statistics(statistics: CheckpointStatistics) -> dict[str, object]:
    record: dict[str, object] = {
        DISCRIMINATOR: statistics.KIND,
        FIELD_NAME_ID: statistics.id,
        FIELD_NAME_STATUS: statistics.status.name,
        FIELD_NAME_IS_SAVEPOINT: statistics.is_savepoint,
        FIELD_NAME_SAVEPOINT_FORMAT: statistics.savepoint_format,
    }
    for attribute, key in _RECORD_INT_FIELDS:
        record[key] = getattr(statistics, attribute)
    record[FIELD_NAME_CHECKPOINT_TYPE] = statistics.checkpoint_type.name
    record[FIELD_NAME_TASKS] = encode_task_statistics_map(statistics.tasks)

    if isinstance(statistics, CompletedCheckpointStatistics):
        record[FIELD_NAME_EXTERNAL_PATH] = statistics.external_path
        record[FIELD_NAME_DISCARDED] = statistics.discarded
    elif isinstance(statistics, FailedCheckpointStatistics):
        record[FIELD_NAME_FAILURE_TIMESTAMP] = statistics.failure_timestamp
        record[FIELD_NAME_FAILURE_MESSAGE] = statistics.failure_message
    return record


def _decode_base_fields(record: Mapping[str, object]) -> dict[str, object]:
    fields: dict[str, object] = {
        "id": as_int(record.get(FIELD_NAME_ID), field_name=FIELD_NAME_ID),
        "status": as_enum(
            record.get(FIELD_NAME_STATUS),
            CheckpointStatsStatus,
            field_name=FIELD_NAME_STATUS,
        ),
        "is_savepoint": as_bool(
            record.get(FIELD_NAME_IS_SAVEPOINT),
            field_name=FIELD_NAME_IS_SAVEPOINT,
        ),
        "savepoint_format": as_str_or_none(
            record.get(FIELD_NAME_SAVEPOINT_FORMAT),
            field_name=FIELD_NAME_SAVEPOINT_FORMAT,
        ),
        "checkpoint_type": as_enum(
            record.get(FIELD_NAME_CHECKPOINT_TYPE),
            CheckpointType,
            field_name=FIELD_NAME_CHECKPOINT_TYPE,
        ),
        "tasks": decode_task_statistics_map(record.get(FIELD_NAME_TASKS)),
    }
    for attribute, key in _RECORD_INT_FIELDS:
        fields[attribute] = as_int(record.get(key), field_name=key)
    return fields


def _decode_variant_fields(
    record: Mapping[str, object],
    variant: type[CheckpointStatistics],
) -> dict[str, object]:
    if variant is CompletedCheckpointStatistics:
        return {
            "external_path": as_str_or_none(
                record.get(FIELD_NAME_EXTERNAL_PATH),
                field_name=FIELD_NAME_EXTERNAL_PATH,
            ),
            "discarded": as_bool(
                record.get(FIELD_NAME_DISCARDED),
                field_name=FIELD_NAME_DISCARDED,
            ),
        }
    if variant is FailedCheckpointStatistics:
        return {
            "failure_timestamp": as_int(
                record.get(FIELD_NAME_FAILURE_TIMESTAMP),
                field_name=FIELD_NAME_FAILURE_TIMESTAMP,
            ),
            "failure_message": as_str_or_none(
                record.get(FIELD_NAME_FAILURE_MESSAGE),
                field_name=FIELD_NAME_FAILURE_MESSAGE,
            ),
        }
    return {}


def resolve_variant(record: Mapping[str, object]) -> type[CheckpointStatistics]:
    kind = record.get(DISCRIMINATOR)
    variant = _VARIANTS.get(kind) if isinstance(kind, str) else None
    if variant is None:
        raise CheckpointStatsValidationError(f"{DISCRIMINATOR} is invalid")
    return variant


def decode_checkpoint_statistics(record: Mapping[str, object]) -> CheckpointStatistics:
    if not isinstance(record, Mapping):
        raise CheckpointStatsValidationError("checkpoint statistics record is invalid")
    variant = resolve_variant(record)
    fields = {**_decode_base_fields(record), **_decode_variant_fields(record, variant)}
    try:
        return variant(**fields)
    except ValueError as exc:
        raise CheckpointStatsValidationError(str(exc)) from exc


def decode_checkpoint_statistics_as(
    record: Mapping[str, object],
    variant: type[RecordT],
) -> RecordT:
    decoded = decode_checkpoint_statistics(record)
    if not isinstance(decoded, variant):
        raise CheckpointStatsValidationError("checkpoint statistics kind mismatch")
    return decoded


__all__ = [
    "DISCRIMINATOR",
    "encode_task_statistics",
    "decode_task_statistics",
    "encode_task_statistics_map",
    "decode_task_statistics_map",
    "encode_checkpoint_statistics",
    "decode_checkpoint_statistics",
    "decode_checkpoint_statistics_as",
    "resolve_variant",
]
