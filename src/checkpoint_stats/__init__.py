"""Public package exports for the checkpoint statistics client."""

from .client import CheckpointStatsClient
from .config import CheckpointStatsClientConfig

__all__ = ["CheckpointStatsClient", "CheckpointStatsClientConfig"]
