"""Infrastructure layer - Event delivery, serialization and persistence."""

from .events import LearningEventBus, PatternCallback
from .repository import SnapshotRepository
from .snapshot import SnapshotCodec

__all__ = [
    "LearningEventBus",
    "PatternCallback",
    "SnapshotCodec",
    "SnapshotRepository",
]
