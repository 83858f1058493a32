"""Domain layer - Core business logic and models."""

from .exceptions import (
    CadenceError,
    PatternNotFoundError,
    SnapshotValidationError,
    ValidationError,
)
from .models import (
    CommunicationProfile,
    CommunicationRhythm,
    FeedbackRecord,
    FeedbackResult,
    LearnResult,
    MaintenanceResult,
    MicroPattern,
    PatternMetadata,
    PatternType,
    Snapshot,
    SpeechTempo,
)

__all__ = [
    # Exceptions
    "CadenceError",
    "ValidationError",
    "PatternNotFoundError",
    "SnapshotValidationError",
    # Models
    "MicroPattern",
    "PatternMetadata",
    "PatternType",
    "FeedbackRecord",
    "CommunicationRhythm",
    "SpeechTempo",
    "CommunicationProfile",
    "Snapshot",
    "LearnResult",
    "FeedbackResult",
    "MaintenanceResult",
]
