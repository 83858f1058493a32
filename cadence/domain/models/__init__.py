"""Domain models for Cadence.

This package provides all domain models, organized by concern:
- enums: PatternType, SpeechTempo
- pattern: MicroPattern, PatternMetadata, FeedbackRecord
- rhythm: CommunicationRhythm
- profile: CommunicationProfile and its style sections
- snapshot: Snapshot
- results: LearnResult, FeedbackResult, MaintenanceResult
"""

from .enums import PatternType, SpeechTempo
from .pattern import (
    MAX_CONFIDENCE,
    MAX_EFFECTIVENESS,
    MAX_EXAMPLES,
    MIN_CONFIDENCE,
    MIN_EFFECTIVENESS,
    FeedbackRecord,
    MicroPattern,
    PatternMetadata,
)
from .profile import (
    AdaptationProfile,
    BaseCharacteristics,
    CommunicationProfile,
    ContextualAdaptation,
    EmotionalExpression,
    InteractionPattern,
    LearningMetrics,
    LogicalStructure,
)
from .results import FeedbackResult, LearnResult, MaintenanceResult
from .rhythm import CommunicationRhythm
from .snapshot import Snapshot

__all__ = [
    # Enums
    "PatternType",
    "SpeechTempo",
    # Pattern models
    "MicroPattern",
    "PatternMetadata",
    "FeedbackRecord",
    "MIN_CONFIDENCE",
    "MAX_CONFIDENCE",
    "MIN_EFFECTIVENESS",
    "MAX_EFFECTIVENESS",
    "MAX_EXAMPLES",
    # Rhythm
    "CommunicationRhythm",
    # Profile models
    "CommunicationProfile",
    "BaseCharacteristics",
    "EmotionalExpression",
    "LogicalStructure",
    "InteractionPattern",
    "AdaptationProfile",
    "ContextualAdaptation",
    "LearningMetrics",
    # Snapshot
    "Snapshot",
    # Result models
    "LearnResult",
    "FeedbackResult",
    "MaintenanceResult",
]
