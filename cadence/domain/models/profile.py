"""Communication profile models.

A profile bundles what was learned about one speaker: the micro-patterns,
the rhythm, and optional hand-tuned style sections that the content
generator consults.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from .base import CamelModel, ensure_utc, utc_now
from .pattern import MicroPattern
from .rhythm import CommunicationRhythm


class BaseCharacteristics(CamelModel):
    """Overall style dials (0-100, 50 is neutral)."""

    formality: float = Field(default=50.0, ge=0.0, le=100.0)
    emotionality: float = Field(default=50.0, ge=0.0, le=100.0)
    directness: float = Field(default=50.0, ge=0.0, le=100.0)
    enthusiasm: float = Field(default=50.0, ge=0.0, le=100.0)


class EmotionalExpression(CamelModel):
    intensity: float = Field(default=50.0, ge=0.0, le=100.0)
    expression_style: Literal["subtle", "moderate", "expressive"] = "moderate"
    empathy_level: float = Field(default=50.0, ge=0.0, le=100.0)
    emotional_range: list[str] = Field(default_factory=list)
    trigger_patterns: list[str] = Field(default_factory=list)


class LogicalStructure(CamelModel):
    preferred_structure: Literal["linear", "circular", "branching"] = "linear"
    argument_style: Literal["fact-based", "emotion-based", "mixed"] = "mixed"
    transition_style: Literal["smooth", "abrupt", "gradual"] = "smooth"
    conclusion_pattern: str = ""


class InteractionPattern(CamelModel):
    initiation_style: Literal["proactive", "reactive", "balanced"] = "balanced"
    response_speed: Literal["immediate", "thoughtful", "delayed"] = "thoughtful"
    topic_guidance: Literal["strong", "moderate", "weak"] = "moderate"
    question_frequency: float = Field(default=0.0, ge=0.0)
    confirmation_seeking: float = Field(default=0.0, ge=0.0)


class AdaptationProfile(CamelModel):
    """How the style shifts in one context (shifts are -100 to +100)."""

    formality_shift: float = Field(default=0.0, ge=-100.0, le=100.0)
    emotionality_shift: float = Field(default=0.0, ge=-100.0, le=100.0)
    directness_shift: float = Field(default=0.0, ge=-100.0, le=100.0)
    enthusiasm_shift: float = Field(default=0.0, ge=-100.0, le=100.0)
    vocabulary_changes: list[str] = Field(default_factory=list)
    structure_changes: list[str] = Field(default_factory=list)
    avoided_patterns: list[str] = Field(default_factory=list)


class ContextualAdaptation(CamelModel):
    business_context: AdaptationProfile = Field(default_factory=AdaptationProfile)
    casual_context: AdaptationProfile = Field(default_factory=AdaptationProfile)
    support_context: AdaptationProfile = Field(default_factory=AdaptationProfile)
    persuasion_context: AdaptationProfile = Field(default_factory=AdaptationProfile)


class LearningMetrics(CamelModel):
    total_conversations: int = Field(default=0, ge=0)
    pattern_accuracy: float = Field(default=0.0, ge=0.0, le=100.0)
    adaptation_success: float = Field(default=0.0, ge=0.0, le=100.0)
    last_updated: datetime = Field(default_factory=utc_now)
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)

    @field_validator("last_updated")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class CommunicationProfile(CamelModel):
    """Everything learned about one speaker's communication style."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., description="Display name of the speaker")
    base_characteristics: BaseCharacteristics = Field(
        default_factory=BaseCharacteristics
    )
    micro_patterns: list[MicroPattern] = Field(default_factory=list)
    rhythm: CommunicationRhythm = Field(default_factory=CommunicationRhythm)
    emotional_expression: EmotionalExpression | None = None
    logical_structure: LogicalStructure | None = None
    interaction_pattern: InteractionPattern | None = None
    contextual_adaptation: ContextualAdaptation | None = None
    learning_metrics: LearningMetrics = Field(default_factory=LearningMetrics)
