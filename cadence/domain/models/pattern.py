"""Micro-pattern and feedback models."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator, model_validator

from .base import CamelModel, clamp, ensure_utc
from .enums import PatternType

MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0
MIN_EFFECTIVENESS = 0.0
MAX_EFFECTIVENESS = 100.0
MAX_EXAMPLES = 5


class PatternMetadata(CamelModel):
    """Discovery bookkeeping for a micro-pattern."""

    discovered: datetime = Field(..., description="Creation timestamp (immutable)")
    last_seen: datetime = Field(..., description="Most recent observation or merge")
    variations: list[str] = Field(
        default_factory=list, description="Short previews of contributing examples"
    )

    @field_validator("discovered", "last_seen")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _last_seen_not_before_discovered(self) -> PatternMetadata:
        if self.last_seen < self.discovered:
            self.last_seen = self.discovered
        return self


class MicroPattern(CamelModel):
    """A short recurring phrase characteristic of a speaker in one role.

    Confidence and effectiveness are clamped on construction and on every
    attribute assignment, so out-of-range values coming from merges,
    feedback, decay or imported data never leave the model.

    Examples:
    - "嗯， 我觉得" opening a conversation
    - "对吧" seeking agreement
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    type: PatternType = Field(..., description="Pattern category")
    pattern: str = Field(..., description="Canonical token sequence")
    frequency: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Share of the role sub-corpus matching this pattern (0.0-1.0)",
    )
    confidence: float = Field(
        default=MIN_CONFIDENCE,
        allow_inf_nan=False,
        description="Belief that the pattern is real (0.1-1.0)",
    )
    effectiveness: float = Field(
        default=MIN_EFFECTIVENESS,
        allow_inf_nan=False,
        description="Belief that the pattern is useful (0-100)",
    )
    contexts: list[str] = Field(default_factory=list, description="Role tags")
    examples: list[str] = Field(
        default_factory=list, description="Up to 5 illustrative source fragments"
    )
    metadata: PatternMetadata

    @field_validator("frequency")
    @classmethod
    def _clamp_frequency(cls, value: float) -> float:
        return clamp(value, 0.0, 1.0)

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return clamp(value, MIN_CONFIDENCE, MAX_CONFIDENCE)

    @field_validator("effectiveness")
    @classmethod
    def _clamp_effectiveness(cls, value: float) -> float:
        return clamp(value, MIN_EFFECTIVENESS, MAX_EFFECTIVENESS)

    @field_validator("examples")
    @classmethod
    def _limit_examples(cls, value: list[str]) -> list[str]:
        return value[:MAX_EXAMPLES]

    @property
    def score(self) -> float:
        """Ranking score used to pick the most effective patterns."""
        return self.effectiveness * self.confidence


class FeedbackRecord(CamelModel):
    """Positive/negative feedback counters for one pattern."""

    positive: int = Field(default=0, ge=0)
    negative: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _total_matches_counts(self) -> FeedbackRecord:
        if self.total != self.positive + self.negative:
            raise ValueError(
                f"total ({self.total}) must equal positive + negative "
                f"({self.positive} + {self.negative})"
            )
        return self

    @property
    def positive_ratio(self) -> float:
        return self.positive / self.total if self.total else 0.0

    @property
    def negative_ratio(self) -> float:
        return self.negative / self.total if self.total else 0.0
