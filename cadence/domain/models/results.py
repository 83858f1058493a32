"""Result models for service operations."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LearnResult(BaseModel):
    """Result of learning from a new conversation."""

    speaker: str
    candidates: int = Field(default=0, description="Patterns extracted this round")
    created_ids: list[str] = Field(default_factory=list)
    merged_ids: list[str] = Field(default_factory=list)
    total_patterns: int = 0


class FeedbackResult(BaseModel):
    """Result of recording user feedback for a pattern."""

    success: bool
    pattern_id: str
    error: str | None = None
    effectiveness: float | None = None
    confidence: float | None = None
    positive: int = 0
    negative: int = 0
    total: int = 0


class MaintenanceResult(BaseModel):
    """Result of a decay/boost/cleanup maintenance run."""

    decayed_ids: list[str] = Field(default_factory=list)
    boosted_ids: list[str] = Field(default_factory=list)
    removed_ids: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.decayed_ids or self.boosted_ids or self.removed_ids)
