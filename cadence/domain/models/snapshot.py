"""Snapshot schema for exporting and importing learned state."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator, model_validator

from .base import CamelModel, ensure_utc
from .pattern import FeedbackRecord, MicroPattern
from .profile import CommunicationProfile


class Snapshot(CamelModel):
    """Complete, serializable copy of the learning state.

    The JSON form is::

        {
            "patterns": [[id, MicroPattern], ...],
            "profiles": [[id, CommunicationProfile], ...],
            "feedback": [[id, FeedbackRecord], ...],
            "exportDate": "2024-01-01T00:00:00+00:00"
        }
    """

    patterns: list[tuple[str, MicroPattern]]
    profiles: list[tuple[str, CommunicationProfile]] = Field(default_factory=list)
    feedback: list[tuple[str, FeedbackRecord]]
    export_date: datetime | None = None

    @field_validator("export_date")
    @classmethod
    def _ensure_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @model_validator(mode="after")
    def _entries_are_consistent(self) -> Snapshot:
        seen: set[str] = set()
        for key, pattern in self.patterns:
            if key != pattern.id:
                raise ValueError(
                    f"pattern entry key '{key}' does not match pattern id '{pattern.id}'"
                )
            if key in seen:
                raise ValueError(f"duplicate pattern id '{key}'")
            seen.add(key)

        profile_ids: set[str] = set()
        for key, profile in self.profiles:
            if key != profile.id:
                raise ValueError(
                    f"profile entry key '{key}' does not match profile id '{profile.id}'"
                )
            if key in profile_ids:
                raise ValueError(f"duplicate profile id '{key}'")
            profile_ids.add(key)

        feedback_ids = [key for key, _ in self.feedback]
        if len(feedback_ids) != len(set(feedback_ids)):
            raise ValueError("duplicate feedback entries")
        return self
