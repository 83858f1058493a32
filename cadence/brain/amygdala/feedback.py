"""Feedback tracking - how well patterns are received by users.

Every signal updates the pattern's effectiveness to the positive share
of all feedback (0-100). When more than 60% of feedback is negative,
confidence also drops by 0.2 (floor 0.1).
"""

from __future__ import annotations

import logging

from ...domain.models import MIN_CONFIDENCE, FeedbackResult
from ..hippocampus.store import PatternStore

logger = logging.getLogger(__name__)


class FeedbackTracker:
    """Records positive/negative feedback and recomputes scores."""

    def __init__(
        self,
        store: PatternStore,
        negative_threshold: float = 0.6,
        confidence_penalty: float = 0.2,
    ) -> None:
        """Initialize the tracker.

        Args:
            store: Store holding the patterns and their feedback.
            negative_threshold: Negative share above which confidence drops.
            confidence_penalty: Confidence removed when the threshold is crossed.
        """
        self._store = store
        self.negative_threshold = negative_threshold
        self.confidence_penalty = confidence_penalty

    def record(self, pattern_id: str, is_positive: bool) -> FeedbackResult:
        """Record one feedback signal.

        Unknown pattern ids are reported as a failed result; no feedback
        record is created for them.

        Args:
            pattern_id: Pattern the feedback refers to.
            is_positive: Whether the user liked the pattern.

        Returns:
            FeedbackResult with the updated scores and counters.
        """
        if pattern_id not in self._store:
            logger.warning(f"Feedback for unknown pattern '{pattern_id}' ignored")
            return FeedbackResult(
                success=False,
                pattern_id=pattern_id,
                error=f"Pattern '{pattern_id}' not found",
            )

        record = self._store.increment_feedback(pattern_id, is_positive)
        effectiveness = record.positive_ratio * 100

        confidence = None
        if record.negative_ratio > self.negative_threshold:
            current = self._store.get(pattern_id)
            confidence = max(current.confidence - self.confidence_penalty, MIN_CONFIDENCE)

        pattern = self._store.update_scores(
            pattern_id, confidence=confidence, effectiveness=effectiveness
        )
        self._store.notify()

        return FeedbackResult(
            success=True,
            pattern_id=pattern_id,
            effectiveness=pattern.effectiveness,
            confidence=pattern.confidence,
            positive=record.positive,
            negative=record.negative,
            total=record.total,
        )
