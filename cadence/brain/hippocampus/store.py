"""Pattern Store - Authoritative in-memory state of learned patterns.

Owns every MicroPattern, FeedbackRecord and CommunicationProfile.
Other components propose changes through this API; the store applies
the merge, decay and cleanup policies:

- Merge: a candidate matching an existing pattern (same type, word
  overlap >= threshold) averages frequency, raises confidence by 0.1,
  unions examples (max 5) and bumps last_seen.
- Decay: patterns unseen for 7 days lose 0.05 confidence (floor 0.1).
- Boost: patterns with >5 feedback and >80% positive gain 0.1
  confidence and 5 effectiveness.
- Cleanup: confidence < 0.2, or >10 feedback with <30% positive,
  deletes the pattern and its feedback.

The store is not thread-safe. Hosts serving several threads or requests
must serialize access (one store per session, or an external lock).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ...domain.exceptions import PatternNotFoundError
from ...domain.models import (
    MAX_CONFIDENCE,
    MAX_EFFECTIVENESS,
    MIN_CONFIDENCE,
    CommunicationProfile,
    FeedbackRecord,
    MaintenanceResult,
    MicroPattern,
)
from ...domain.models.base import ensure_utc, utc_now
from ...infra.events import LearningEventBus
from ..neocortex.similarity import SimilarityMatcher

logger = logging.getLogger(__name__)


class PatternStore:
    """In-memory map of pattern id to MicroPattern plus feedback counts."""

    def __init__(
        self,
        matcher: SimilarityMatcher | None = None,
        events: LearningEventBus | None = None,
        max_examples: int = 5,
        merge_confidence_step: float = 0.1,
        stale_after_days: int = 7,
        decay_step: float = 0.05,
        boost_min_feedback: int = 5,
        boost_ratio: float = 0.8,
        boost_confidence_step: float = 0.1,
        boost_effectiveness_step: float = 5.0,
        cleanup_min_confidence: float = 0.2,
        cleanup_min_feedback: int = 10,
        cleanup_ratio: float = 0.3,
    ) -> None:
        """Initialize the store.

        Args:
            matcher: Similarity matcher deciding which patterns merge.
            events: Event bus notified when the pattern set changes.
            max_examples: Examples kept per pattern after a merge.
            merge_confidence_step: Confidence gained per merge.
            stale_after_days: Days without observation before decay applies.
            decay_step: Confidence lost per decay pass.
            boost_min_feedback: Feedback total a pattern must exceed to be boosted.
            boost_ratio: Positive ratio a pattern must exceed to be boosted.
            boost_confidence_step: Confidence gained per boost.
            boost_effectiveness_step: Effectiveness gained per boost.
            cleanup_min_confidence: Patterns below this confidence are deleted.
            cleanup_min_feedback: Feedback total a pattern must exceed to be
                judged by its positive ratio.
            cleanup_ratio: Positive ratio under which judged patterns are deleted.
        """
        self.matcher = matcher if matcher is not None else SimilarityMatcher()
        self.events = events if events is not None else LearningEventBus()
        self.max_examples = max_examples
        self.merge_confidence_step = merge_confidence_step
        self.stale_after_days = stale_after_days
        self.decay_step = decay_step
        self.boost_min_feedback = boost_min_feedback
        self.boost_ratio = boost_ratio
        self.boost_confidence_step = boost_confidence_step
        self.boost_effectiveness_step = boost_effectiveness_step
        self.cleanup_min_confidence = cleanup_min_confidence
        self.cleanup_min_feedback = cleanup_min_feedback
        self.cleanup_ratio = cleanup_ratio

        self._patterns: dict[str, MicroPattern] = {}
        self._feedback: dict[str, FeedbackRecord] = {}
        self._profiles: dict[str, CommunicationProfile] = {}

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._patterns

    # =========================================================================
    # Read access (copies, never live references)
    # =========================================================================

    def get(self, pattern_id: str) -> MicroPattern | None:
        pattern = self._patterns.get(pattern_id)
        return pattern.model_copy(deep=True) if pattern is not None else None

    def all_patterns(self) -> list[MicroPattern]:
        """All patterns in insertion order."""
        return [pattern.model_copy(deep=True) for pattern in self._patterns.values()]

    def feedback_for(self, pattern_id: str) -> FeedbackRecord | None:
        record = self._feedback.get(pattern_id)
        return record.model_copy() if record is not None else None

    def all_feedback(self) -> dict[str, FeedbackRecord]:
        return {key: record.model_copy() for key, record in self._feedback.items()}

    def all_profiles(self) -> list[CommunicationProfile]:
        return [profile.model_copy(deep=True) for profile in self._profiles.values()]

    # =========================================================================
    # Learning
    # =========================================================================

    def learn(
        self, candidates: list[MicroPattern], now: datetime | None = None
    ) -> tuple[list[str], list[str]]:
        """Insert or merge a batch of candidates, then notify observers once.

        Args:
            candidates: Freshly extracted patterns.
            now: Merge timestamp (default: current time).

        Returns:
            Tuple of (created ids, merged ids). A merged id is the id of the
            existing pattern that absorbed the candidate.
        """
        created: list[str] = []
        merged: list[str] = []
        for candidate in candidates:
            pattern, was_merged = self._insert_or_merge(candidate, now)
            (merged if was_merged else created).append(pattern.id)
        self.notify()
        return created, merged

    def insert_or_merge(
        self, candidate: MicroPattern, now: datetime | None = None
    ) -> tuple[MicroPattern, bool]:
        """Merge a candidate into a similar pattern or insert it as new.

        Does not notify observers; use learn() for batches.

        Returns:
            Tuple of (resulting pattern copy, whether a merge happened).
        """
        pattern, was_merged = self._insert_or_merge(candidate, now)
        return pattern.model_copy(deep=True), was_merged

    def _insert_or_merge(
        self, candidate: MicroPattern, now: datetime | None
    ) -> tuple[MicroPattern, bool]:
        existing = self.matcher.find_match(candidate, list(self._patterns.values()))
        if existing is None:
            stored = candidate.model_copy(deep=True)
            self._patterns[stored.id] = stored
            logger.debug(f"New pattern {stored.id}: '{stored.pattern}'")
            return stored, False

        self._merge(existing, candidate, ensure_utc(now) if now else utc_now())
        logger.debug(f"Merged candidate '{candidate.pattern}' into {existing.id}")
        return existing, True

    def _merge(
        self, existing: MicroPattern, candidate: MicroPattern, now: datetime
    ) -> None:
        existing.frequency = (existing.frequency + candidate.frequency) / 2
        existing.confidence = min(
            existing.confidence + self.merge_confidence_step, MAX_CONFIDENCE
        )
        examples = list(dict.fromkeys([*existing.examples, *candidate.examples]))
        existing.examples = examples[: self.max_examples]
        existing.metadata.last_seen = max(now, existing.metadata.discovered)

    # =========================================================================
    # Score updates (feedback)
    # =========================================================================

    def update_scores(
        self,
        pattern_id: str,
        confidence: float | None = None,
        effectiveness: float | None = None,
    ) -> MicroPattern:
        """Set confidence and/or effectiveness; values are clamped.

        Raises:
            PatternNotFoundError: If the pattern does not exist.
        """
        pattern = self._require(pattern_id)
        if confidence is not None:
            pattern.confidence = confidence
        if effectiveness is not None:
            pattern.effectiveness = effectiveness
        return pattern.model_copy(deep=True)

    def increment_feedback(self, pattern_id: str, is_positive: bool) -> FeedbackRecord:
        """Count one feedback signal for an existing pattern.

        Raises:
            PatternNotFoundError: If the pattern does not exist.
        """
        self._require(pattern_id)
        record = self._feedback.setdefault(pattern_id, FeedbackRecord())
        if is_positive:
            record.positive += 1
        else:
            record.negative += 1
        record.total += 1
        return record.model_copy()

    def _require(self, pattern_id: str) -> MicroPattern:
        pattern = self._patterns.get(pattern_id)
        if pattern is None:
            raise PatternNotFoundError(pattern_id)
        return pattern

    # =========================================================================
    # Usage adaptation
    # =========================================================================

    def decay_stale_patterns(self, now: datetime | None = None) -> list[str]:
        """Lower confidence of patterns not seen within the stale window.

        Args:
            now: Reference time (default: current time).

        Returns:
            Ids whose confidence actually decreased.
        """
        reference = ensure_utc(now) if now else utc_now()
        cutoff = reference - timedelta(days=self.stale_after_days)

        decayed = []
        for pattern_id, pattern in self._patterns.items():
            if pattern.metadata.last_seen >= cutoff:
                continue
            before = pattern.confidence
            pattern.confidence = max(before - self.decay_step, MIN_CONFIDENCE)
            if pattern.confidence < before:
                decayed.append(pattern_id)
        return decayed

    def boost_well_received_patterns(self) -> list[str]:
        """Raise confidence and effectiveness of patterns with good feedback.

        Returns:
            Ids of patterns that qualified for the boost.
        """
        boosted = []
        for pattern_id, pattern in self._patterns.items():
            record = self._feedback.get(pattern_id)
            if record is None:
                continue
            if (
                record.total > self.boost_min_feedback
                and record.positive_ratio > self.boost_ratio
            ):
                pattern.confidence = min(
                    pattern.confidence + self.boost_confidence_step, MAX_CONFIDENCE
                )
                pattern.effectiveness = min(
                    pattern.effectiveness + self.boost_effectiveness_step,
                    MAX_EFFECTIVENESS,
                )
                boosted.append(pattern_id)
        return boosted

    def adapt_patterns_based_on_usage(
        self, now: datetime | None = None
    ) -> MaintenanceResult:
        """Run decay, then the feedback boost.

        A pattern can be both decayed and boosted in the same pass.
        """
        decayed = self.decay_stale_patterns(now)
        boosted = self.boost_well_received_patterns()
        if decayed or boosted:
            logger.info(
                f"Usage adaptation: {len(decayed)} decayed, {len(boosted)} boosted"
            )
        return MaintenanceResult(decayed_ids=decayed, boosted_ids=boosted)

    def cleanup_low_quality_patterns(self) -> list[str]:
        """Delete low-confidence and poorly received patterns.

        Deleting a pattern also deletes its feedback record. Observers are
        notified when anything was removed.

        Returns:
            Ids of deleted patterns.
        """
        to_remove = []
        for pattern_id, pattern in self._patterns.items():
            if pattern.confidence < self.cleanup_min_confidence:
                to_remove.append(pattern_id)
                continue
            record = self._feedback.get(pattern_id)
            if (
                record is not None
                and record.total > self.cleanup_min_feedback
                and record.positive_ratio < self.cleanup_ratio
            ):
                to_remove.append(pattern_id)

        for pattern_id in to_remove:
            del self._patterns[pattern_id]
            self._feedback.pop(pattern_id, None)

        if to_remove:
            logger.info(f"Cleanup removed {len(to_remove)} low-quality patterns")
            self.notify()
        return to_remove

    # =========================================================================
    # Profiles
    # =========================================================================

    def save_profile(self, profile: CommunicationProfile) -> None:
        self._profiles[profile.id] = profile.model_copy(deep=True)

    # =========================================================================
    # Bulk state
    # =========================================================================

    def replace(
        self,
        patterns: dict[str, MicroPattern],
        feedback: dict[str, FeedbackRecord],
        profiles: dict[str, CommunicationProfile] | None = None,
    ) -> None:
        """Swap in a complete new state, then notify observers.

        Feedback for ids without a pattern is dropped.
        """
        orphaned = [key for key in feedback if key not in patterns]
        if orphaned:
            logger.warning(
                f"Dropping feedback for {len(orphaned)} unknown patterns: {orphaned}"
            )

        new_patterns = {key: p.model_copy(deep=True) for key, p in patterns.items()}
        new_feedback = {
            key: record.model_copy()
            for key, record in feedback.items()
            if key in patterns
        }
        new_profiles = {
            key: profile.model_copy(deep=True)
            for key, profile in (profiles or {}).items()
        }

        self._patterns = new_patterns
        self._feedback = new_feedback
        self._profiles = new_profiles
        self.notify()

    def notify(self) -> None:
        """Publish the current pattern set to observers."""
        self.events.publish(list(self._patterns.values()))

    def clear(self) -> None:
        """Remove all patterns, feedback and profiles without notifying."""
        self._patterns.clear()
        self._feedback.clear()
        self._profiles.clear()
