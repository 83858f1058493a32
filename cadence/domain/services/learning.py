"""Pattern Learning Service - Core business logic for Cadence.

This is the main service class that coordinates pattern learning.
It delegates specialized logic to:
- MicroPatternExtractor: Role-based micro-pattern extraction
- RhythmAnalyzer: Sentence length and tempo statistics
- PatternStore: Merge, decay and cleanup of learned patterns
- FeedbackTracker: User feedback and effectiveness
- SnapshotCodec: Export/import of the learning state

One service instance holds one session's state. Construct a new one
per user or session and call dispose() when done.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from ...brain.amygdala.feedback import FeedbackTracker
from ...brain.hippocampus.store import PatternStore
from ...brain.neocortex.extractors import MicroPatternExtractor
from ...brain.temporal_lobe.rhythm import RhythmAnalyzer
from ...brain.temporal_lobe.segmenter import segment
from ...infra.events import PatternCallback
from ...infra.snapshot import SnapshotCodec
from ..exceptions import PatternNotFoundError, ValidationError
from ..models import (
    CommunicationProfile,
    CommunicationRhythm,
    FeedbackResult,
    LearningMetrics,
    LearnResult,
    MaintenanceResult,
    MicroPattern,
)
from ..models.base import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class PatternLearningService:
    """Service for conversational pattern learning.

    This class acts as a facade/coordinator, delegating specialized
    logic to the brain modules while maintaining a simple public
    interface.
    """

    def __init__(
        self,
        store: PatternStore | None = None,
        extractor: MicroPatternExtractor | None = None,
        rhythm_analyzer: RhythmAnalyzer | None = None,
        feedback_tracker: FeedbackTracker | None = None,
        codec: SnapshotCodec | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Pattern store owning the learned state.
            extractor: Micro-pattern extractor.
            rhythm_analyzer: Rhythm analyzer.
            feedback_tracker: Feedback tracker bound to the same store.
            codec: Snapshot codec for export/import.
        """
        # PatternStore defines __len__, so an empty store is falsy
        self._store = store if store is not None else PatternStore()
        self._extractor = extractor if extractor is not None else MicroPatternExtractor()
        self._rhythm = rhythm_analyzer if rhythm_analyzer is not None else RhythmAnalyzer()
        self._feedback = (
            feedback_tracker
            if feedback_tracker is not None
            else FeedbackTracker(self._store)
        )
        self._codec = codec if codec is not None else SnapshotCodec()

    @property
    def store(self) -> PatternStore:
        return self._store

    def _validate_transcripts(self, transcripts: Any) -> list[str]:
        """Validate transcript input."""
        if isinstance(transcripts, str) or not isinstance(transcripts, (list, tuple)):
            raise ValidationError(
                f"Transcripts must be a list of strings, got {type(transcripts).__name__}"
            )
        for i, transcript in enumerate(transcripts):
            if not isinstance(transcript, str):
                raise ValidationError(
                    f"Transcript {i} must be a string, got {type(transcript).__name__}"
                )
        return list(transcripts)

    # =========================================================================
    # Analysis (pure, no store interaction)
    # =========================================================================

    def analyze_micro_patterns(
        self, transcripts: list[str], speaker_label: str = ""
    ) -> list[MicroPattern]:
        """Extract micro-patterns without touching the store.

        Args:
            transcripts: Conversation transcripts of one speaker.
            speaker_label: Speaker the transcripts belong to.

        Returns:
            Patterns for all roles. Empty for empty input.

        Raises:
            ValidationError: If transcripts is not a list of strings.
        """
        transcripts = self._validate_transcripts(transcripts)
        patterns = self._extractor.extract(transcripts)
        logger.debug(
            f"Extracted {len(patterns)} patterns for speaker '{speaker_label}' "
            f"from {len(transcripts)} transcripts"
        )
        return patterns

    def analyze_communication_rhythm(
        self, transcripts: list[str]
    ) -> CommunicationRhythm:
        """Compute rhythm statistics for transcripts.

        Raises:
            ValidationError: If transcripts is not a list of strings.
        """
        transcripts = self._validate_transcripts(transcripts)
        return self._rhythm.analyze(transcripts)

    # =========================================================================
    # Learning
    # =========================================================================

    def learn_from_new_conversation(
        self,
        transcripts: list[str],
        speaker_label: str = "",
        now: datetime | None = None,
    ) -> LearnResult:
        """Extract patterns and merge them into the store.

        Observers are notified once the whole batch is merged.

        Args:
            transcripts: Conversation transcripts of one speaker.
            speaker_label: Speaker the transcripts belong to.
            now: Merge timestamp (default: current time).

        Returns:
            LearnResult with created and merged pattern ids.
        """
        candidates = self.analyze_micro_patterns(transcripts, speaker_label)
        created, merged = self._store.learn(candidates, now=now)
        logger.info(
            f"Learned from '{speaker_label}': {len(created)} new, "
            f"{len(merged)} merged, {len(self._store)} total patterns"
        )
        return LearnResult(
            speaker=speaker_label,
            candidates=len(candidates),
            created_ids=created,
            merged_ids=merged,
            total_patterns=len(self._store),
        )

    def record_user_feedback(self, pattern_id: str, is_positive: bool) -> FeedbackResult:
        """Record a positive or negative signal for a pattern.

        Returns:
            FeedbackResult; success is False for unknown pattern ids.
        """
        return self._feedback.record(pattern_id, is_positive)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_all_patterns(self) -> list[MicroPattern]:
        return self._store.all_patterns()

    def get_pattern(self, pattern_id: str) -> MicroPattern:
        """Get a single pattern.

        Raises:
            PatternNotFoundError: If the pattern does not exist.
        """
        pattern = self._store.get(pattern_id)
        if pattern is None:
            raise PatternNotFoundError(pattern_id)
        return pattern

    def get_most_effective_patterns(self, limit: int = 10) -> list[MicroPattern]:
        """Patterns ranked by effectiveness * confidence, highest first.

        Raises:
            ValidationError: If limit is negative.
        """
        if limit < 0:
            raise ValidationError(f"Limit must be non-negative, got {limit}")
        patterns = sorted(
            self._store.all_patterns(), key=lambda p: p.score, reverse=True
        )
        return patterns[:limit]

    def get_recent_patterns(
        self, days: float = 7, now: datetime | None = None
    ) -> list[MicroPattern]:
        """Patterns discovered within the last `days`, newest first.

        A window reaching past the earliest representable date covers
        every pattern.

        Raises:
            ValidationError: If days is negative or NaN.
        """
        if math.isnan(days) or days < 0:
            raise ValidationError(f"Days must be non-negative, got {days}")
        reference = ensure_utc(now) if now else utc_now()
        try:
            cutoff = reference - timedelta(days=days)
        except OverflowError:
            cutoff = datetime.min.replace(tzinfo=timezone.utc)
        recent = [
            p for p in self._store.all_patterns() if p.metadata.discovered > cutoff
        ]
        recent.sort(key=lambda p: p.metadata.discovered, reverse=True)
        return recent

    # =========================================================================
    # Observers
    # =========================================================================

    def on_pattern_learned(self, callback: PatternCallback) -> None:
        self._store.events.subscribe(callback)

    def remove_pattern_callback(self, callback: PatternCallback) -> None:
        self._store.events.unsubscribe(callback)

    # =========================================================================
    # Maintenance (invoked by an external timer)
    # =========================================================================

    def decay_stale_patterns(self, now: datetime | None = None) -> list[str]:
        return self._store.decay_stale_patterns(now)

    def boost_well_received_patterns(self) -> list[str]:
        return self._store.boost_well_received_patterns()

    def adapt_patterns_based_on_usage(
        self, now: datetime | None = None
    ) -> MaintenanceResult:
        """Decay stale patterns, then boost well-received ones."""
        return self._store.adapt_patterns_based_on_usage(now)

    def cleanup_low_quality_patterns(self) -> list[str]:
        """Delete low-quality patterns; returns the removed ids."""
        return self._store.cleanup_low_quality_patterns()

    def run_maintenance(self, now: datetime | None = None) -> MaintenanceResult:
        """Run usage adaptation followed by cleanup."""
        result = self.adapt_patterns_based_on_usage(now)
        result.removed_ids = self.cleanup_low_quality_patterns()
        return result

    # =========================================================================
    # Profiles
    # =========================================================================

    def save_profile(self, profile: CommunicationProfile) -> None:
        self._store.save_profile(profile)

    def get_all_profiles(self) -> list[CommunicationProfile]:
        return self._store.all_profiles()

    def build_profile(
        self, name: str, transcripts: list[str], speaker_label: str = ""
    ) -> CommunicationProfile:
        """Assemble a profile from a fresh analysis of transcripts.

        The profile is not saved; pass it to save_profile() to keep it.

        Raises:
            ValidationError: If name is empty or transcripts are invalid.
        """
        if not name or not name.strip():
            raise ValidationError("Profile name cannot be empty")
        patterns = self.analyze_micro_patterns(transcripts, speaker_label)
        rhythm = self.analyze_communication_rhythm(transcripts)
        conversations = sum(1 for t in transcripts if segment(t))
        confidence = (
            sum(p.confidence for p in patterns) / len(patterns) if patterns else 0.0
        )
        return CommunicationProfile(
            id=f"profile_{uuid.uuid4().hex}",
            name=name.strip(),
            micro_patterns=patterns,
            rhythm=rhythm,
            learning_metrics=LearningMetrics(
                total_conversations=conversations,
                confidence_score=confidence,
            ),
        )

    # =========================================================================
    # Snapshot export/import
    # =========================================================================

    def export_learning_data(self) -> dict[str, Any]:
        """Export patterns, feedback and profiles as a JSON-compatible dict."""
        return self._codec.encode(
            patterns=self._store.all_patterns(),
            feedback=self._store.all_feedback(),
            profiles=self._store.all_profiles(),
        )

    def import_learning_data(self, data: Any) -> None:
        """Replace the whole learning state with a snapshot.

        The snapshot is validated before anything changes; on failure the
        current state is left untouched.

        Raises:
            SnapshotValidationError: If the data does not match the schema.
        """
        snapshot = self._codec.decode(data)
        self._store.replace(
            patterns=dict(snapshot.patterns),
            feedback=dict(snapshot.feedback),
            profiles=dict(snapshot.profiles),
        )
        logger.info(
            f"Imported {len(snapshot.patterns)} patterns, "
            f"{len(snapshot.feedback)} feedback records, "
            f"{len(snapshot.profiles)} profiles"
        )

    def dispose(self) -> None:
        """Drop all state and observers."""
        self._store.events.clear()
        self._store.clear()
