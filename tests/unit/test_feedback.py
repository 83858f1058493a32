"""Unit tests for the FeedbackTracker."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from cadence.brain.amygdala.feedback import FeedbackTracker
from cadence.brain.hippocampus.store import PatternStore


@pytest.fixture
def tracker(store: PatternStore, make_pattern) -> FeedbackTracker:
    store.insert_or_merge(make_pattern(confidence=0.5, effectiveness=50.0))
    return FeedbackTracker(store)


class TestFeedbackTracker:
    """Tests for recording feedback signals."""

    def test_unknown_pattern(self, tracker: FeedbackTracker, store: PatternStore) -> None:
        result = tracker.record("missing", True)

        assert result.success is False
        assert result.error == "Pattern 'missing' not found"
        assert store.feedback_for("missing") is None

    def test_positive_feedback(self, tracker: FeedbackTracker) -> None:
        result = tracker.record("p1", True)

        assert result.success is True
        assert result.effectiveness == 100.0
        assert result.confidence == 0.5
        assert (result.positive, result.negative, result.total) == (1, 0, 1)

    def test_mixed_feedback(self, tracker: FeedbackTracker, store: PatternStore) -> None:
        tracker.record("p1", True)
        result = tracker.record("p1", False)

        assert result.effectiveness == 50.0
        # 50% negative does not cross the penalty threshold
        assert result.confidence == 0.5
        assert store.get("p1").effectiveness == 50.0

    def test_negative_feedback_lowers_confidence(self, tracker: FeedbackTracker) -> None:
        result = tracker.record("p1", False)

        assert result.effectiveness == 0.0
        assert result.confidence == pytest.approx(0.3)

    def test_confidence_floor(self, tracker: FeedbackTracker, store: PatternStore) -> None:
        for _ in range(5):
            tracker.record("p1", False)

        assert store.get("p1").confidence == pytest.approx(0.1)

    def test_effectiveness_tracks_positive_share(
        self, tracker: FeedbackTracker, store: PatternStore
    ) -> None:
        for index in range(20):
            tracker.record("p1", index % 4 != 0)

        record = store.feedback_for("p1")
        assert record.total == 20
        assert store.get("p1").effectiveness == pytest.approx(75.0)

    def test_notifies_on_success(self, tracker: FeedbackTracker, store: PatternStore) -> None:
        observer = MagicMock()
        store.events.subscribe(observer)

        tracker.record("missing", True)
        observer.assert_not_called()

        tracker.record("p1", True)
        observer.assert_called_once()
