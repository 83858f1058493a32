"""Dependency injection container for Cadence."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from .brain.amygdala.feedback import FeedbackTracker
from .brain.hippocampus.store import PatternStore
from .brain.neocortex.extractors import MicroPatternExtractor
from .brain.neocortex.similarity import SimilarityMatcher
from .config import Config, get_config
from .domain.exceptions import SnapshotValidationError
from .domain.services import PatternLearningService
from .infra.events import LearningEventBus
from .infra.repository import SnapshotRepository
from .infra.snapshot import SnapshotCodec

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Dependency injection container.

    Manages the lifecycle of all application components with proper
    dependency injection.
    """

    config: Config
    _events: LearningEventBus | None = None
    _store: PatternStore | None = None
    _codec: SnapshotCodec | None = None
    _repository: SnapshotRepository | None = None
    _service: PatternLearningService | None = None

    @classmethod
    def create(cls, config: Config | None = None) -> Container:
        """Create a new container with the given config.

        Args:
            config: Optional config. Uses global config if not provided.

        Returns:
            A new Container instance.
        """
        return cls(config=config or get_config())

    @property
    def events(self) -> LearningEventBus:
        """Get the learning event bus (lazy initialization)."""
        if self._events is None:
            self._events = LearningEventBus()
        return self._events

    @property
    def store(self) -> PatternStore:
        """Get the pattern store (lazy initialization)."""
        if self._store is None:
            self._store = PatternStore(
                matcher=SimilarityMatcher(threshold=self.config.merge_threshold),
                events=self.events,
                max_examples=self.config.max_examples,
                stale_after_days=self.config.stale_after_days,
                decay_step=self.config.decay_step,
                boost_min_feedback=self.config.boost_min_feedback,
                boost_ratio=self.config.boost_ratio,
                cleanup_min_confidence=self.config.cleanup_min_confidence,
                cleanup_min_feedback=self.config.cleanup_min_feedback,
                cleanup_ratio=self.config.cleanup_ratio,
            )
        return self._store

    @property
    def codec(self) -> SnapshotCodec:
        """Get the snapshot codec (lazy initialization)."""
        if self._codec is None:
            self._codec = SnapshotCodec()
        return self._codec

    @property
    def repository(self) -> SnapshotRepository:
        """Get the snapshot repository (lazy initialization)."""
        if self._repository is None:
            self._repository = SnapshotRepository(
                path=self.config.snapshot_path,
                lock_path=self.config.lock_path,
                codec=self.codec,
            )
        return self._repository

    @property
    def learning_service(self) -> PatternLearningService:
        """Get the pattern learning service (lazy initialization)."""
        if self._service is None:
            self._service = PatternLearningService(
                store=self.store,
                extractor=MicroPatternExtractor(
                    min_occurrences=self.config.min_occurrences,
                    max_candidates=self.config.max_candidates,
                ),
                feedback_tracker=FeedbackTracker(self.store),
                codec=self.codec,
            )
        return self._service

    def load_state(self) -> bool:
        """Load the persisted snapshot into the service, if one exists.

        Returns:
            True if a snapshot was loaded.
        """
        snapshot = self.repository.load()
        if snapshot is None:
            return False
        self.learning_service.import_learning_data(snapshot)
        return True

    def save_state(self) -> None:
        """Persist the current learning state."""
        self.repository.save(self.learning_service.export_learning_data())

    @contextmanager
    def synchronized(self, save: bool = True) -> Iterator[PatternLearningService]:
        """Run one load-modify-save cycle under the snapshot lock.

        The snapshot is reloaded before the body runs, so changes written
        by the maintenance worker or another process are seen. An
        unreadable snapshot is moved aside and the in-memory state is
        kept. Nothing is saved if the body raises.

        Args:
            save: Whether to write the state back after the body.

        Raises:
            filelock.Timeout: If the lock cannot be acquired in time.
        """
        with self.repository.lock:
            try:
                self.load_state()
            except SnapshotValidationError as e:
                logger.error(f"Snapshot could not be loaded: {e}")
                self.repository.move_aside()
            yield self.learning_service
            if save:
                self.save_state()

    def close(self) -> None:
        """Release all components."""
        if self._service is not None:
            self._service.dispose()
        self._service = None
        self._store = None
        self._events = None
        self._repository = None


# Module-level container instance
_container: Container | None = None


def get_container() -> Container:
    """Get the global container instance.

    State is not loaded here; callers go through
    Container.synchronized(), which reloads the snapshot under its lock.
    """
    global _container
    if _container is None:
        _container = Container.create()
    return _container


def reset_container() -> None:
    """Reset the container (for testing)."""
    global _container
    if _container is not None:
        _container.close()
    _container = None
