"""Learning event bus - notifies observers when the pattern set changes."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..domain.models import MicroPattern

logger = logging.getLogger(__name__)

PatternCallback = Callable[[list[MicroPattern]], None]


class LearningEventBus:
    """Ordered publish/subscribe list of pattern observers.

    Observers are called synchronously in registration order. Every
    observer of one event receives the same list, a deep copy of the
    pattern set taken when the event was published.
    """

    def __init__(self) -> None:
        self._subscribers: list[PatternCallback] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: PatternCallback) -> None:
        """Register an observer. Registering the same callback twice is a no-op."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: PatternCallback) -> None:
        """Remove an observer. Unknown callbacks are ignored."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, patterns: list[MicroPattern]) -> None:
        """Deliver a snapshot of the pattern set to every observer.

        An observer that raises is logged and skipped; the remaining
        observers still receive the event.
        """
        snapshot = [pattern.model_copy(deep=True) for pattern in patterns]
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception(f"Pattern observer {callback!r} failed")

    def clear(self) -> None:
        """Drop all observers."""
        self._subscribers.clear()
