"""Maintenance Worker - Periodic usage adaptation and cleanup.

This module implements the periodic trigger for the learning engine.
Each run:

1. Loads the persisted snapshot
2. Decays stale patterns and boosts well-received ones
3. Removes low-quality patterns
4. Saves the snapshot if anything changed

The worker holds the snapshot file lock for the whole run. The MCP
server reloads the snapshot under the same lock before every tool call,
so both can run side by side without overwriting each other.
"""

from __future__ import annotations

import logging
import signal
import time
from datetime import datetime

from filelock import Timeout

from ..config import Config, get_config
from ..container import Container
from ..domain.models import MaintenanceResult

logger = logging.getLogger(__name__)


class MaintenanceWorker:
    """Runs decay and cleanup on the persisted learning state."""

    def __init__(
        self,
        config: Config | None = None,
        interval: float | None = None,
        lock_timeout: float = 5.0,
    ) -> None:
        """Initialize the maintenance worker.

        Args:
            config: Cadence configuration. Uses default if not provided.
            interval: Seconds between runs (default: from config).
            lock_timeout: Seconds to wait for the snapshot lock.
        """
        self.config = config or get_config()
        self.interval = (
            interval if interval is not None else self.config.maintenance_interval_seconds
        )
        self.lock_timeout = lock_timeout
        self._running = False

    def _handle_signal(self, signum: int, frame: object) -> None:
        """Handle shutdown signals gracefully."""
        logger.info(f"Received signal {signum}, shutting down...")
        self._running = False

    def run_once(self, now: datetime | None = None) -> MaintenanceResult | None:
        """Run one maintenance pass.

        A failing run is logged and reported as skipped; the snapshot is
        left as it was.

        Args:
            now: Reference time for decay (default: current time).

        Returns:
            The maintenance result, or None if the run was skipped.
        """
        container = Container.create(self.config)
        lock = container.repository.lock
        try:
            with lock.acquire(timeout=self.lock_timeout):
                if not container.load_state():
                    logger.info("No snapshot found, nothing to maintain")
                    return MaintenanceResult()

                result = container.learning_service.run_maintenance(now)
                if result.changed:
                    container.save_state()
                logger.info(
                    f"Maintenance complete: {len(result.decayed_ids)} decayed, "
                    f"{len(result.boosted_ids)} boosted, "
                    f"{len(result.removed_ids)} removed"
                )
                return result
        except Timeout:
            logger.info("Could not acquire snapshot lock. Will retry next time.")
            return None
        except Exception as e:
            logger.exception(f"Maintenance worker error: {e}")
            return None
        finally:
            container.close()

    def run_forever(self) -> None:
        """Run maintenance every `interval` seconds until signalled."""
        signal.signal(signal.SIGTERM, self._handle_signal)
        signal.signal(signal.SIGINT, self._handle_signal)

        logger.info(f"Maintenance worker started (interval {self.interval}s)")
        logger.info(f"Snapshot: {self.config.snapshot_path}")
        self._running = True
        while self._running:
            self.run_once()
            deadline = time.monotonic() + self.interval
            while self._running and time.monotonic() < deadline:
                time.sleep(min(1.0, max(deadline - time.monotonic(), 0.0)))
        logger.info("Maintenance worker stopped")
