"""Snapshot file repository - persists learning state between runs."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

from filelock import FileLock

from ..domain.models import Snapshot
from .snapshot import SnapshotCodec

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """Loads and saves the snapshot JSON file under a file lock.

    The lock is shared by the MCP server and the maintenance worker so
    that neither reads a half-written file. Writes go to a temporary file
    in the same directory and are moved into place atomically.
    """

    def __init__(
        self,
        path: Path,
        lock_path: Path | None = None,
        lock_timeout: float = 10.0,
        codec: SnapshotCodec | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            path: Snapshot file location.
            lock_path: Lock file location (default: next to the snapshot).
            lock_timeout: Seconds to wait for the lock.
            codec: Snapshot codec used for parsing and serialization.
        """
        self.path = path
        self.codec = codec if codec is not None else SnapshotCodec()
        lock_file = lock_path or path.with_name(f"{path.name}.lock")
        self.lock = FileLock(lock_file, timeout=lock_timeout)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Snapshot | None:
        """Read and validate the snapshot file.

        Returns:
            The snapshot, or None if no file has been written yet.

        Raises:
            SnapshotValidationError: If the file content is invalid.
            filelock.Timeout: If the lock cannot be acquired in time.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.lock:
            if not self.path.exists():
                return None
            text = self.path.read_text(encoding="utf-8")
        snapshot = self.codec.loads(text)
        logger.debug(f"Loaded {len(snapshot.patterns)} patterns from {self.path}")
        return snapshot

    def save(self, data: dict[str, Any]) -> None:
        """Write an encoded snapshot atomically.

        Raises:
            filelock.Timeout: If the lock cannot be acquired in time.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        text = self.codec.dumps(data, indent=2)
        with self.lock:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        logger.debug(f"Saved snapshot to {self.path}")

    def move_aside(self) -> Path | None:
        """Move the snapshot file into a timestamped backup.

        Used when the file cannot be parsed, so that the next save does
        not overwrite the only copy of the old state.

        Returns:
            The backup path, or None if there was no snapshot file.
        """
        with self.lock:
            if not self.path.exists():
                return None
            backup_dir = self.path.parent / "backups"
            backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            backup_path = backup_dir / f"{self.path.name}_{timestamp}"
            os.replace(self.path, backup_path)
        logger.warning(f"Moved unreadable snapshot to {backup_path}")
        return backup_path
