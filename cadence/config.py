"""Configuration settings for Cadence."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Config:
    """Cadence configuration."""

    # Data storage
    data_dir: Path = field(default_factory=lambda: Path.home() / ".cadence")
    snapshot_name: str = "learning_snapshot.json"

    # Extraction
    min_occurrences: int = 2
    max_candidates: int = 5
    max_examples: int = 5

    # Merge
    merge_threshold: float = 0.8

    # Usage adaptation
    stale_after_days: int = 7
    decay_step: float = 0.05
    boost_min_feedback: int = 5
    boost_ratio: float = 0.8

    # Cleanup
    cleanup_min_confidence: float = 0.2
    cleanup_min_feedback: int = 10
    cleanup_ratio: float = 0.3

    # Maintenance worker
    maintenance_interval_seconds: float = 300.0

    # Server
    server_transport: str = "stdio"
    server_host: str = "127.0.0.1"
    server_port: int = 8765

    @property
    def snapshot_path(self) -> Path:
        """Get the full snapshot file path."""
        return self.data_dir / self.snapshot_name

    @property
    def lock_path(self) -> Path:
        """Get the lock file guarding the snapshot."""
        return self.data_dir / f"{self.snapshot_name}.lock"

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        data_dir_str = os.environ.get("CADENCE_DATA_DIR")
        data_dir = Path(data_dir_str) if data_dir_str else Path.home() / ".cadence"

        return cls(
            data_dir=data_dir,
            snapshot_name=os.environ.get(
                "CADENCE_SNAPSHOT_NAME", "learning_snapshot.json"
            ),
            min_occurrences=int(os.environ.get("CADENCE_MIN_OCCURRENCES", "2")),
            max_candidates=int(os.environ.get("CADENCE_MAX_CANDIDATES", "5")),
            max_examples=int(os.environ.get("CADENCE_MAX_EXAMPLES", "5")),
            merge_threshold=float(os.environ.get("CADENCE_MERGE_THRESHOLD", "0.8")),
            stale_after_days=int(os.environ.get("CADENCE_STALE_DAYS", "7")),
            decay_step=float(os.environ.get("CADENCE_DECAY_STEP", "0.05")),
            boost_min_feedback=int(
                os.environ.get("CADENCE_BOOST_MIN_FEEDBACK", "5")
            ),
            boost_ratio=float(os.environ.get("CADENCE_BOOST_RATIO", "0.8")),
            cleanup_min_confidence=float(
                os.environ.get("CADENCE_CLEANUP_MIN_CONFIDENCE", "0.2")
            ),
            cleanup_min_feedback=int(
                os.environ.get("CADENCE_CLEANUP_MIN_FEEDBACK", "10")
            ),
            cleanup_ratio=float(os.environ.get("CADENCE_CLEANUP_RATIO", "0.3")),
            maintenance_interval_seconds=float(
                os.environ.get("CADENCE_MAINTENANCE_INTERVAL", "300")
            ),
            server_transport=os.environ.get("CADENCE_TRANSPORT", "stdio"),
            server_host=os.environ.get("CADENCE_HOST", "127.0.0.1"),
            server_port=int(os.environ.get("CADENCE_PORT", "8765")),
        )


# Module-level config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the config (for testing)."""
    global _config
    _config = None
