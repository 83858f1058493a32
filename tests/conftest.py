"""Pytest fixtures for Cadence tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from cadence.brain.hippocampus.store import PatternStore
from cadence.config import Config, reset_config
from cadence.container import Container, reset_container
from cadence.domain.models import MicroPattern, PatternMetadata, PatternType
from cadence.domain.services import PatternLearningService


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_data_dir: Path) -> Generator[Config, None, None]:
    """Create a test configuration."""
    config = Config(
        data_dir=temp_data_dir,
        snapshot_name="test_snapshot.json",
        merge_threshold=0.8,
        min_occurrences=2,
        max_candidates=5,
        max_examples=5,
        stale_after_days=7,
    )
    yield config


@pytest.fixture
def container(test_config: Config) -> Generator[Container, None, None]:
    """Create a test container with isolated dependencies."""
    # Reset any global state
    reset_config()
    reset_container()

    container = Container.create(test_config)
    yield container

    # Cleanup
    container.close()
    reset_container()
    reset_config()


@pytest.fixture
def store() -> PatternStore:
    """Create an empty pattern store."""
    return PatternStore()


@pytest.fixture
def service() -> Generator[PatternLearningService, None, None]:
    """Create a learning service with its own store."""
    service = PatternLearningService()
    yield service
    service.dispose()


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_pattern(now: datetime) -> Callable[..., MicroPattern]:
    """Factory for MicroPattern instances with sensible defaults."""

    def _make(
        pattern_id: str = "p1",
        text: str = "hello world",
        pattern_type: PatternType = PatternType.LINGUISTIC,
        frequency: float = 0.5,
        confidence: float = 0.5,
        effectiveness: float = 50.0,
        examples: list[str] | None = None,
        discovered: datetime | None = None,
        last_seen: datetime | None = None,
        contexts: list[str] | None = None,
    ) -> MicroPattern:
        discovered = discovered or now - timedelta(hours=1)
        return MicroPattern(
            id=pattern_id,
            type=pattern_type,
            pattern=text,
            frequency=frequency,
            confidence=confidence,
            effectiveness=effectiveness,
            contexts=contexts if contexts is not None else ["conversation_start"],
            examples=examples if examples is not None else [f"{text} example"],
            metadata=PatternMetadata(
                discovered=discovered,
                last_seen=last_seen or discovered,
                variations=[],
            ),
        )

    return _make


@pytest.fixture(autouse=True)
def set_test_env(temp_data_dir: Path) -> Generator[None, None, None]:
    """Set environment variables for tests."""
    old_env = os.environ.get("CADENCE_DATA_DIR")
    os.environ["CADENCE_DATA_DIR"] = str(temp_data_dir)
    yield
    if old_env:
        os.environ["CADENCE_DATA_DIR"] = old_env
    else:
        os.environ.pop("CADENCE_DATA_DIR", None)
