"""Shared test fixtures for Moodo tests.

This module provides common fixtures used across all test modules:
- Database isolation with temporary files
- A fixed reference time so hour-dependent rules are deterministic
- Task factories and in-memory stores
- A fully wired engine backed by in-memory persistence

Usage:
    def test_something(engine, now):
        recommendations = await engine.generate_recommendations(now)
"""

import os
import tempfile
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest

from moodo.config_models import MoodoConfig
from moodo.engine import RecommendationEngine
from moodo.learning.persistence import InMemoryKeyValueStore, LearningStateRepository
from moodo.learning.personalization import PersonalizationStore
from moodo.models import Affect, Mood, Priority, Task
from moodo.stores import InMemoryMoodStore, InMemoryTaskStore


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent

# Tuesday afternoon
FIXED_NOW = datetime(2026, 3, 10, 15, 0)


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_db() -> Generator[Path, None, None]:
    """Create a temporary database file for testing.

    The database file is automatically deleted after the test completes.

    Yields:
        Path to the temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    # Cleanup
    if db_path.exists():
        os.unlink(db_path)


# ─────────────────────────────────────────────────────────────────────────────
# Time Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def now() -> datetime:
    """Fixed reference time (15:00, inside the afternoon window)."""
    return FIXED_NOW


# ─────────────────────────────────────────────────────────────────────────────
# Task Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def make_task(now: datetime):
    """Factory for tasks with sensible defaults.

    Returns:
        Callable accepting Task fields as keyword arguments
    """
    counter = iter(range(1, 10_000))

    def factory(**overrides) -> Task:
        fields = {
            "id": f"task_{next(counter)}",
            "title": "Untitled task",
            "priority": Priority.MEDIUM,
            "affect": Affect.ROUTINE,
            "created_at": now,
        }
        fields.update(overrides)
        return Task(**fields)

    return factory


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def mood_store() -> InMemoryMoodStore:
    return InMemoryMoodStore(Mood.STRESSED)


# ─────────────────────────────────────────────────────────────────────────────
# Learning Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(kv_store: InMemoryKeyValueStore) -> LearningStateRepository:
    return LearningStateRepository(kv_store)


@pytest.fixture
def personalization(now: datetime) -> PersonalizationStore:
    return PersonalizationStore(clock=lambda: now)


# ─────────────────────────────────────────────────────────────────────────────
# Engine Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def config() -> MoodoConfig:
    """Default configuration, never read from disk."""
    return MoodoConfig()


@pytest.fixture
def engine(task_store, mood_store, personalization, repository, config, now):
    """Engine wired to in-memory stores with a frozen clock."""
    return RecommendationEngine(
        task_store,
        mood_store,
        personalization=personalization,
        repository=repository,
        config=config,
        clock=lambda: now,
    )
