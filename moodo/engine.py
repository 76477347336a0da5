"""
Tool: Recommendation Engine
Purpose: Run scheduling and recommendation passes against the live stores

A pass is a pure function of (task snapshot, current mood, current time,
personalization state). The engine gathers those inputs, runs the pipeline
and keeps the last result around for the presentation layer to read.

    mood store ──┐
    task store ──┼─> UserContext ─> generator ─> ranker ─> top N
    learning  ───┘                                    (N <= capacity)

Single Pass Rule:
    Only one generation runs at a time. A call that arrives while another
    is in flight returns None immediately - it is not queued. A pass that
    has been in flight longer than ``generation_timeout_seconds`` is
    treated as abandoned and the next caller takes over.

Usage:
    engine = RecommendationEngine(task_store, mood_store)
    await engine.load_learning_data()

    recommendations = await engine.generate_recommendations()
    await engine.record_feedback(recommendations[0], accepted=True)

    short_list = engine.schedule()
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime

from moodo.affect.classifier import AffectClassifier
from moodo.config_models import MoodoConfig, load_config
from moodo.learning.persistence import (
    LearningStateRepository,
    PersistenceError,
    SQLiteKeyValueStore,
)
from moodo.learning.personalization import PersonalizationStore
from moodo.logging_config import pass_context
from moodo.models import (
    InteractionRecord,
    Mood,
    MoodSuccessPattern,
    Recommendation,
    Task,
    UserContext,
)
from moodo.recommendations.generator import RecommendationGenerator
from moodo.recommendations.ranker import RecommendationRanker
from moodo.scheduling.compatibility import get_profile
from moodo.scheduling.scorer import TaskScorer
from moodo.scheduling.selector import ScheduleSelector, capacity
from moodo.stores import MoodStore, TaskStore

logger = logging.getLogger(__name__)


class GenerationGuard:
    """Mutex-guarded in-flight flag with a stale-pass timeout.

    ``try_enter`` hands out a token; only the holder of the current token
    can clear the flag, so an abandoned pass that finishes late cannot
    release a newer pass's guard.
    """

    def __init__(self, timeout_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.timeout_seconds = timeout_seconds
        self.clock = clock
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._token: int | None = None
        self._started_at = 0.0

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._token is not None

    def try_enter(self) -> int | None:
        with self._lock:
            now = self.clock()
            if self._token is not None:
                elapsed = now - self._started_at
                if elapsed < self.timeout_seconds:
                    return None
                logger.warning(
                    f"Generation pass {self._token} in flight for {elapsed:.1f}s, "
                    f"resetting guard"
                )
            self._token = next(self._tokens)
            self._started_at = now
            return self._token

    def exit(self, token: int) -> None:
        with self._lock:
            if self._token == token:
                self._token = None


def analyze_user_context(
    mood: Mood,
    now: datetime,
    tasks: list[Task],
    personalization: PersonalizationStore | None = None,
) -> UserContext:
    """Build the context snapshot for one recommendation pass."""
    profile = get_profile(mood)

    created_today = [task for task in tasks if task.created_at.date() == now.date()]
    if created_today:
        completion_rate = sum(1 for task in created_today if task.completed) / len(created_today)
    else:
        completion_rate = 0.5

    factor = personalization.boost(mood, now.hour) if personalization else 0.0

    return UserContext(
        hour=now.hour,
        day_of_week=now.isoweekday(),
        mood=mood,
        recent_completion_rate=completion_rate,
        energy_level=profile.energy_level,
        stress_level=profile.stress_level,
        personalization_factor=factor,
    )


class RecommendationEngine:
    """Explicitly constructed service wiring stores to the scoring pipeline.

    Args:
        task_store: Source of tasks; receives auto-classified affect tags.
        mood_store: Source of the current mood.
        personalization: Feedback logs (built from config when omitted).
        repository: Persistence for the feedback logs (SQLite when omitted).
        config: Engine configuration (loaded from args/moodo.yaml when omitted).
        classifier: Shared affect classifier.
        clock: Returns "now"; injectable for tests.
    """

    def __init__(
        self,
        task_store: TaskStore,
        mood_store: MoodStore,
        personalization: PersonalizationStore | None = None,
        repository: LearningStateRepository | None = None,
        config: MoodoConfig | None = None,
        classifier: AffectClassifier | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config or load_config()
        self.task_store = task_store
        self.mood_store = mood_store
        self.clock = clock

        settings = self.config.personalization
        self.personalization = personalization or PersonalizationStore(
            max_interactions=settings.max_interactions,
            max_mood_patterns=settings.max_mood_patterns,
            window_hours=settings.window_hours,
            clock=clock,
        )
        self.repository = repository or LearningStateRepository(
            SQLiteKeyValueStore(self.config.storage.resolved_db_path()),
            key=settings.storage_key,
        )

        self.classifier = classifier or AffectClassifier()
        self.scorer = TaskScorer(self.classifier)
        self.selector = ScheduleSelector(self.scorer)
        self.generator = RecommendationGenerator(self.classifier)
        self.ranker = RecommendationRanker(self.personalization)
        self.guard = GenerationGuard(self.config.engine.generation_timeout_seconds)

        self.recommendations: list[Recommendation] = []
        self.last_confidence = 0.0
        self._loaded = False
        self._storage_lock = asyncio.Lock()

    # ─────────────────────────────────────────────────────────────────────
    # Inputs
    # ─────────────────────────────────────────────────────────────────────

    def current_mood(self) -> Mood:
        mood = self.mood_store.current_mood()
        return mood if mood is not None else self.config.engine.default_mood

    def auto_classify(self, tasks: list[Task]) -> int:
        """Tag untagged tasks from their titles and write the tags back."""
        classified = 0
        for task in tasks:
            if task.affect is not None:
                continue
            affect, confidence = self.classifier.classify(task.title)
            self.task_store.update_affect(task.id, affect)
            task.affect = affect
            classified += 1
            logger.debug(
                f"Classified task {task.id} as {affect.value} (confidence {confidence:.2f})"
            )
        return classified

    def context(self, now: datetime | None = None) -> UserContext:
        return analyze_user_context(
            self.current_mood(),
            now or self.clock(),
            self.task_store.list_tasks(),
            self.personalization,
        )

    # ─────────────────────────────────────────────────────────────────────
    # Scheduling
    # ─────────────────────────────────────────────────────────────────────

    def schedule(self, max_count: int | None = None, now: datetime | None = None) -> list[Task]:
        """Short list of existing tasks that fit the current mood."""
        now = now or self.clock()
        tasks = self.task_store.list_tasks()
        self.auto_classify(tasks)
        return self.selector.select(tasks, self.current_mood(), max_count=max_count, now=now)

    # ─────────────────────────────────────────────────────────────────────
    # Recommendations
    # ─────────────────────────────────────────────────────────────────────

    async def generate(
        self, starter: bool = False, now: datetime | None = None
    ) -> list[Recommendation] | None:
        """Run one pass; starter content takes precedence when requested."""
        if starter:
            return await self.generate_initial_recommendations(now)
        return await self.generate_recommendations(now)

    async def generate_recommendations(
        self, now: datetime | None = None
    ) -> list[Recommendation] | None:
        """Contextual pass. Returns None when another pass is in flight."""
        return await self._run_pass(starter=False, now=now)

    async def generate_initial_recommendations(
        self, now: datetime | None = None
    ) -> list[Recommendation] | None:
        """Starter pass for first-time users with no tasks yet."""
        return await self._run_pass(starter=True, now=now)

    async def _run_pass(self, starter: bool, now: datetime | None) -> list[Recommendation] | None:
        token = self.guard.try_enter()
        if token is None:
            logger.info("Generation already in flight, skipping")
            return None

        try:
            with pass_context(generation=token, starter=starter):
                await self._ensure_loaded()

                context = self.context(now)
                if starter:
                    candidates = self.generator.starter(context.mood)
                    limit = self.config.engine.starter_display_limit
                else:
                    candidates = self.generator.generate_for_context(context)
                    limit = self.config.engine.display_limit

                ranked = self.ranker.rank(candidates, context)
                limit = min(limit, capacity(context.mood, context.hour))

                self.last_confidence = average_score(ranked)
                self.recommendations = ranked[:limit]

                logger.info(
                    f"Generated {len(self.recommendations)} recommendations "
                    f"(mood={context.mood.value}, hour={context.hour})"
                )
                return list(self.recommendations)
        finally:
            self.guard.exit(token)

    # ─────────────────────────────────────────────────────────────────────
    # Learning
    # ─────────────────────────────────────────────────────────────────────

    async def load_learning_data(self) -> None:
        """Load persisted feedback; anything unreadable means empty state."""
        async with self._storage_lock:
            await self._load_state()

    async def _load_state(self) -> None:
        state = await asyncio.to_thread(self.repository.load)
        if state is None:
            logger.debug("No stored learning state, starting fresh")
        self.personalization.load_state(state)
        self._loaded = True

    async def _ensure_loaded(self) -> None:
        # First load runs once; callers arriving during it wait on the lock.
        if self._loaded:
            return
        async with self._storage_lock:
            if not self._loaded:
                await self._load_state()

    async def save_learning_data(self) -> bool:
        try:
            # Snapshot under the lock so the last save written holds every record.
            async with self._storage_lock:
                await asyncio.to_thread(self.repository.save, self.personalization.to_state())
            return True
        except PersistenceError as e:
            logger.warning(f"Learning state not saved: {e}")
            return False

    async def record_feedback(
        self, recommendation: Recommendation, accepted: bool
    ) -> InteractionRecord:
        await self._ensure_loaded()
        record = self.personalization.record_interaction(
            recommendation.category, recommendation.affect, accepted
        )
        await self.save_learning_data()
        return record

    async def record_mood_pattern(
        self, mood: Mood, success_rate: float, hour: int | None = None
    ) -> MoodSuccessPattern:
        await self._ensure_loaded()
        if hour is None:
            hour = self.clock().hour
        pattern = self.personalization.record_mood_pattern(mood, hour, success_rate)
        await self.save_learning_data()
        return pattern


def average_score(recommendations: list[Recommendation]) -> float:
    if not recommendations:
        return 0.0
    scores = [r.score if r.score is not None else r.confidence for r in recommendations]
    return sum(scores) / len(scores)
