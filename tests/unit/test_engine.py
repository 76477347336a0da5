"""Tests for moodo/engine.py"""

import asyncio
import json
import time
from datetime import timedelta

import pytest

from moodo.engine import (
    GenerationGuard,
    RecommendationEngine,
    analyze_user_context,
    average_score,
)
from moodo.learning.persistence import (
    DEFAULT_STORAGE_KEY,
    InMemoryKeyValueStore,
    LearningStateRepository,
    PersistenceError,
)
from moodo.models import Affect, Category, Mood, Priority
from moodo.recommendations import catalog
from moodo.stores import InMemoryMoodStore


class SlowRepository(LearningStateRepository):
    """Repository whose load blocks long enough for a second pass to arrive."""

    def load(self):
        time.sleep(0.2)
        return super().load()


class FailingRepository(LearningStateRepository):
    def save(self, state):
        raise PersistenceError("disk full")


class FakeClock:
    def __init__(self):
        self.value = 0.0

    def __call__(self):
        return self.value


class TestGenerationGuard:
    def test_enter_and_exit(self):
        guard = GenerationGuard(timeout_seconds=30)

        token = guard.try_enter()
        assert token is not None
        assert guard.in_flight is True
        assert guard.try_enter() is None

        guard.exit(token)
        assert guard.in_flight is False

    def test_stale_pass_is_reset(self):
        clock = FakeClock()
        guard = GenerationGuard(timeout_seconds=30, clock=clock)

        first = guard.try_enter()
        clock.value = 10
        assert guard.try_enter() is None

        clock.value = 31
        second = guard.try_enter()
        assert second is not None
        assert second != first

    def test_abandoned_pass_cannot_release_newer_guard(self):
        clock = FakeClock()
        guard = GenerationGuard(timeout_seconds=30, clock=clock)

        first = guard.try_enter()
        clock.value = 60
        second = guard.try_enter()

        guard.exit(first)
        assert guard.in_flight is True
        guard.exit(second)
        assert guard.in_flight is False


class TestAnalyzeUserContext:
    def test_completion_rate_over_tasks_created_today(self, make_task, now):
        tasks = [
            make_task(completed=True),
            make_task(completed=True),
            make_task(completed=True),
            make_task(completed=False),
            make_task(completed=False, created_at=now - timedelta(days=1)),
        ]

        context = analyze_user_context(Mood.FOCUSED, now, tasks)

        assert context.recent_completion_rate == pytest.approx(0.75)
        assert context.hour == 15
        assert context.day_of_week == 2
        assert context.energy_level == 0.7
        assert context.stress_level == 0.3
        assert context.personalization_factor == 0.0

    def test_no_tasks_today_defaults_to_half(self, now):
        assert analyze_user_context(Mood.CALM, now, []).recent_completion_rate == 0.5

    def test_personalization_factor(self, personalization, now):
        personalization.record_interaction(Category.WORK, Affect.FOCUSED, True)
        context = analyze_user_context(Mood.CALM, now, [], personalization)
        assert context.personalization_factor == pytest.approx(0.1)


class TestCurrentMood:
    def test_reads_mood_store(self, engine):
        assert engine.current_mood() == Mood.STRESSED

    def test_defaults_when_no_mood_recorded(self, task_store, repository, config):
        engine = RecommendationEngine(
            task_store, InMemoryMoodStore(), repository=repository, config=config
        )
        assert engine.current_mood() == Mood.ENERGIZED


class TestAutoClassify:
    def test_writes_affect_back_to_store(self, engine, task_store, make_task):
        untagged = make_task(title="Meditate before bed", affect=None)
        tagged = make_task(title="Meditate before bed", affect=Affect.ROUTINE)
        task_store.add(untagged)
        task_store.add(tagged)

        assert engine.auto_classify(task_store.list_tasks()) == 1
        assert task_store.get(untagged.id).affect == Affect.CALMING
        assert task_store.get(tagged.id).affect == Affect.ROUTINE

    def test_schedule_classifies_then_selects(self, engine, task_store, make_task, now):
        task_store.add(make_task(id="calm", title="Meditate before bed", affect=None,
                                 priority=Priority.LOW))
        task_store.add(make_task(id="tax", title="Tax return deadline!", affect=None,
                                 priority=Priority.HIGH, deadline_at=now))

        selected = engine.schedule(now=now)

        assert [task.id for task in selected] == ["calm"]
        assert task_store.get("tax").affect == Affect.STRESSFUL


class TestGenerateRecommendations:
    @pytest.mark.asyncio
    async def test_ranked_and_limited(self, engine, now):
        recommendations = await engine.generate_recommendations(now)

        assert [r.title for r in recommendations] == [
            "5-minute breathing break",
            "Creative break session",
        ]
        assert recommendations[0].score == pytest.approx(0.82)
        assert engine.recommendations == recommendations
        assert engine.last_confidence == pytest.approx((0.82 + 0.6825) / 2)

    @pytest.mark.asyncio
    async def test_display_limit(self, engine, config, now):
        config.engine.display_limit = 1
        recommendations = await engine.generate_recommendations(now)
        assert len(recommendations) == 1

    @pytest.mark.asyncio
    async def test_starter_pass(self, engine, mood_store, now):
        mood_store.set_mood(Mood.CALM)

        recommendations = await engine.generate(starter=True, now=now)

        assert [r.title for r in recommendations] == [
            entry["title"] for entry in catalog.STARTERS[Mood.CALM]
        ]

    @pytest.mark.asyncio
    async def test_starter_pass_bounded_by_capacity(self, engine, mood_store, now):
        mood_store.set_mood(Mood.TIRED)
        late = now.replace(hour=22)

        recommendations = await engine.generate_initial_recommendations(late)

        assert len(recommendations) == 2

    @pytest.mark.asyncio
    async def test_uses_clock_when_no_time_given(self, engine):
        recommendations = await engine.generate()
        assert recommendations[0].title == "5-minute breathing break"

    @pytest.mark.asyncio
    async def test_concurrent_pass_is_a_no_op(
        self, task_store, mood_store, personalization, config, kv_store, now
    ):
        engine = RecommendationEngine(
            task_store,
            mood_store,
            personalization=personalization,
            repository=SlowRepository(kv_store),
            config=config,
        )

        first, second = await asyncio.gather(
            engine.generate_recommendations(now),
            engine.generate_recommendations(now),
        )

        assert first is not None
        assert second is None
        assert engine.guard.in_flight is False

    @pytest.mark.asyncio
    async def test_guard_released_after_failure(self, engine, now):
        engine.ranker.rank = lambda candidates, context: 1 / 0

        with pytest.raises(ZeroDivisionError):
            await engine.generate_recommendations(now)

        assert engine.guard.in_flight is False


class TestLearning:
    @pytest.mark.asyncio
    async def test_feedback_is_persisted(self, engine, kv_store):
        recommendation = catalog.build(catalog.HIGH_STRESS)

        record = await engine.record_feedback(recommendation, accepted=True)

        assert record.category == Category.HEALTH
        stored = json.loads(kv_store.get(DEFAULT_STORAGE_KEY))
        assert stored["interactions"][0]["accepted"] is True
        assert stored["moodPatterns"] == []

    @pytest.mark.asyncio
    async def test_feedback_survives_reload(self, engine, task_store, mood_store, repository,
                                            config, now):
        await engine.record_feedback(catalog.build(catalog.HIGH_STRESS), accepted=False)

        fresh = RecommendationEngine(
            task_store, mood_store, repository=repository, config=config, clock=lambda: now
        )
        await fresh.load_learning_data()

        assert len(fresh.personalization.interactions) == 1
        assert fresh.personalization.boost(Mood.STRESSED, 15) == pytest.approx(-0.1)

    @pytest.mark.asyncio
    async def test_feedback_before_load_is_not_lost(self, engine, repository):
        repository.save({
            "interactions": [{"category": "work", "affect": "focused", "accepted": True,
                              "timestamp": "2026-03-10T09:00:00"}],
            "moodPatterns": [],
        })

        await engine.record_feedback(catalog.build(catalog.HIGH_STRESS), accepted=True)

        assert len(engine.personalization.interactions) == 2

    @pytest.mark.asyncio
    async def test_overlapping_feedback_loads_once(
        self, task_store, mood_store, config, kv_store
    ):
        engine = RecommendationEngine(
            task_store, mood_store, repository=SlowRepository(kv_store), config=config
        )
        recommendation = catalog.build(catalog.HIGH_STRESS)

        await asyncio.gather(
            engine.record_feedback(recommendation, True),
            engine.record_feedback(recommendation, False),
        )

        assert [r.accepted for r in engine.personalization.interactions] == [True, False]
        stored = json.loads(kv_store.get(DEFAULT_STORAGE_KEY))
        assert len(stored["interactions"]) == 2

    @pytest.mark.asyncio
    async def test_feedback_during_first_pass_is_kept(
        self, task_store, mood_store, config, kv_store, now
    ):
        engine = RecommendationEngine(
            task_store, mood_store, repository=SlowRepository(kv_store), config=config
        )

        record, recommendations = await asyncio.gather(
            engine.record_feedback(catalog.build(catalog.HIGH_STRESS), True),
            engine.generate_recommendations(now),
        )

        assert recommendations is not None
        assert engine.personalization.interactions == [record]
        stored = json.loads(kv_store.get(DEFAULT_STORAGE_KEY))
        assert len(stored["interactions"]) == 1

    @pytest.mark.asyncio
    async def test_save_failure_is_reported_not_raised(
        self, task_store, mood_store, config, kv_store
    ):
        engine = RecommendationEngine(
            task_store, mood_store, repository=FailingRepository(kv_store), config=config
        )

        record = await engine.record_feedback(catalog.build(catalog.HIGH_STRESS), True)

        assert record.accepted is True
        assert len(engine.personalization.interactions) == 1
        assert await engine.save_learning_data() is False

    @pytest.mark.asyncio
    async def test_corrupted_state_starts_empty(self, task_store, mood_store, config):
        store = InMemoryKeyValueStore({DEFAULT_STORAGE_KEY: "{broken"})
        engine = RecommendationEngine(
            task_store, mood_store, repository=LearningStateRepository(store), config=config
        )

        await engine.load_learning_data()

        assert engine.personalization.interactions == []

    @pytest.mark.asyncio
    async def test_mood_pattern_uses_clock_hour(self, engine, kv_store):
        pattern = await engine.record_mood_pattern(Mood.CALM, 0.8)

        assert pattern.hour == 15
        stored = json.loads(kv_store.get(DEFAULT_STORAGE_KEY))
        assert stored["moodPatterns"][0]["successRate"] == 0.8


class TestAverageScore:
    def test_empty(self):
        assert average_score([]) == 0.0

    def test_falls_back_to_confidence_when_unscored(self):
        recommendations = [catalog.build(catalog.HIGH_STRESS), catalog.build(catalog.LOW_ENERGY)]
        assert average_score(recommendations) == pytest.approx(0.85)
