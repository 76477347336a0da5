"""Tests for moodo/recommendations/generator.py"""

import pytest

from moodo.models import Affect, Category, Mood, Provenance, UserContext
from moodo.recommendations import catalog
from moodo.recommendations.generator import RecommendationGenerator


@pytest.fixture
def generator():
    return RecommendationGenerator()


def titles(recommendations):
    return [r.title for r in recommendations]


class TestContextRules:
    def test_afternoon_creative_only(self, generator):
        recommendations = generator.generate(
            Mood.CREATIVE, hour=15, stress_level=0.2, energy_level=0.5
        )

        assert len(recommendations) == 1
        recommendation = recommendations[0]
        assert recommendation.title == "Creative break session"
        assert recommendation.category == Category.CREATIVE
        assert recommendation.affect == Affect.CREATIVE
        assert recommendation.provenance == Provenance.TEMPORAL
        assert recommendation.confidence == 0.76

    def test_high_energy_morning(self, generator):
        recommendations = generator.generate(
            Mood.ENERGIZED, hour=8, stress_level=0.2, energy_level=0.9
        )

        assert titles(recommendations) == [
            "Tackle your most challenging task",
            "Set 3 key priorities for today",
        ]

    def test_stress_rule_precedes_time_rule(self, generator):
        recommendations = generator.generate(
            Mood.STRESSED, hour=15, stress_level=0.9, energy_level=0.3
        )

        assert titles(recommendations) == [
            "5-minute breathing break",
            "Creative break session",
        ]
        assert recommendations[0].provenance == Provenance.STRESS
        assert recommendations[0].confidence == 0.90

    def test_low_energy(self, generator):
        recommendations = generator.generate(
            Mood.TIRED, hour=22, stress_level=0.6, energy_level=0.2
        )

        assert titles(recommendations) == ["Simple organizing session"]

    @pytest.mark.parametrize(
        "hour,energy,stress",
        [
            (12, 0.7, 0.1),  # energy must exceed 0.7
            (12, 0.3, 0.1),  # and fall below 0.3
            (12, 0.5, 0.6),  # stress must exceed 0.6
            (10, 0.5, 0.1),  # morning window is 06-09
            (5, 0.5, 0.1),
            (17, 0.5, 0.1),  # afternoon window is 14-16
            (13, 0.5, 0.1),
        ],
    )
    def test_thresholds_are_strict(self, generator, hour, energy, stress):
        recommendations = generator.generate(
            Mood.CALM, hour=hour, stress_level=stress, energy_level=energy
        )
        assert titles(recommendations) == [catalog.FALLBACKS[Mood.CALM]["title"]]


class TestFallback:
    @pytest.mark.parametrize("mood", list(Mood))
    def test_never_empty_for_any_mood(self, generator, mood):
        recommendations = generator.generate(mood, hour=12, stress_level=0.1, energy_level=0.5)

        assert len(recommendations) == 1
        assert recommendations[0].title == catalog.FALLBACKS[mood]["title"]

    def test_anxious_fallback_is_calming(self, generator):
        recommendations = generator.generate(
            Mood.ANXIOUS, hour=12, stress_level=0.1, energy_level=0.5
        )
        assert recommendations[0].affect == Affect.CALMING


class TestGenerateForContext:
    def test_reads_levels_from_context(self, generator):
        context = UserContext(
            hour=7,
            day_of_week=2,
            mood=Mood.FOCUSED,
            recent_completion_rate=0.5,
            energy_level=0.7,
            stress_level=0.3,
        )

        assert titles(generator.generate_for_context(context)) == [
            "Set 3 key priorities for today"
        ]


class TestStarter:
    @pytest.mark.parametrize("mood", list(Mood))
    def test_three_fixed_items_per_mood(self, generator, mood):
        recommendations = generator.starter(mood)

        assert len(recommendations) == 3
        assert titles(recommendations) == [entry["title"] for entry in catalog.STARTERS[mood]]

    def test_returns_fresh_instances(self, generator):
        first = generator.starter(Mood.CALM)
        first[0].title = "changed"

        assert generator.starter(Mood.CALM)[0].title != "changed"


class TestAffectNotes:
    def test_every_candidate_is_annotated(self, generator):
        recommendations = generator.generate(
            Mood.STRESSED, hour=8, stress_level=0.9, energy_level=0.2
        )
        recommendations += generator.starter(Mood.ENERGIZED)

        assert recommendations
        assert all(r.affect_note for r in recommendations)
