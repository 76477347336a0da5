"""Mood compatibility table.

One entry per mood. The numbers here are load-bearing: the scorer, the
selector and the ranker all read them directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from moodo.models import Affect, Mood, Priority


@dataclass(frozen=True)
class MoodProfile:
    preferred_affects: tuple[Affect, ...]
    preferred_priorities: tuple[Priority, ...]
    base_count: int
    energy_level: float
    stress_level: float


MOOD_PROFILES: dict[Mood, MoodProfile] = {
    Mood.ENERGIZED: MoodProfile(
        preferred_affects=(Affect.ENERGIZING, Affect.CREATIVE, Affect.FOCUSED),
        preferred_priorities=(Priority.HIGH, Priority.MEDIUM),
        base_count=8,
        energy_level=0.9,
        stress_level=0.2,
    ),
    Mood.FOCUSED: MoodProfile(
        preferred_affects=(Affect.FOCUSED, Affect.ROUTINE),
        preferred_priorities=(Priority.HIGH, Priority.MEDIUM),
        base_count=6,
        energy_level=0.7,
        stress_level=0.3,
    ),
    Mood.CREATIVE: MoodProfile(
        preferred_affects=(Affect.CREATIVE, Affect.CALMING, Affect.FOCUSED),
        preferred_priorities=(Priority.MEDIUM, Priority.HIGH),
        base_count=7,
        energy_level=0.6,
        stress_level=0.2,
    ),
    Mood.CALM: MoodProfile(
        preferred_affects=(Affect.CALMING, Affect.ROUTINE),
        preferred_priorities=(Priority.LOW, Priority.MEDIUM),
        base_count=5,
        energy_level=0.4,
        stress_level=0.1,
    ),
    Mood.TIRED: MoodProfile(
        preferred_affects=(Affect.CALMING,),
        preferred_priorities=(Priority.LOW,),
        base_count=2,
        energy_level=0.2,
        stress_level=0.6,
    ),
    Mood.STRESSED: MoodProfile(
        preferred_affects=(Affect.CALMING, Affect.ROUTINE),
        preferred_priorities=(Priority.LOW,),
        base_count=3,
        energy_level=0.3,
        stress_level=0.9,
    ),
    Mood.ANXIOUS: MoodProfile(
        preferred_affects=(Affect.CALMING, Affect.ROUTINE),
        preferred_priorities=(Priority.LOW, Priority.MEDIUM),
        base_count=4,
        energy_level=0.3,
        stress_level=0.8,
    ),
}

# Energy an activity of a given affect asks of the user
REQUIRED_ENERGY: dict[Affect, float] = {
    Affect.ENERGIZING: 0.8,
    Affect.FOCUSED: 0.7,
    Affect.CREATIVE: 0.6,
    Affect.STRESSFUL: 0.8,
    Affect.ANXIOUS: 0.8,
    Affect.ROUTINE: 0.4,
    Affect.CALMING: 0.3,
}


def get_profile(mood: Mood) -> MoodProfile:
    return MOOD_PROFILES[mood]


def required_energy(affect: Affect) -> float:
    return REQUIRED_ENERGY[affect]
