"""Literal recommendation tables.

Rule items, the per-mood fallback and the per-mood starter sets. Each
entry is a plain kwargs dict; ``build`` turns it into a fresh
Recommendation so callers never share mutable objects between passes.
"""

from __future__ import annotations

from typing import Any

from moodo.models import Affect, Category, Mood, Priority, Provenance, Recommendation


def build(entry: dict[str, Any]) -> Recommendation:
    return Recommendation(**entry)


# ─────────────────────────────────────────────────────────────────────────────
# Context rule items
# ─────────────────────────────────────────────────────────────────────────────

HIGH_ENERGY = {
    "title": "Tackle your most challenging task",
    "description": (
        "Peak performance tip: your energy is at 70%+ - this is the golden hour for your "
        "hardest work. Break it into 25-minute sprints with 5-minute breaks."
    ),
    "category": Category.WORK,
    "priority": Priority.HIGH,
    "duration_minutes": 45,
    "confidence": 0.85,
    "affect": Affect.FOCUSED,
    "rationale": "Energy level optimal for complex tasks",
    "provenance": Provenance.ENERGY,
}

LOW_ENERGY = {
    "title": "Simple organizing session",
    "description": (
        "Low-energy win: pick one small area (desk drawer, phone photos, or email inbox). "
        "15 minutes of organizing gives you a sense of accomplishment without draining you further."
    ),
    "category": Category.PERSONAL,
    "priority": Priority.LOW,
    "duration_minutes": 15,
    "confidence": 0.80,
    "affect": Affect.ROUTINE,
    "rationale": "Low energy state benefits from easy wins",
    "provenance": Provenance.ENERGY,
}

HIGH_STRESS = {
    "title": "5-minute breathing break",
    "description": (
        "Your stress level is high. Try box breathing - 4 counts in, hold 4, out 4, hold 4. "
        "This resets your nervous system fast."
    ),
    "category": Category.HEALTH,
    "priority": Priority.HIGH,
    "duration_minutes": 5,
    "confidence": 0.90,
    "affect": Affect.CALMING,
    "rationale": "High stress requires immediate intervention",
    "provenance": Provenance.STRESS,
}

MORNING_PLANNING = {
    "title": "Set 3 key priorities for today",
    "description": "Morning planning maximizes daily success",
    "category": Category.WORK,
    "priority": Priority.MEDIUM,
    "duration_minutes": 10,
    "confidence": 0.82,
    "affect": Affect.FOCUSED,
    "rationale": "Morning planning correlates with higher productivity",
    "provenance": Provenance.TEMPORAL,
}

AFTERNOON_CREATIVE = {
    "title": "Creative break session",
    "description": "Afternoon creativity window detected",
    "category": Category.CREATIVE,
    "priority": Priority.MEDIUM,
    "duration_minutes": 20,
    "confidence": 0.76,
    "affect": Affect.CREATIVE,
    "rationale": "Post-lunch period optimal for creative thinking",
    "provenance": Provenance.TEMPORAL,
}


# ─────────────────────────────────────────────────────────────────────────────
# Fallback: exactly one per mood, used when no rule fired
# ─────────────────────────────────────────────────────────────────────────────

FALLBACKS: dict[Mood, dict[str, Any]] = {
    Mood.ENERGIZED: {
        "title": "Plan your most important goal today",
        "description": "Your energy is high - perfect time for strategic planning and goal-setting.",
        "category": Category.WORK,
        "priority": Priority.HIGH,
        "duration_minutes": 20,
        "confidence": 0.80,
        "affect": Affect.FOCUSED,
        "rationale": "Energized mood optimal for planning",
        "provenance": Provenance.BEHAVIOR,
    },
    Mood.FOCUSED: {
        "title": "Deep work on priority project",
        "description": "Perfect focus state - ideal for concentrated, uninterrupted work.",
        "category": Category.WORK,
        "priority": Priority.HIGH,
        "duration_minutes": 45,
        "confidence": 0.85,
        "affect": Affect.FOCUSED,
        "rationale": "Focused mood enables deep concentration",
        "provenance": Provenance.BEHAVIOR,
    },
    Mood.CREATIVE: {
        "title": "Brainstorm and ideate",
        "description": "Creative energy detected - perfect for generating new ideas and solutions.",
        "category": Category.CREATIVE,
        "priority": Priority.MEDIUM,
        "duration_minutes": 30,
        "confidence": 0.80,
        "affect": Affect.CREATIVE,
        "rationale": "Creative mood optimal for ideation",
        "provenance": Provenance.BEHAVIOR,
    },
    Mood.CALM: {
        "title": "Organize and plan",
        "description": "Peaceful energy is perfect for thoughtful organization and planning.",
        "category": Category.PERSONAL,
        "priority": Priority.MEDIUM,
        "duration_minutes": 25,
        "confidence": 0.75,
        "affect": Affect.ROUTINE,
        "rationale": "Calm mood enables mindful organization",
        "provenance": Provenance.BEHAVIOR,
    },
    Mood.TIRED: {
        "title": "Simple admin tasks",
        "description": "Low energy - perfect for easy, routine tasks that still feel productive.",
        "category": Category.WORK,
        "priority": Priority.LOW,
        "duration_minutes": 15,
        "confidence": 0.70,
        "affect": Affect.ROUTINE,
        "rationale": "Tired state suitable for easy tasks",
        "provenance": Provenance.ENERGY,
    },
    Mood.STRESSED: {
        "title": "Take a mindful break",
        "description": "Stress relief is the priority - try 5 minutes of deep breathing.",
        "category": Category.HEALTH,
        "priority": Priority.HIGH,
        "duration_minutes": 5,
        "confidence": 0.90,
        "affect": Affect.CALMING,
        "rationale": "High stress requires immediate intervention",
        "provenance": Provenance.STRESS,
    },
    Mood.ANXIOUS: {
        "title": "Ground yourself for five minutes",
        "description": "Name 5 things you can see, 4 you can hear, 3 you can touch. Slow breaths in between.",
        "category": Category.HEALTH,
        "priority": Priority.MEDIUM,
        "duration_minutes": 5,
        "confidence": 0.85,
        "affect": Affect.CALMING,
        "rationale": "Grounding eases anxious thoughts",
        "provenance": Provenance.STRESS,
    },
}


# ─────────────────────────────────────────────────────────────────────────────
# Starter sets: three per mood, for first-time users with no tasks yet
# ─────────────────────────────────────────────────────────────────────────────

STARTERS: dict[Mood, tuple[dict[str, Any], ...]] = {
    Mood.ENERGIZED: (
        {
            "title": "Plan your day with 3 key goals",
            "description": (
                "Tip: start with your biggest challenge first - your energy is peak right now. "
                "Break complex goals into 15-minute focused blocks."
            ),
            "category": Category.WORK,
            "priority": Priority.HIGH,
            "duration_minutes": 15,
            "confidence": 0.90,
            "affect": Affect.FOCUSED,
            "rationale": "Energized mood optimal for goal setting",
            "provenance": Provenance.BEHAVIOR,
        },
        {
            "title": "Tackle your most important project",
            "description": (
                "Pro tip: use the Pomodoro technique - 25 minutes focused work, 5 minute break. "
                "Your high energy can sustain 2-3 cycles easily."
            ),
            "category": Category.WORK,
            "priority": Priority.HIGH,
            "duration_minutes": 45,
            "confidence": 0.85,
            "affect": Affect.ENERGIZING,
            "rationale": "High energy ideal for challenging tasks",
            "provenance": Provenance.ENERGY,
        },
        {
            "title": "Quick workout or walk",
            "description": (
                "Energy hack: 20 minutes of movement now will give you 2+ hours of sustained "
                "focus later. Try jumping jacks or a brisk walk."
            ),
            "category": Category.HEALTH,
            "priority": Priority.MEDIUM,
            "duration_minutes": 20,
            "confidence": 0.80,
            "affect": Affect.ENERGIZING,
            "rationale": "Movement sustains energy levels",
            "provenance": Provenance.ENERGY,
        },
    ),
    Mood.FOCUSED: (
        {
            "title": "Deep work session on priority task",
            "description": (
                "Focus hack: turn off all notifications, use noise-canceling headphones, and set "
                "a 90-minute timer. Your brain is in peak concentration mode."
            ),
            "category": Category.WORK,
            "priority": Priority.HIGH,
            "duration_minutes": 60,
            "confidence": 0.92,
            "affect": Affect.FOCUSED,
            "rationale": "Focused mood enables deep concentration",
            "provenance": Provenance.BEHAVIOR,
        },
        {
            "title": "Learn something new for 25 minutes",
            "description": (
                "Learning tip: your focused state is perfect for absorbing complex information. "
                "Try active recall - read, then explain it out loud."
            ),
            "category": Category.WORK,
            "priority": Priority.MEDIUM,
            "duration_minutes": 25,
            "confidence": 0.85,
            "affect": Affect.FOCUSED,
            "rationale": "Focused state ideal for learning",
            "provenance": Provenance.BEHAVIOR,
        },
        {
            "title": "Organize your digital workspace",
            "description": (
                "Organization strategy: start with your desktop, then downloads folder. "
                "A clean digital space = a clear mind for tomorrow's focus."
            ),
            "category": Category.PERSONAL,
            "priority": Priority.MEDIUM,
            "duration_minutes": 30,
            "confidence": 0.78,
            "affect": Affect.ROUTINE,
            "rationale": "Focus enables thorough organization",
            "provenance": Provenance.BEHAVIOR,
        },
    ),
    Mood.CREATIVE: (
        {
            "title": "Brainstorm new project ideas",
            "description": (
                "Creative tip: set a 30-minute timer and aim for 50 ideas - quantity over "
                "quality. Your creative flow is at its peak right now!"
            ),
            "category": Category.CREATIVE,
            "priority": Priority.HIGH,
            "duration_minutes": 30,
            "confidence": 0.90,
            "affect": Affect.CREATIVE,
            "rationale": "Creative mood optimal for idea generation",
            "provenance": Provenance.BEHAVIOR,
        },
        {
            "title": "Write in a journal or blog",
            "description": (
                "Writing hack: start with 'stream of consciousness' - write whatever comes to "
                "mind. Your creative mind will naturally find interesting connections."
            ),
            "category": Category.PERSONAL,
            "priority": Priority.MEDIUM,
            "duration_minutes": 20,
            "confidence": 0.85,
            "affect": Affect.CREATIVE,
            "rationale": "Creative state enhances writing flow",
            "provenance": Provenance.BEHAVIOR,
        },
        {
            "title": "Sketch or doodle for inspiration",
            "description": (
                "Creative boost: don't worry about 'good' art - just let your hand move freely. "
                "Visual thinking often sparks breakthrough ideas."
            ),
            "category": Category.CREATIVE,
            "priority": Priority.LOW,
            "duration_minutes": 15,
            "confidence": 0.75,
            "affect": Affect.CREATIVE,
            "rationale": "Creative mood benefits from visual expression",
            "provenance": Provenance.BEHAVIOR,
        },
    ),
    Mood.CALM: (
        {
            "title": "Organize your living space",
            "description": (
                "Calm energy tip: start with one drawer or shelf. Your peaceful state makes it "
                "easy to decide what to keep vs. donate. 10 minutes can transform a space."
            ),
            "category": Category.PERSONAL,
            "priority": Priority.MEDIUM,
            "duration_minutes": 30,
            "confidence": 0.88,
            "affect": Affect.ROUTINE,
            "rationale": "Calm state enables mindful organization",
            "provenance": Provenance.BEHAVIOR,
        },
        {
            "title": "Review and plan your week",
            "description": (
                "Planning wisdom: your calm mind can see the big picture clearly. List your wins "
                "from this week, then set 3 priorities for next week."
            ),
            "category": Category.WORK,
            "priority": Priority.MEDIUM,
            "duration_minutes": 20,
            "confidence": 0.82,
            "affect": Affect.FOCUSED,
            "rationale": "Calm enables thoughtful planning",
            "provenance": Provenance.BEHAVIOR,
        },
        {
            "title": "Call a friend or family member",
            "description": (
                "Connection tip: your calm energy is contagious. Share something you're grateful "
                "for - it deepens relationships and boosts both your moods."
            ),
            "category": Category.PERSONAL,
            "priority": Priority.LOW,
            "duration_minutes": 15,
            "confidence": 0.78,
            "affect": Affect.CALMING,
            "rationale": "Calm mood perfect for meaningful connections",
            "provenance": Provenance.BEHAVIOR,
        },
    ),
    Mood.TIRED: (
        {
            "title": "Simple admin tasks (emails, filing)",
            "description": (
                "Low-energy strategy: batch similar tasks together. Reply to 5 emails, then file "
                "documents. Small wins build momentum when energy is low."
            ),
            "category": Category.WORK,
            "priority": Priority.LOW,
            "duration_minutes": 20,
            "confidence": 0.85,
            "affect": Affect.ROUTINE,
            "rationale": "Tired state suitable for easy, automatic tasks",
            "provenance": Provenance.ENERGY,
        },
        {
            "title": "Gentle stretching or light movement",
            "description": (
                "Energy revival: try 5 neck rolls, 10 shoulder shrugs, and touch your toes 3 "
                "times. Movement increases blood flow and can restore alertness."
            ),
            "category": Category.HEALTH,
            "priority": Priority.MEDIUM,
            "duration_minutes": 10,
            "confidence": 0.80,
            "affect": Affect.CALMING,
            "rationale": "Light activity helps when tired",
            "provenance": Provenance.ENERGY,
        },
        {
            "title": "Listen to a podcast while resting",
            "description": (
                "Passive learning hack: choose educational content you enjoy. Your brain can "
                "absorb information even in rest mode - guilt-free productivity!"
            ),
            "category": Category.PERSONAL,
            "priority": Priority.LOW,
            "duration_minutes": 25,
            "confidence": 0.75,
            "affect": Affect.CALMING,
            "rationale": "Passive learning matches low energy",
            "provenance": Provenance.ENERGY,
        },
    ),
    Mood.STRESSED: (
        {
            "title": "5-minute breathing exercise",
            "description": (
                "Instant relief: try 4-7-8 breathing - inhale for 4, hold for 7, exhale for 8. "
                "Repeat 4 times. This activates your calm nervous system immediately."
            ),
            "category": Category.HEALTH,
            "priority": Priority.HIGH,
            "duration_minutes": 5,
            "confidence": 0.95,
            "affect": Affect.CALMING,
            "rationale": "Breathing exercises immediately reduce stress",
            "provenance": Provenance.STRESS,
        },
        {
            "title": "Write down what's bothering you",
            "description": (
                "Brain dump technique: set a timer for 10 minutes and write everything that's "
                "stressing you. Don't edit - just dump it all out. Your mind will feel clearer."
            ),
            "category": Category.PERSONAL,
            "priority": Priority.HIGH,
            "duration_minutes": 10,
            "confidence": 0.88,
            "affect": Affect.CALMING,
            "rationale": "Writing helps process stress",
            "provenance": Provenance.STRESS,
        },
        {
            "title": "Take a short walk outside",
            "description": (
                "Nature reset: even 15 minutes outdoors lowers cortisol levels. Focus on your "
                "feet touching the ground - this grounds your nervous system."
            ),
            "category": Category.HEALTH,
            "priority": Priority.MEDIUM,
            "duration_minutes": 15,
            "confidence": 0.85,
            "affect": Affect.CALMING,
            "rationale": "Nature and movement are proven stress relievers",
            "provenance": Provenance.STRESS,
        },
    ),
    Mood.ANXIOUS: (
        {
            "title": "Slow breathing for three minutes",
            "description": (
                "Calming tip: breathe in for 4, out for 6. A longer exhale tells your body it is "
                "safe. Three minutes is enough to take the edge off."
            ),
            "category": Category.HEALTH,
            "priority": Priority.HIGH,
            "duration_minutes": 3,
            "confidence": 0.92,
            "affect": Affect.CALMING,
            "rationale": "Paced breathing reduces anxiety quickly",
            "provenance": Provenance.STRESS,
        },
        {
            "title": "Write down one worry and one next step",
            "description": (
                "Worry reframe: name the thing on your mind, then write the smallest step you "
                "could take about it. Keep it to two lines."
            ),
            "category": Category.PERSONAL,
            "priority": Priority.MEDIUM,
            "duration_minutes": 10,
            "confidence": 0.84,
            "affect": Affect.CALMING,
            "rationale": "Externalizing worries lowers their intensity",
            "provenance": Provenance.STRESS,
        },
        {
            "title": "Tidy one small surface",
            "description": (
                "Grounding task: clear a single shelf or your desk. Simple, visible progress "
                "gives an anxious mind something steady to hold on to."
            ),
            "category": Category.PERSONAL,
            "priority": Priority.LOW,
            "duration_minutes": 10,
            "confidence": 0.78,
            "affect": Affect.ROUTINE,
            "rationale": "Routine tasks provide a sense of control",
            "provenance": Provenance.BEHAVIOR,
        },
    ),
}
