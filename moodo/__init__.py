"""Moodo - Mood-adaptive task scheduling and recommendations

Philosophy:
    Match the work to the person, not the person to the work.
    A stressed brain shouldn't be handed the scariest task on the list.
    Short, right-sized lists beat long, exhaustive ones.

Components:
    affect/: Classify task titles into affect tags (energizing, calming, ...)
    scheduling/: Score tasks against the current mood and pick a short list
    recommendations/: Generate and rank suggestions from context rules
    learning/: Remember accept/reject feedback and personalize ranking
    engine.py: Wire the pieces together behind a single-pass guard

Usage:
    from moodo.engine import RecommendationEngine
    from moodo.stores import InMemoryMoodStore, InMemoryTaskStore

    engine = RecommendationEngine(InMemoryTaskStore(), InMemoryMoodStore("focused"))
    recommendations = await engine.generate_recommendations()

Configuration: args/moodo.yaml
"""

from pathlib import Path

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
ARGS_DIR = PROJECT_ROOT / "args"

# Database paths
DB_PATH = DATA_DIR / "moodo.db"

__version__ = "0.1.0"

__all__ = [
    "PROJECT_ROOT",
    "DATA_DIR",
    "ARGS_DIR",
    "DB_PATH",
    "__version__",
]
