#!/usr/bin/env python3
"""
Moodo Command Line Interface

Main entry point for the `moodo` command.

Usage:
    moodo classify "Tax return deadline!"               # Affect + confidence
    moodo capacity --mood tired --hour 22               # Adaptive list size
    moodo schedule --mood focused --tasks tasks.json    # Short list from a task file
    moodo recommend --mood stressed --hour 15           # Ranked suggestions
    moodo recommend --mood calm --starter               # First-time suggestions
    moodo feedback --category health --affect calming --accepted
    moodo --version                                     # Show version

All commands print JSON. A non-zero exit code means "success": false.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path

from moodo import __version__
from moodo.config_models import load_config
from moodo.logging_config import configure_from_settings
from moodo.models import Affect, Category, Mood, Task


def _print(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


def _fail(error: str) -> int:
    _print({"success": False, "error": error})
    return 1


def _reference_time(hour: int | None) -> datetime:
    now = datetime.now()
    if hour is None:
        return now
    return now.replace(hour=hour, minute=0, second=0, microsecond=0)


def _load_tasks(path: str | None) -> list[Task]:
    if not path:
        return []
    with open(Path(path)) as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get("tasks") or []
    if not isinstance(raw, list) or not all(isinstance(entry, dict) for entry in raw):
        raise ValueError(f"{path}: expected a list of task objects")
    return [Task.from_dict(entry) for entry in raw]


def _build_engine(args, tasks: list[Task] | None = None):
    from moodo.engine import RecommendationEngine
    from moodo.stores import InMemoryMoodStore, InMemoryTaskStore

    mood_store = InMemoryMoodStore(args.mood) if getattr(args, "mood", None) else InMemoryMoodStore()
    return RecommendationEngine(InMemoryTaskStore(tasks), mood_store)


def cmd_version(args):
    """Handle --version flag."""
    print(f"moodo {__version__}")


def cmd_classify(args):
    """Classify a task title into an affect tag."""
    from moodo.affect.classifier import AffectClassifier

    text = " ".join(args.text)
    analysis = AffectClassifier().analyze(text)
    _print({"success": True, "text": text, **analysis.to_dict()})
    return 0


def cmd_capacity(args):
    """Show the adaptive list size for a mood at an hour."""
    from moodo.scheduling.selector import capacity, time_multiplier

    try:
        mood = Mood.parse(args.mood)
    except ValueError as e:
        return _fail(str(e))

    hour = args.hour if args.hour is not None else datetime.now().hour
    if not 0 <= hour <= 23:
        return _fail(f"Invalid hour: {hour}. Must be 0-23")

    _print({
        "success": True,
        "mood": mood.value,
        "hour": hour,
        "multiplier": time_multiplier(hour),
        "capacity": capacity(mood, hour),
    })
    return 0


def cmd_schedule(args):
    """Pick a mood-appropriate short list from a JSON task file."""
    try:
        Mood.parse(args.mood)
        now = _reference_time(args.hour)
        tasks = _load_tasks(args.tasks)
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        return _fail(str(e))

    engine = _build_engine(args, tasks)
    selected = engine.schedule(max_count=args.max, now=now)

    _print({
        "success": True,
        "mood": engine.current_mood().value,
        "hour": now.hour,
        "total": len(tasks),
        "tasks": [task.to_dict() for task in selected],
    })
    return 0


def cmd_recommend(args):
    """Run one recommendation pass and print the ranked result."""
    try:
        if args.mood:
            Mood.parse(args.mood)
        now = _reference_time(args.hour)
    except ValueError as e:
        return _fail(str(e))

    engine = _build_engine(args)
    recommendations = asyncio.run(engine.generate(starter=args.starter, now=now))

    if recommendations is None:
        return _fail("Generation already in progress")

    _print({
        "success": True,
        "context": engine.context(now).to_dict(),
        "confidence": round(engine.last_confidence, 3),
        "recommendations": [r.to_dict() for r in recommendations],
    })
    return 0


def cmd_feedback(args):
    """Record an accept/reject event and persist it."""
    try:
        category = Category.parse(args.category)
        affect = Affect.parse(args.affect)
    except ValueError as e:
        return _fail(str(e))

    engine = _build_engine(args)

    async def persist():
        await engine.load_learning_data()
        record = engine.personalization.record_interaction(category, affect, args.accepted)
        saved = await engine.save_learning_data()
        return record, saved

    record, saved = asyncio.run(persist())
    if not saved:
        return _fail("Feedback recorded but could not be saved")

    _print({
        "success": True,
        "interaction": record.to_dict(),
        "stats": engine.personalization.stats(),
    })
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="moodo",
        description="Moodo - mood-adaptive task scheduling and recommendations",
    )
    parser.add_argument(
        "--version", "-V", action="store_true", help="Show version and exit"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    mood_help = f"Current mood ({', '.join(m.value for m in Mood)})"

    # Classify subcommand
    classify_parser = subparsers.add_parser(
        "classify", help="Classify a task title into an affect tag"
    )
    classify_parser.add_argument("text", nargs="+", help="Task title")
    classify_parser.set_defaults(func=cmd_classify)

    # Capacity subcommand
    capacity_parser = subparsers.add_parser(
        "capacity", help="Show how many tasks fit this mood and hour"
    )
    capacity_parser.add_argument("--mood", required=True, help=mood_help)
    capacity_parser.add_argument("--hour", type=int, default=None, help="Hour of day (0-23)")
    capacity_parser.set_defaults(func=cmd_capacity)

    # Schedule subcommand
    schedule_parser = subparsers.add_parser(
        "schedule", help="Pick a short list of tasks for the current mood"
    )
    schedule_parser.add_argument("--mood", required=True, help=mood_help)
    schedule_parser.add_argument(
        "--tasks", required=False, help="JSON file with a list of tasks"
    )
    schedule_parser.add_argument(
        "--max", type=int, default=None, help="Explicit size limit (default: adaptive)"
    )
    schedule_parser.add_argument("--hour", type=int, default=None, help="Hour of day (0-23)")
    schedule_parser.set_defaults(func=cmd_schedule)

    # Recommend subcommand
    recommend_parser = subparsers.add_parser(
        "recommend", help="Generate ranked recommendations"
    )
    recommend_parser.add_argument("--mood", required=False, help=mood_help)
    recommend_parser.add_argument("--hour", type=int, default=None, help="Hour of day (0-23)")
    recommend_parser.add_argument(
        "--starter", action="store_true", help="Starter suggestions for first-time users"
    )
    recommend_parser.set_defaults(func=cmd_recommend)

    # Feedback subcommand
    feedback_parser = subparsers.add_parser(
        "feedback", help="Record whether a suggestion was accepted"
    )
    feedback_parser.add_argument("--category", required=True, help="Recommendation category")
    feedback_parser.add_argument("--affect", required=True, help="Recommendation affect")
    outcome = feedback_parser.add_mutually_exclusive_group(required=True)
    outcome.add_argument("--accepted", dest="accepted", action="store_true")
    outcome.add_argument("--rejected", dest="accepted", action="store_false")
    feedback_parser.set_defaults(func=cmd_feedback)

    args = parser.parse_args()

    # Handle --version at top level
    if args.version:
        cmd_version(args)
        return

    # If no command given, show help
    if not args.command:
        parser.print_help()
        return

    configure_from_settings(load_config().logging)

    # Execute command
    result = args.func(args)

    # Commands may return an exit code
    if isinstance(result, int) and result != 0:
        sys.exit(result)


if __name__ == "__main__":
    main()
